import pytest
from models import Region
from regions import classify_location, classify_province, parse_float, parse_int


@pytest.mark.parametrize(
    "value,expected",
    [
        ("Gauteng", Region.GAUTENG),
        ("  GAUTENG province ", Region.GAUTENG),
        ("limpopo region", Region.LIMPOPO),
        ("Limpopo", Region.LIMPOPO),
        ("Western Cape", Region.OTHER),
        ("", Region.OTHER),
        ("   ", Region.OTHER),
        (None, Region.OTHER),
        (42, Region.OTHER),
    ],
)
def test_classify_province(value, expected):
    assert classify_province(value) == expected


def test_classify_province_prefers_gauteng_when_both_appear():
    assert classify_province("Limpopo / Gauteng border") == Region.GAUTENG


@pytest.mark.parametrize("code", [3, 5, 6, 7, 8, 9, 10, "3", " 10", "5.0"])
def test_classify_location_gauteng(code):
    assert classify_location(code) == Region.GAUTENG


@pytest.mark.parametrize("code", [2, 11, "2", "11"])
def test_classify_location_limpopo(code):
    assert classify_location(code) == Region.LIMPOPO


@pytest.mark.parametrize("code", [0, 1, 4, 12, 999, -3, "abc", "", None, True, "x5"])
def test_classify_location_other(code):
    assert classify_location(code) == Region.OTHER


def test_parse_int_reads_leading_integer():
    assert parse_int("5") == 5
    assert parse_int("  7 ") == 7
    assert parse_int("12abc") == 12
    assert parse_int("3.9") == 3
    assert parse_int("abc") is None
    assert parse_int(None) is None


def test_parse_float_reads_leading_number():
    assert parse_float("399.0000") == 399.0
    assert parse_float(" 398.995 ZAR") == pytest.approx(398.995)
    assert parse_float(".5") == 0.5
    assert parse_float("") is None
    assert parse_float("n/a") is None
