import pytest
from metrics import (
    MIN_BAR_HEIGHT_PCT,
    compute_bar_height,
    compute_chart_scale,
    compute_segments,
    compute_totals,
    show_other,
)
from models import MonthBucket, Region, Totals


def _bucket(label, sort_key, g=0, l=0, o=0):
    return MonthBucket(label=label, sort_key=sort_key, Gauteng=g, Limpopo=l, Other=o)


def test_totals_sum_every_region():
    series = [
        _bucket("Mar 2025", 202502, g=1, l=1),
        _bucket("Apr 2025", 202503, o=1),
        _bucket("May 2025", 202504, g=4, l=2, o=3),
    ]
    totals = compute_totals(series)
    assert totals == Totals(Gauteng=5, Limpopo=3, Other=4, All=12)
    assert totals.All == sum(b.total for b in series)


def test_empty_series_uses_default_floor():
    totals = compute_totals([])
    assert totals == Totals(Gauteng=0, Limpopo=0, Other=0, All=0)

    chart = compute_chart_scale([])
    assert chart.max_value == 10
    assert chart.chart_max == 12
    assert chart.bars == []
    assert chart.axis_ticks == [12, 9, 6, 3, 0]


def test_chart_max_has_headroom():
    series = [
        _bucket("Jan 2025", 202500, g=10),
        _bucket("Feb 2025", 202501, g=20, l=5),
    ]
    chart = compute_chart_scale(series)
    assert chart.max_value == 25
    assert chart.chart_max == 30
    assert chart.chart_max >= max(b.total for b in series)


def test_bar_heights_are_bounded():
    series = [_bucket(f"M{i}", 202500 + i, g=i * 7 + 1, o=i) for i in range(10)]
    chart = compute_chart_scale(series)
    for bar, bucket in zip(chart.bars, series):
        assert MIN_BAR_HEIGHT_PCT <= bar.height_pct <= 100
        assert bar.total == bucket.total
        assert bar.height_pct == pytest.approx(max(bucket.total / chart.chart_max * 100, MIN_BAR_HEIGHT_PCT))


def test_bar_height_zero_guards():
    assert compute_bar_height(0, 0) == MIN_BAR_HEIGHT_PCT
    assert compute_bar_height(0, 12) == MIN_BAR_HEIGHT_PCT
    assert compute_bar_height(6, 12) == pytest.approx(50.0)


def test_segments_omit_zero_regions():
    segments = compute_segments(_bucket("Mar 2025", 202502, g=3, l=1))
    assert set(segments) == {Region.GAUTENG, Region.LIMPOPO}
    assert segments[Region.GAUTENG] == pytest.approx(75.0)
    assert segments[Region.LIMPOPO] == pytest.approx(25.0)
    assert compute_segments(_bucket("Mar 2025", 202502)) == {}


def test_axis_ticks_round_half_up():
    # chart_max = ceil(9 * 1.2) = 11 -> 8.25, 5.5, 2.75
    chart = compute_chart_scale([_bucket("Jan 2025", 202500, g=9)])
    assert chart.chart_max == 11
    assert chart.axis_ticks == [11, 8, 6, 3, 0]


def test_show_other_only_when_nonzero():
    assert not show_other(Totals(Gauteng=4, Limpopo=2, All=6))
    assert show_other(Totals(Other=1, All=1))


def test_chart_scale_reports_other_visibility():
    assert not compute_chart_scale([_bucket("Mar 2025", 202502, g=2, l=1)]).show_other
    assert compute_chart_scale([_bucket("Mar 2025", 202502, g=2, o=1)]).show_other
    assert not compute_chart_scale([]).show_other
