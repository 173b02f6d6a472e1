from eligibility import filter_eligible_sales, is_eligible_sale


def _sale(**overrides):
    record = {
        "partner_id": "3",
        "mrr_total": "399.0000",
        "date_add": "2025-06-10",
        "location_id": "5",
    }
    record.update(overrides)
    return record


def test_eligible_sale_passes():
    assert is_eligible_sale(_sale())
    assert is_eligible_sale(_sale(partner_id=3, mrr_total=399))


def test_wrong_partner_is_excluded():
    assert not is_eligible_sale(_sale(partner_id="4"))
    assert not is_eligible_sale(_sale(partner_id="abc"))
    assert not is_eligible_sale(_sale(partner_id=None))


def test_mrr_tolerance():
    assert is_eligible_sale(_sale(mrr_total="399.005"))
    assert is_eligible_sale(_sale(mrr_total="398.995"))
    assert not is_eligible_sale(_sale(mrr_total="399.02"))
    assert not is_eligible_sale(_sale(mrr_total="499.0000"))
    assert not is_eligible_sale(_sale(mrr_total=""))
    assert not is_eligible_sale(_sale(mrr_total="free"))


def test_year_is_a_substring_check():
    assert is_eligible_sale(_sale(date_add="10/06/2025"))
    assert is_eligible_sale(_sale(date_add="2025"))
    assert not is_eligible_sale(_sale(date_add="2024-12-31"))
    assert not is_eligible_sale(_sale(date_add=None))

    record = _sale()
    del record["date_add"]
    assert not is_eligible_sale(record)


def test_filter_preserves_order():
    records = [
        _sale(location_id="2"),
        _sale(partner_id="4"),
        _sale(location_id="9"),
    ]
    kept = filter_eligible_sales(records)
    assert [r["location_id"] for r in kept] == ["2", "9"]
