"""
Business-rule filter for the sales report.
Only partner 3 customers on the 399.00 plan added in 2025 are counted.
"""
from typing import Any, Iterable, Mapping

from regions import parse_float, parse_int


ELIGIBLE_PARTNER_ID = 3
ELIGIBLE_MRR = 399.0
# Absorbs formatting noise such as "399.0000" or "398.999" from the upstream source
MRR_TOLERANCE = 0.01
ELIGIBLE_YEAR = "2025"


def is_eligible_sale(record: Mapping[str, Any]) -> bool:
    """
    Return True if a raw sales record passes every eligibility rule.

    The year check is a plain substring match on the raw date_add text,
    not a parsed-date comparison.
    """
    partner_id = parse_int(record.get("partner_id"))
    if partner_id != ELIGIBLE_PARTNER_ID:
        return False

    mrr = parse_float(record.get("mrr_total"))
    if mrr is None or abs(mrr - ELIGIBLE_MRR) >= MRR_TOLERANCE:
        return False

    date_add = record.get("date_add")
    if date_add is None:
        return False
    return ELIGIBLE_YEAR in str(date_add)


def filter_eligible_sales(records: Iterable[Mapping[str, Any]]) -> list[Mapping[str, Any]]:
    """Keep only eligible sales records, preserving input order."""
    return [r for r in records if isinstance(r, Mapping) and is_eligible_sale(r)]
