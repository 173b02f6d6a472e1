"""
Record normalization: the permissive ingestion boundary of the pipeline.

Each source gets its own adapter that turns a loosely-typed raw record into
at most one NormalizedEvent. Records without a usable date are dropped, never
raised, so a single malformed row cannot abort a batch.
"""
from datetime import date
from typing import Any, Callable, Iterable, Mapping, Optional

import pandas as pd

from models import NormalizedEvent
from regions import classify_location, classify_province


# ============================================================================
# Source Field Candidates (priority order matters)
# ============================================================================

COLLECTION_DATE_FIELDS = ("Date", "date", "created_at")
COLLECTION_PROVINCE_FIELDS = ("Province", "province")

SALES_DATE_FIELDS = ("date_add",)
SALES_LOCATION_FIELD = "location_id"


RecordNormalizer = Callable[[Mapping[str, Any]], Optional[NormalizedEvent]]


def _is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value != ""
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return False
    return True


def first_present(record: Mapping[str, Any], fields: Iterable[str]) -> Any:
    """Return the value of the first candidate field that holds a usable value."""
    for field in fields:
        value = record.get(field)
        if _is_present(value):
            return value
    return None


def parse_record_date(value: Any) -> date | None:
    """
    Parse a raw date/timestamp value into a calendar date.

    A single space is swapped for the ISO "T" separator first so that
    "2025-03-01 10:15:00" style timestamps parse the same as ISO ones.
    Returns None for anything pandas cannot read.
    """
    if not _is_present(value):
        return None

    text = str(value).replace(" ", "T", 1)
    try:
        ts = pd.to_datetime(text, errors="coerce")
    except (ValueError, TypeError, OverflowError):
        return None
    if ts is None or pd.isna(ts):
        return None
    return ts.date()


# ============================================================================
# Source Adapters
# ============================================================================

def normalize_collection_record(record: Mapping[str, Any]) -> NormalizedEvent | None:
    """Collection history row -> event, region taken from the province text."""
    parsed = parse_record_date(first_present(record, COLLECTION_DATE_FIELDS))
    if parsed is None:
        return None

    province = first_present(record, COLLECTION_PROVINCE_FIELDS)
    return NormalizedEvent(timestamp=parsed, region=classify_province(province))


def normalize_sales_record(record: Mapping[str, Any]) -> NormalizedEvent | None:
    """Sales customer row -> event, region taken from the numeric location code."""
    parsed = parse_record_date(first_present(record, SALES_DATE_FIELDS))
    if parsed is None:
        return None

    return NormalizedEvent(
        timestamp=parsed,
        region=classify_location(record.get(SALES_LOCATION_FIELD)),
    )


def normalize_records(
    records: Iterable[Mapping[str, Any]],
    normalizer: RecordNormalizer,
) -> list[NormalizedEvent]:
    """Run a source adapter over a batch, dropping records it rejects."""
    events = []
    for record in records:
        if not isinstance(record, Mapping):
            continue
        event = normalizer(record)
        if event is not None:
            events.append(event)
    return events
