"""
Monthly aggregation of normalized events into a chart-ready time series.
"""
from datetime import date
from typing import Iterable

import pandas as pd

from models import MonthBucket, NormalizedEvent, Region, TimeSeries


# Fixed table so labels never depend on the runtime locale
MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

REGION_COLUMNS = [region.value for region in Region]


def month_sort_key(d: date) -> int:
    """year * 100 + zero-based month index, so the year always dominates."""
    return d.year * 100 + (d.month - 1)


def month_label(sort_key: int) -> str:
    year, month_index = divmod(sort_key, 100)
    return f"{MONTH_NAMES[month_index]} {year}"


def month_key(d: date) -> tuple[str, int]:
    """Return the (label, sort_key) pair for the month containing ``d``."""
    sort_key = month_sort_key(d)
    return month_label(sort_key), sort_key


def aggregate_monthly(events: Iterable[NormalizedEvent]) -> TimeSeries:
    """
    Fold events into per-month, per-region counts.

    Buckets only exist for months that have at least one event. The output
    is ordered by sort key, so the result is identical for any permutation
    of the same events.

    Args:
        events: Normalized events (already filtered and classified)

    Returns:
        List of MonthBucket ascending by sort_key
    """
    events = list(events)
    if not events:
        return []

    frame = pd.DataFrame(
        {
            "sort_key": [month_sort_key(e.timestamp) for e in events],
            "region": [e.region.value for e in events],
        }
    )

    counts = (
        frame.groupby(["sort_key", "region"])
        .size()
        .unstack(fill_value=0)
        .reindex(columns=REGION_COLUMNS, fill_value=0)
        .sort_index()
    )

    series: TimeSeries = []
    for sort_key, row in counts.iterrows():
        sort_key = int(sort_key)
        series.append(
            MonthBucket(
                label=month_label(sort_key),
                sort_key=sort_key,
                Gauteng=int(row[Region.GAUTENG.value]),
                Limpopo=int(row[Region.LIMPOPO.value]),
                Other=int(row[Region.OTHER.value]),
            )
        )
    return series
