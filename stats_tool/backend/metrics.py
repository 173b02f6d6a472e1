"""
Totals and chart scale computation.
Derives per-region totals, the vertical axis maximum, bar heights, and segment proportions.
"""
import numpy as np

from models import (
    BarScale,
    ChartScale,
    MonthBucket,
    Region,
    TimeSeries,
    Totals,
)


# Axis maximum used when there is nothing to plot
DEFAULT_MAX_VALUE = 10
# 20% headroom above the tallest bar
HEADROOM = 1.2
# Smallest bar height so zero / near-zero months stay visible as a sliver
MIN_BAR_HEIGHT_PCT = 1.0
# Horizontal gridlines, top to bottom
AXIS_TICK_FRACTIONS = (1.0, 0.75, 0.5, 0.25, 0.0)


# ============================================================================
# Totals
# ============================================================================

def compute_totals(series: TimeSeries) -> Totals:
    """
    Sum region counts across every bucket of a time series.

    Args:
        series: Aggregated monthly buckets

    Returns:
        Totals with All = Gauteng + Limpopo + Other
    """
    gauteng = sum(b.Gauteng for b in series)
    limpopo = sum(b.Limpopo for b in series)
    other = sum(b.Other for b in series)

    return Totals(
        Gauteng=gauteng,
        Limpopo=limpopo,
        Other=other,
        All=gauteng + limpopo + other,
    )


def show_other(totals: Totals) -> bool:
    """The Other legend entry and card are only shown when something landed there."""
    return totals.Other > 0


# ============================================================================
# Chart Scale
# ============================================================================

def _round_half_up(x: float) -> int:
    return int(np.floor(x + 0.5))


def compute_segments(bucket: MonthBucket) -> dict[Region, float]:
    """
    Compute each region's share of a bar as a percentage of the bar total.
    Regions with a zero count are omitted rather than returned as 0.
    """
    total = bucket.total
    if total <= 0:
        return {}

    segments = {}
    for region in Region:
        count = bucket.count_for(region)
        if count > 0:
            segments[region] = count / total * 100.0
    return segments


def compute_bar_height(total: int, chart_max: int) -> float:
    """Bar height as a percentage of the plotting area, floored at MIN_BAR_HEIGHT_PCT."""
    raw = (total / chart_max * 100.0) if chart_max > 0 else 0.0
    return float(min(max(raw, MIN_BAR_HEIGHT_PCT), 100.0))


def compute_chart_scale(series: TimeSeries) -> ChartScale:
    """
    Compute the vertical scale and per-bar geometry for a monthly series.

    An empty series still gets a scaled axis based on DEFAULT_MAX_VALUE.

    Args:
        series: Aggregated monthly buckets, already sorted

    Returns:
        ChartScale with max_value, chart_max, axis ticks and one BarScale per bucket
    """
    bucket_totals = np.array([b.total for b in series], dtype=float)

    if bucket_totals.size > 0:
        max_value = int(bucket_totals.max())
    else:
        max_value = DEFAULT_MAX_VALUE

    chart_max = int(np.ceil(max_value * HEADROOM))

    bars = [
        BarScale(
            label=bucket.label,
            total=bucket.total,
            height_pct=compute_bar_height(bucket.total, chart_max),
            segments=compute_segments(bucket),
        )
        for bucket in series
    ]

    return ChartScale(
        max_value=max_value,
        chart_max=chart_max,
        axis_ticks=[_round_half_up(chart_max * f) for f in AXIS_TICK_FRACTIONS],
        show_other=show_other(compute_totals(series)),
        bars=bars,
    )
