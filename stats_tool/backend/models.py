"""
Pydantic models for the statistics engine and API response schemas.
"""
from datetime import date
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, computed_field


# ============================================================================
# Enumerations
# ============================================================================

class Region(str, Enum):
    """Region category every record is classified into."""
    GAUTENG = "Gauteng"
    LIMPOPO = "Limpopo"
    OTHER = "Other"


class ReportType(str, Enum):
    """The two reporting views, each with its own source and pipeline."""
    COLLECTION = "collection"
    SALES = "sales"


class ReportStatus(str, Enum):
    IDLE = "Idle"
    LOADING = "Loading"
    READY = "Ready"
    FAILED = "Failed"


# ============================================================================
# Normalized Events
# ============================================================================

class NormalizedEvent(BaseModel):
    """A single record reduced to the calendar date and region it counts toward."""
    model_config = ConfigDict(frozen=True)

    timestamp: date
    region: Region


# ============================================================================
# Monthly Time Series
# ============================================================================

class MonthBucket(BaseModel):
    """Aggregated counts for one calendar month."""
    label: str  # e.g. "Mar 2025"
    sort_key: int  # year * 100 + zero-based month index
    Gauteng: int = 0
    Limpopo: int = 0
    Other: int = 0

    @property
    def total(self) -> int:
        return self.Gauteng + self.Limpopo + self.Other

    @computed_field
    @property
    def month(self) -> str:
        return self.label.split(" ")[0]

    @computed_field
    @property
    def year(self) -> str:
        return self.label.split(" ")[1]

    def count_for(self, region: Region) -> int:
        return getattr(self, region.value)


TimeSeries = list[MonthBucket]


class Totals(BaseModel):
    """Per-region sums across a time series."""
    Gauteng: int = 0
    Limpopo: int = 0
    Other: int = 0
    All: int = 0


# ============================================================================
# Chart Scaling
# ============================================================================

class BarScale(BaseModel):
    """Render-ready geometry for one stacked bar."""
    label: str
    total: int = 0
    height_pct: float = 0.0
    # Only regions with a nonzero count get a segment
    segments: dict[Region, float] = Field(default_factory=dict)


class ChartScale(BaseModel):
    """Vertical scale of the monthly bar chart."""
    max_value: int
    chart_max: int
    axis_ticks: list[int] = Field(default_factory=list)
    # Other legend entry and card are hidden when nothing landed there
    show_other: bool = False
    bars: list[BarScale] = Field(default_factory=list)


# ============================================================================
# Report Results and State
# ============================================================================

class ReportResult(BaseModel):
    """Output of one full pipeline run over a materialized batch of raw records."""
    report: ReportType
    series: TimeSeries = Field(default_factory=list)
    totals: Totals = Field(default_factory=Totals)
    chart: ChartScale
    status_message: str = ""


class ReportState(BaseModel):
    """Load state of a report as seen by the presentation layer."""
    report: ReportType
    status: ReportStatus = ReportStatus.IDLE
    error_message: Optional[str] = None
    # Internal diagnostic, not part of the stable contract
    diagnostic: Optional[str] = None
    status_message: str = ""


# ============================================================================
# API Responses
# ============================================================================

class ReportInfo(BaseModel):
    """Display metadata for one report."""
    report: ReportType
    tab_label: str
    chart_title: str


class ConfigResponse(BaseModel):
    """Response model for GET /config endpoint."""
    reports: list[ReportInfo]
    default_report: ReportType = Field(default=ReportType.COLLECTION)
    regions: list[Region] = Field(default_factory=lambda: list(Region))


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""
    status: str = "ok"
