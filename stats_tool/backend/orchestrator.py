"""
Report orchestration.

run_pipeline() is the pure part: raw records in, ReportResult out.
StatsOrchestrator owns the single "current report" slot, drives the provider
fetch for each selection, and only applies a result if no newer selection
was made while the fetch was in flight.
"""
from typing import Any, Iterable, Mapping, Optional

from pydantic import BaseModel, ConfigDict

from aggregator import aggregate_monthly
from data_loader import CollectionHistoryProvider, SalesDataProvider
from eligibility import (
    ELIGIBLE_MRR,
    ELIGIBLE_PARTNER_ID,
    ELIGIBLE_YEAR,
    filter_eligible_sales,
)
from metrics import compute_chart_scale, compute_totals
from models import (
    ChartScale,
    ReportInfo,
    ReportResult,
    ReportState,
    ReportStatus,
    ReportType,
    TimeSeries,
    Totals,
)
from normalizer import (
    normalize_collection_record,
    normalize_records,
    normalize_sales_record,
)


REPORT_INFO = {
    ReportType.COLLECTION: ReportInfo(
        report=ReportType.COLLECTION,
        tab_label="Device Collections",
        chart_title="Collections per Month",
    ),
    ReportType.SALES: ReportInfo(
        report=ReportType.SALES,
        tab_label="Sales Growth (2025)",
        chart_title="New Sales (2025 - Partner 3)",
    ),
}

IDLE_MESSAGE = "Initializing..."
LOADING_MESSAGE = "Loading..."


def failure_message(report: ReportType) -> str:
    return f"Failed to load {report.value} data."


# ============================================================================
# Pure Pipeline
# ============================================================================

def run_pipeline(report: ReportType, raw_records: Iterable[Mapping[str, Any]]) -> ReportResult:
    """
    Turn a materialized batch of raw records into a chart-ready result.

    Sales records go through the eligibility filter first; both sources are
    then normalized, aggregated by month, totalled and scaled.

    Args:
        report: Which report's pipeline to run
        raw_records: Records as delivered by the report's provider

    Returns:
        ReportResult with series, totals, chart scale and a status line
    """
    raw_records = list(raw_records)

    if report == ReportType.SALES:
        eligible = filter_eligible_sales(raw_records)
        events = normalize_records(eligible, normalize_sales_record)
        status_message = (
            f"Loaded {len(raw_records)} raw, filtered to {len(eligible)} "
            f"({ELIGIBLE_YEAR}, Partner {ELIGIBLE_PARTNER_ID}, MRR {ELIGIBLE_MRR:g})."
        )
    else:
        events = normalize_records(raw_records, normalize_collection_record)
        status_message = f"Loaded {len(raw_records)} collection records."

    series = aggregate_monthly(events)
    return ReportResult(
        report=report,
        series=series,
        totals=compute_totals(series),
        chart=compute_chart_scale(series),
        status_message=status_message,
    )


# ============================================================================
# Orchestrator
# ============================================================================

class _Selection(BaseModel):
    """Everything derived for the current selection. Replaced wholesale, never mutated."""
    model_config = ConfigDict(frozen=True)

    token: int
    state: ReportState
    result: Optional[ReportResult] = None


class StatsOrchestrator:
    """
    Holds the state of the currently selected report.

    Each select() call takes a new, strictly increasing token. When the fetch
    for that selection completes, its result is applied only if the token is
    still the current one; late results from earlier selections are dropped.
    """

    def __init__(
        self,
        collection_provider: CollectionHistoryProvider,
        sales_provider: SalesDataProvider,
    ):
        self.providers = {
            ReportType.COLLECTION: collection_provider,
            ReportType.SALES: sales_provider,
        }
        self._token = 0
        self._current: Optional[_Selection] = None

    @property
    def current_report(self) -> Optional[ReportType]:
        return self._current.state.report if self._current else None

    @property
    def current_token(self) -> int:
        return self._token

    async def select(self, report: ReportType) -> ReportState:
        """
        Select a report and load it.

        Derived state from any previous selection is discarded before the
        fetch starts. Returns the state of this selection once its fetch
        finished (which may be superseded by a newer selection by then).
        """
        report = ReportType(report)
        self._token += 1
        token = self._token
        self._current = _Selection(
            token=token,
            state=ReportState(
                report=report,
                status=ReportStatus.LOADING,
                status_message=LOADING_MESSAGE,
            ),
        )

        provider = self.providers[report]
        try:
            raw_records = await provider.fetch_all()
        except Exception as exc:
            print(f"[orchestrator] {report.value} fetch failed: {exc}")
            return self._apply(
                token,
                _Selection(
                    token=token,
                    state=ReportState(
                        report=report,
                        status=ReportStatus.FAILED,
                        error_message=failure_message(report),
                        diagnostic=f"Error: {exc}",
                        status_message=f"Error: {exc}",
                    ),
                ),
            )

        result = run_pipeline(report, raw_records)
        print(f"[orchestrator] {report.value}: {result.status_message} buckets={len(result.series)} total={result.totals.All}")
        return self._apply(
            token,
            _Selection(
                token=token,
                state=ReportState(
                    report=report,
                    status=ReportStatus.READY,
                    status_message=result.status_message,
                ),
                result=result,
            ),
        )

    def _apply(self, token: int, selection: _Selection) -> ReportState:
        if token != self._token:
            print(f"[orchestrator] Discarding stale {selection.state.report.value} result (token {token}, current {self._token})")
            return selection.state
        self._current = selection
        return selection.state

    # ------------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------------

    def _result_for(self, report: ReportType) -> Optional[ReportResult]:
        current = self._current
        if current is None or current.state.report != ReportType(report):
            return None
        return current.result

    def get_state(self, report: ReportType) -> ReportState:
        current = self._current
        report = ReportType(report)
        if current is None or current.state.report != report:
            return ReportState(report=report, status=ReportStatus.IDLE, status_message=IDLE_MESSAGE)
        return current.state

    def get_time_series(self, report: ReportType) -> TimeSeries:
        result = self._result_for(report)
        return list(result.series) if result else []

    def get_totals(self, report: ReportType) -> Totals:
        result = self._result_for(report)
        return result.totals if result else Totals()

    def get_chart(self, report: ReportType) -> ChartScale:
        result = self._result_for(report)
        return result.chart if result else compute_chart_scale([])
