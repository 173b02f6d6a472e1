"""
FastAPI application for the operations statistics dashboard.
Exposes the monthly collection and sales reports to the frontend.
"""
import os
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from data_loader import build_provider
from models import (
    ChartScale,
    ConfigResponse,
    HealthResponse,
    MonthBucket,
    ReportState,
    ReportType,
    Totals,
)
from orchestrator import REPORT_INFO, StatsOrchestrator


# ============================================================================
# Orchestrator Wiring
# ============================================================================

_orchestrator: StatsOrchestrator | None = None


def get_orchestrator() -> StatsOrchestrator:
    """Get the configured orchestrator, or fail with 503 if none is set up."""
    if _orchestrator is None:
        raise HTTPException(
            status_code=503,
            detail="Statistics backend not configured.",
        )
    return _orchestrator


def set_orchestrator(orchestrator: StatsOrchestrator | None) -> None:
    global _orchestrator
    _orchestrator = orchestrator


def _resolve_path(env_var: str, default_name: str) -> Path:
    value = os.environ.get(env_var)
    if value:
        return Path(value)
    # Default: data files in project root (two levels up from backend)
    backend_dir = Path(__file__).parent
    return backend_dir.parent.parent / default_name


# ============================================================================
# Application Lifecycle
# ============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Wire the file-backed providers on startup unless already configured."""
    if _orchestrator is None:
        collection_path = _resolve_path("STATS_COLLECTION_PATH", "collection_history.csv")
        sales_path = _resolve_path("STATS_SALES_PATH", "sales_data.json")

        print(f"[startup] Collection history: {collection_path}")
        print(f"[startup] Sales data: {sales_path}")
        for path in (collection_path, sales_path):
            if not path.exists():
                print(f"WARNING: data file not found at {path}")
                print("API will start but that report will show a failed state until the file exists.")

        set_orchestrator(
            StatsOrchestrator(
                collection_provider=build_provider(collection_path, name="collection records"),
                sales_provider=build_provider(sales_path, name="sales records"),
            )
        )

    yield


# ============================================================================
# FastAPI Application
# ============================================================================

app = FastAPI(
    title="Operations Statistics API",
    description="Monthly device-collection and sales-growth reports for the operations dashboard",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://localhost:3000", "http://127.0.0.1:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# Health Check / Configuration
# ============================================================================

@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Simple health check endpoint."""
    return HealthResponse(status="ok")


@app.get("/config", response_model=ConfigResponse)
async def get_config():
    """Available reports with their tab labels and chart titles."""
    return ConfigResponse(reports=list(REPORT_INFO.values()))


# ============================================================================
# Reports
# ============================================================================

@app.post("/reports/{report}/select", response_model=ReportState)
async def select_report(report: ReportType):
    """
    Select a report and load it.
    Any earlier selection still in flight is superseded by this one.
    """
    return await get_orchestrator().select(report)


@app.get("/reports/{report}/state", response_model=ReportState)
async def get_report_state(report: ReportType):
    return get_orchestrator().get_state(report)


@app.get("/reports/{report}/series", response_model=list[MonthBucket])
async def get_report_series(report: ReportType):
    return get_orchestrator().get_time_series(report)


@app.get("/reports/{report}/totals", response_model=Totals)
async def get_report_totals(report: ReportType):
    return get_orchestrator().get_totals(report)


@app.get("/reports/{report}/chart", response_model=ChartScale)
async def get_report_chart(report: ReportType):
    return get_orchestrator().get_chart(report)


# ============================================================================
# Entry Point
# ============================================================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
