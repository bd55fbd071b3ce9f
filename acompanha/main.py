"""
Acompanha Clinical Monitoring - FastAPI Application

HTTP surface over the evaluation core:
- Clinical status of a check-in
- Recovery Score (Hooper Index)
- Roster alert feed and dashboard KPIs
- Report data (period summary, weekly comparison)

Storage, authentication and notification delivery live elsewhere; every
endpoint receives the rows it needs in the request body.
"""
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from datetime import datetime
import logging

from acompanha.config import APP_NAME, APP_VERSION, CORS_ORIGINS
from acompanha.services.monitoring import MonitoringService
from acompanha.utils.exceptions import MonitoringError

from acompanha.models.checkin import (
    EvaluationRequest,
    EvaluationResponse,
    RecoveryScoreRequest,
    RecoveryScoreResponse,
    RosterRequest,
    AlertsResponse,
    RosterSummaryResponse,
    PatientHistoryRequest,
    HealthResponse,
)

logger = logging.getLogger(__name__)


# ---- FastAPI Application ----

app = FastAPI(
    title=APP_NAME,
    description="Clinical risk evaluation and recovery scoring for weekly athlete check-ins",
    version=APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

START_TIME = datetime.now()

# ---- Services ----
_monitoring_service = MonitoringService()


@app.exception_handler(MonitoringError)
async def monitoring_error_handler(request: Request, exc: MonitoringError):
    """Malformed stored rows are reported as 422 with the structured error body."""
    logger.warning(exc.message, extra={"code": exc.code, "path": request.url.path})
    return JSONResponse(status_code=422, content=exc.to_dict())


def _health() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=APP_VERSION,
        timestamp=datetime.now().isoformat(),
        uptime_seconds=(datetime.now() - START_TIME).total_seconds(),
    )


# ---- API Endpoints ----

@app.get("/", response_model=HealthResponse, tags=["Health"])
async def root():
    """API root - health check."""
    return _health()


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return _health()


@app.post("/api/v1/checkins/evaluate", response_model=EvaluationResponse, tags=["Check-ins"])
async def evaluate_checkin(request: EvaluationRequest):
    """
    Classify one check-in as critical / warning / safe, or no_data when the
    check-in is null.
    """
    checkin = request.checkin.model_dump() if request.checkin is not None else None
    return _monitoring_service.evaluate(checkin, request.sexo)


@app.post("/api/v1/checkins/recovery-score", response_model=RecoveryScoreResponse, tags=["Check-ins"])
async def recovery_score(request: RecoveryScoreRequest):
    """Recovery Score (0-100) of one check-in."""
    return _monitoring_service.recovery_score(request.checkin.model_dump())


@app.post("/api/v1/roster/alerts", response_model=AlertsResponse, tags=["Roster"])
async def roster_alerts(request: RosterRequest):
    """
    Alert feed: one entry per patient whose latest check-in in the window is
    critical or warning. Critical first, most recent first within a tier.
    """
    alerts = _monitoring_service.alerts(
        [p.model_dump() for p in request.patients],
        window_days=request.window_days,
        reference_date=request.reference_date,
    )
    logger.info(f"Alert feed: {len(alerts)} alert(s) for {len(request.patients)} patient(s)")
    return {"alerts": alerts, "count": len(alerts)}


@app.post("/api/v1/roster/summary", response_model=RosterSummaryResponse, tags=["Roster"])
async def roster_summary(request: RosterRequest):
    """Dashboard KPIs: total, responded, response rate, critical / warning counts."""
    return _monitoring_service.roster_summary(
        [p.model_dump() for p in request.patients],
        window_days=request.window_days,
        reference_date=request.reference_date,
    )


@app.post("/api/v1/patients/period-summary", tags=["Reports"])
async def period_summary(request: PatientHistoryRequest):
    """Averages of the most recent check-ins with per-metric labels."""
    return _monitoring_service.period_summary(
        [c.model_dump() for c in request.checkins],
        recent=request.recent,
    )


@app.post("/api/v1/patients/weekly-comparison", tags=["Reports"])
async def weekly_comparison(request: PatientHistoryRequest):
    """Latest check-in compared with the previous one."""
    return _monitoring_service.weekly_comparison([c.model_dump() for c in request.checkins])


@app.get("/api/v1/rules", tags=["Reference"])
async def list_rules():
    """
    Threshold table and sex-gated rules used by the clinical evaluation.
    """
    return _monitoring_service.rules()


# ---- Run with uvicorn ----
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
