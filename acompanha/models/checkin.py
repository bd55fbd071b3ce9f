"""
Monitoring API Models
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date


class CheckinInput(BaseModel):
    """One stored check-in row (storage column names). Ranges are not validated here."""
    data: Optional[str] = Field(default=None, description="Check-in date, YYYY-MM-DD or ISO timestamp")
    date: Optional[str] = Field(default=None, description="Alternative name for data, used when data is null")
    patient_id: Optional[str] = None
    qualidade_sono: Optional[float] = Field(default=None, description="Sleep quality 0-10 (higher = better)")
    cansaco: Optional[float] = Field(default=None, description="Fatigue 0-10 (higher = worse)")
    dor_muscular: Optional[float] = Field(default=None, description="Muscle soreness 0-10 (higher = worse)")
    estresse: Optional[float] = Field(default=None, description="Stress 0-10 (higher = worse)")
    humor: Optional[float] = Field(default=None, description="Mood 0-10 (higher = better)")
    libido: Optional[float] = Field(default=None, description="Libido 0-10 (higher = better)")
    erecao_matinal: Optional[bool] = None
    lesao: Optional[bool] = None
    ciclo_menstrual_alterado: Optional[bool] = None
    peso: Optional[float] = None


class EvaluationRequest(BaseModel):
    """Request for a clinical status evaluation. A null check-in yields 'no_data'."""
    checkin: Optional[CheckinInput] = None
    sexo: Optional[str] = Field(default=None, description="'M', 'F' or absent")


class EvaluationResponse(BaseModel):
    status: str
    label: str
    color: str
    badge_variant: str
    critical_reasons: List[str]
    warning_reasons: List[str]
    messages: List[str]


class RecoveryScoreRequest(BaseModel):
    checkin: CheckinInput


class RecoveryScoreResponse(BaseModel):
    score: int
    status: str
    hooper_index: float
    label: str
    color: str
    badge_variant: str
    badge_classes: str


class PatientInput(BaseModel):
    """A roster entry with its check-ins."""
    id: str
    nome: str = ""
    sexo: Optional[str] = None
    checkins: List[CheckinInput] = Field(default_factory=list)


class RosterRequest(BaseModel):
    patients: List[PatientInput]
    window_days: Optional[int] = Field(default=None, ge=0, description="Trailing window in days")
    reference_date: Optional[date] = Field(default=None, description="End of the window (defaults to today)")


class AlertResponse(BaseModel):
    patient_id: str
    patient_name: str
    severity: str
    triggering_reasons_text: str
    metric_label: str
    checkin_date: str
    reasons: List[str]
    color: str
    badge_variant: str


class AlertsResponse(BaseModel):
    alerts: List[AlertResponse]
    count: int


class RosterSummaryResponse(BaseModel):
    total_patients: int
    responded_patients: int
    response_rate: float
    critical_count: int
    warning_count: int
    alerts: List[AlertResponse]


class PatientHistoryRequest(BaseModel):
    """A single patient's check-in history."""
    checkins: List[CheckinInput]
    recent: Optional[int] = Field(default=None, ge=1, description="Check-ins included in the period summary")


class HealthResponse(BaseModel):
    """Health status response."""
    status: str
    version: str
    uptime_seconds: float
    timestamp: str
