"""
Roster Aggregator

Scans a patient roster, picks each patient's latest check-in inside a
trailing window, evaluates it and builds the alert feed and dashboard KPIs.

Stateless. Reads the roster passed in and allocates new result objects only.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from acompanha.core.clinical import (
    BiologicalSex,
    CheckinRecord,
    ClinicalEvaluation,
    METRIC_LABELS,
    Severity,
    alert_text,
    evaluate_clinical_status,
)
from acompanha.utils import get_logger
from acompanha.utils.exceptions import RosterDataError

logger = get_logger(__name__)

DEFAULT_WINDOW_DAYS = 7

# Alert sort order (lower = shown first)
_SEVERITY_ORDER = {
    Severity.CRITICAL: 0,
    Severity.WARNING:  1,
}


@dataclass(frozen=True)
class RosterPatient:
    """One patient with an unordered list of check-ins."""
    id: str
    name: str
    sex: BiologicalSex = BiologicalSex.UNKNOWN
    checkins: Sequence[CheckinRecord] = ()

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "RosterPatient":
        """
        Build from a stored patient row with its check-in rows nested under
        `checkins`. Accepts `nome`/`sexo` (storage) or `name`/`sex`.
        """
        patient_id = record.get("id")
        if patient_id is None or str(patient_id).strip() == "":
            raise RosterDataError("Roster entry without a patient id")
        return cls(
            id=str(patient_id),
            name=str(record.get("nome", record.get("name")) or ""),
            sex=BiologicalSex.from_code(record.get("sexo", record.get("sex"))),
            checkins=tuple(CheckinRecord.from_record(c) for c in record.get("checkins") or ()),
        )


@dataclass(frozen=True)
class AlertEntry:
    patient_id: str
    patient_name: str
    severity: Severity
    triggering_reasons_text: str
    metric_label: str
    checkin_date: str
    evaluation: Optional[ClinicalEvaluation] = field(compare=False, repr=False, default=None)

    def to_dict(self) -> dict:
        return {
            "patient_id": self.patient_id,
            "patient_name": self.patient_name,
            "severity": self.severity.value,
            "triggering_reasons_text": self.triggering_reasons_text,
            "metric_label": self.metric_label,
            "checkin_date": self.checkin_date,
            "reasons": self.evaluation.reasons if self.evaluation else [],
        }


@dataclass
class RosterSummary:
    """Dashboard KPI tiles plus the sorted alert feed."""
    total_patients: int
    responded_patients: int
    critical_count: int
    warning_count: int
    alerts: List[AlertEntry] = field(default_factory=list)

    @property
    def response_rate(self) -> float:
        if self.total_patients == 0:
            return 0.0
        return self.responded_patients / self.total_patients

    def to_dict(self) -> dict:
        return {
            "total_patients": self.total_patients,
            "responded_patients": self.responded_patients,
            "response_rate": round(self.response_rate, 4),
            "critical_count": self.critical_count,
            "warning_count": self.warning_count,
            "alerts": [a.to_dict() for a in self.alerts],
        }


def _reference_day(reference_date: Optional[date]) -> date:
    """End of the window as a calendar date; timestamps are truncated."""
    if reference_date is None:
        return date.today()
    if isinstance(reference_date, datetime):
        return reference_date.date()
    return reference_date


def recent_checkins(
    checkins: Iterable[CheckinRecord],
    window_days: int = DEFAULT_WINDOW_DAYS,
    reference_date: Optional[date] = None,
) -> List[CheckinRecord]:
    """Check-ins dated within [reference - window, reference], by calendar date."""
    if window_days < 0:
        raise RosterDataError("window_days must be >= 0", details={"window_days": window_days})
    reference = _reference_day(reference_date)
    start = reference - timedelta(days=window_days)
    return [c for c in checkins if start <= c.calendar_date <= reference]


def latest_checkin(checkins: Sequence[CheckinRecord]) -> Optional[CheckinRecord]:
    """Greatest date string; ties keep the first in original order."""
    if not checkins:
        return None
    return max(checkins, key=lambda c: c.date)


def _evaluate_patients(
    patients: Iterable[RosterPatient],
    window_days: int,
    reference_date: Optional[date],
):
    """Yield (patient, latest recent check-in, evaluation) for responders."""
    if window_days < 0:
        raise RosterDataError("window_days must be >= 0", details={"window_days": window_days})
    reference = _reference_day(reference_date)
    for patient in patients:
        latest = latest_checkin(recent_checkins(patient.checkins, window_days, reference))
        if latest is None:
            continue
        yield patient, latest, evaluate_clinical_status(latest.metrics, patient.sex)


def _build_alert(patient: RosterPatient, checkin: CheckinRecord, evaluation: ClinicalEvaluation) -> AlertEntry:
    return AlertEntry(
        patient_id=patient.id,
        patient_name=patient.name,
        severity=evaluation.status,
        triggering_reasons_text=alert_text(evaluation),
        metric_label=METRIC_LABELS[evaluation.status],
        checkin_date=checkin.date,
        evaluation=evaluation,
    )


def _sort_alerts(alerts: List[AlertEntry]) -> List[AlertEntry]:
    # Most recent first, then a stable sort by tier keeps recency within a tier
    by_date = sorted(alerts, key=lambda a: a.checkin_date, reverse=True)
    return sorted(by_date, key=lambda a: _SEVERITY_ORDER[a.severity])


def aggregate_alerts(
    patients: Iterable[RosterPatient],
    window_days: int = DEFAULT_WINDOW_DAYS,
    reference_date: Optional[date] = None,
) -> List[AlertEntry]:
    """
    Build the alert feed for a roster.

    Args:
        patients:       Roster entries, each with zero or more check-ins.
        window_days:    Trailing window, inclusive on both ends.
        reference_date: End of the window (defaults to today).

    Returns:
        AlertEntry list, Critical before Warning, most recent first within
        a tier. Safe and No Data patients never produce alerts.
    """
    alerts = [
        _build_alert(patient, latest, evaluation)
        for patient, latest, evaluation in _evaluate_patients(patients, window_days, reference_date)
        if evaluation.is_actionable
    ]
    return _sort_alerts(alerts)


def summarize_roster(
    patients: Iterable[RosterPatient],
    window_days: int = DEFAULT_WINDOW_DAYS,
    reference_date: Optional[date] = None,
) -> RosterSummary:
    """
    KPI summary for the dashboard.

    Patients without a check-in in the window are not counted as responded
    and never count as Critical or Warning.
    """
    patients = list(patients)
    responded = 0
    counts: Dict[Severity, int] = {Severity.CRITICAL: 0, Severity.WARNING: 0}
    alerts: List[AlertEntry] = []

    for patient, latest, evaluation in _evaluate_patients(patients, window_days, reference_date):
        responded += 1
        if evaluation.is_actionable:
            counts[evaluation.status] += 1
            alerts.append(_build_alert(patient, latest, evaluation))

    summary = RosterSummary(
        total_patients=len(patients),
        responded_patients=responded,
        critical_count=counts[Severity.CRITICAL],
        warning_count=counts[Severity.WARNING],
        alerts=_sort_alerts(alerts),
    )
    logger.info(
        f"Roster summary: {summary.total_patients} patients, "
        f"{summary.responded_patients} responded, "
        f"{summary.critical_count} critical, {summary.warning_count} warning",
        extra={"window_days": window_days, "reference_date": reference_date},
    )
    return summary
