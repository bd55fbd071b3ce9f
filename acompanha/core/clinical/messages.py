"""
Reason labels and clinical risk messages.

Short labels are joined into alert text; the longer messages are shown in
the patient detail view next to each triggered reason.
"""
from typing import List, Union

from .base import ClinicalEvaluation, CriticalReason, Severity, WarningReason

# Alert category per tier
METRIC_LABELS = {
    Severity.CRITICAL: "Overall Health",
    Severity.WARNING:  "Monitoring",
}

REASON_LABELS = {
    CriticalReason.INJURY:            "Injury reported",
    CriticalReason.CYCLE_DISRUPTION:  "Menstrual cycle disruption",
    CriticalReason.SLEEP:             "Very poor sleep",
    CriticalReason.FATIGUE:           "Extreme fatigue",
    CriticalReason.SORENESS:          "Severe muscle soreness",
    CriticalReason.MOOD:              "Very low mood",
    CriticalReason.LIBIDO:            "Very low libido",
    WarningReason.SLEEP:               "Below-average sleep",
    WarningReason.SORENESS:            "High muscle soreness",
    WarningReason.FATIGUE:             "High fatigue",
    WarningReason.STRESS:              "High stress",
    WarningReason.MOOD:                "Low mood",
    WarningReason.LIBIDO:              "Reduced libido",
    WarningReason.NO_MORNING_ERECTION: "No morning erection",
}

CRITICAL_MESSAGES = {
    CriticalReason.INJURY: (
        "Active injury - risk of aggravation. Medical assessment and load adjustment required."
    ),
    CriticalReason.CYCLE_DISRUPTION: (
        "Hormonal disruption - possible RED-S (Relative Energy Deficiency in Sport). "
        "Urgent medical assessment."
    ),
    CriticalReason.SLEEP: (
        "Inadequate sleep - risk of chronic fatigue, reduced cognitive performance "
        "and impaired muscle recovery."
    ),
    CriticalReason.FATIGUE: (
        "Extreme fatigue - possible overtraining. Immediate load reduction recommended."
    ),
    CriticalReason.SORENESS: (
        "Severe DOMS - high injury risk. Active recovery and volume reduction required."
    ),
    CriticalReason.MOOD: (
        "Critical emotional state - risk of burnout and training dropout."
    ),
    CriticalReason.LIBIDO: (
        "Severe hormonal suppression - strong indicator of systemic overtraining."
    ),
}

WARNING_MESSAGES = {
    WarningReason.SLEEP: "Below-ideal sleep - may compromise recovery and performance.",
    WarningReason.SORENESS: "Persistent muscle soreness - monitor to avoid aggravation.",
    WarningReason.FATIGUE: "High fatigue - watch for signs of overreaching.",
    WarningReason.STRESS: "High stress - may affect immune function and recovery.",
    WarningReason.MOOD: "Low mood - monitor the athlete's psychological state.",
    WarningReason.LIBIDO: "Reduced libido - possible early sign of systemic fatigue.",
    WarningReason.NO_MORNING_ERECTION: "No morning erection - monitor hormonal balance.",
}

DEFAULT_CRITICAL_MESSAGE = "Critical metric detected."
DEFAULT_WARNING_MESSAGE = "Warning sign identified."

Reason = Union[CriticalReason, WarningReason, str]


def _coerce(reason: Reason):
    if isinstance(reason, (CriticalReason, WarningReason)):
        return reason
    for enum_cls in (CriticalReason, WarningReason):
        try:
            return enum_cls(reason)
        except ValueError:
            continue
    return None


def reason_label(reason: Reason) -> str:
    """Short display label; unknown keys are returned unchanged."""
    key = _coerce(reason)
    if key is None:
        return str(reason)
    return REASON_LABELS[key]


def critical_risk_message(reason: Reason) -> str:
    key = _coerce(reason)
    return CRITICAL_MESSAGES.get(key, DEFAULT_CRITICAL_MESSAGE)


def warning_risk_message(reason: Reason) -> str:
    key = _coerce(reason)
    return WARNING_MESSAGES.get(key, DEFAULT_WARNING_MESSAGE)


def describe(evaluation: ClinicalEvaluation) -> List[str]:
    """Risk messages for the tier that fired, in rule order."""
    if evaluation.critical_reasons:
        return [critical_risk_message(r) for r in evaluation.critical_reasons]
    return [warning_risk_message(r) for r in evaluation.warning_reasons]


def alert_text(evaluation: ClinicalEvaluation) -> str:
    """Comma-joined labels of the triggered reasons."""
    return ", ".join(reason_label(r) for r in evaluation.reasons)
