"""
Clinical Status Layer

Classifies a single check-in into a severity tier with explainable reasons.

Usage:
    from acompanha.core.clinical import CheckinMetrics, BiologicalSex, evaluate_clinical_status

    evaluation = evaluate_clinical_status(CheckinMetrics(qualidade_sono=3), BiologicalSex.FEMALE)
    evaluation.status            # Severity.CRITICAL
    evaluation.critical_reasons  # [CriticalReason.SLEEP]
"""
from .base import (
    BiologicalSex,
    CheckinMetrics,
    CheckinRecord,
    ClinicalEvaluation,
    CriticalReason,
    Severity,
    WarningReason,
    parse_checkin_date,
)
from .rules import METRIC_THRESHOLDS, evaluate_clinical_status, threshold_table
from .messages import (
    METRIC_LABELS,
    alert_text,
    critical_risk_message,
    describe,
    reason_label,
    warning_risk_message,
)

__all__ = [
    "BiologicalSex",
    "CheckinMetrics",
    "CheckinRecord",
    "ClinicalEvaluation",
    "CriticalReason",
    "Severity",
    "WarningReason",
    "parse_checkin_date",
    "METRIC_THRESHOLDS",
    "evaluate_clinical_status",
    "threshold_table",
    "METRIC_LABELS",
    "alert_text",
    "critical_risk_message",
    "describe",
    "reason_label",
    "warning_risk_message",
]
