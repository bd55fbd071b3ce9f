"""
Check-in Clinical Rules

Classifies one check-in into Critical / Warning / Safe / No Data with the
ordered list of reasons that fired.

Design principles:
  - Each tier is an ordered table of (reason, predicate) descriptors.
  - Critical rules are evaluated first. If any fires, warning rules are
    not evaluated at all and the warning list stays empty.
  - A field that is None never satisfies its predicate (unknown is not 0/10).
  - Out-of-range values are compared as-is; range validation belongs to the
    form layer.
  - Thresholds are module-level constants so they can be reviewed / tuned
    without hunting through logic. Reports and presentation read them from
    here.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple, Union

from acompanha.utils import get_logger
from .base import (
    BiologicalSex,
    CheckinMetrics,
    ClinicalEvaluation,
    CriticalReason,
    Severity,
    WarningReason,
)

logger = get_logger(__name__)

# ── Thresholds ────────────────────────────────────────────────────────────────

# Critical tier
SLEEP_CRITICAL_MAX    = 3     # qualidade_sono <= 3
FATIGUE_CRITICAL_MIN  = 9     # cansaco >= 9
SORENESS_CRITICAL_MIN = 9     # dor_muscular >= 9
MOOD_CRITICAL_MAX     = 2     # humor <= 2
LIBIDO_CRITICAL_MAX   = 2     # libido <= 2

# Warning tier
SLEEP_WARNING_MAX     = 5
SORENESS_WARNING_MIN  = 7
FATIGUE_WARNING_MIN   = 7
STRESS_WARNING_MIN    = 8     # stress has no critical tier
MOOD_WARNING_MAX      = 4
LIBIDO_WARNING_MAX    = 5


@dataclass(frozen=True)
class MetricThreshold:
    """Per-metric bands, shared with the period summary."""
    field: str
    higher_is_better: bool
    critical: Optional[float]
    warning: float

    def crosses(self, value: float, limit: Optional[float]) -> bool:
        if limit is None:
            return False
        return value <= limit if self.higher_is_better else value >= limit


METRIC_THRESHOLDS = {
    "qualidade_sono": MetricThreshold("qualidade_sono", True,  SLEEP_CRITICAL_MAX,    SLEEP_WARNING_MAX),
    "cansaco":        MetricThreshold("cansaco",        False, FATIGUE_CRITICAL_MIN,  FATIGUE_WARNING_MIN),
    "dor_muscular":   MetricThreshold("dor_muscular",   False, SORENESS_CRITICAL_MIN, SORENESS_WARNING_MIN),
    "estresse":       MetricThreshold("estresse",       False, None,                  STRESS_WARNING_MIN),
    "humor":          MetricThreshold("humor",          True,  MOOD_CRITICAL_MAX,     MOOD_WARNING_MAX),
    "libido":         MetricThreshold("libido",         True,  LIBIDO_CRITICAL_MAX,   LIBIDO_WARNING_MAX),
}


# ── Rule descriptors ──────────────────────────────────────────────────────────

Predicate = Callable[[CheckinMetrics, BiologicalSex], bool]


@dataclass(frozen=True)
class ClinicalRule:
    reason: Union[CriticalReason, WarningReason]
    predicate: Predicate

    def fires(self, metrics: CheckinMetrics, sex: BiologicalSex) -> bool:
        return self.predicate(metrics, sex)


def _at_most(field: str, limit: float) -> Predicate:
    def check(metrics: CheckinMetrics, sex: BiologicalSex) -> bool:
        value = getattr(metrics, field)
        return value is not None and value <= limit
    return check


def _at_least(field: str, limit: float) -> Predicate:
    def check(metrics: CheckinMetrics, sex: BiologicalSex) -> bool:
        value = getattr(metrics, field)
        return value is not None and value >= limit
    return check


def _flag_is(field: str, expected: bool, only_for: Optional[BiologicalSex] = None) -> Predicate:
    """Explicit True/False match; None never matches. Optionally sex-gated."""
    def check(metrics: CheckinMetrics, sex: BiologicalSex) -> bool:
        if only_for is not None and sex != only_for:
            return False
        return getattr(metrics, field) is expected
    return check


# Order is display order only; every rule in a tier is evaluated.
CRITICAL_RULES: Tuple[ClinicalRule, ...] = (
    ClinicalRule(CriticalReason.INJURY,           _flag_is("lesao", True)),
    ClinicalRule(CriticalReason.CYCLE_DISRUPTION, _flag_is("ciclo_menstrual_alterado", True, BiologicalSex.FEMALE)),
    ClinicalRule(CriticalReason.SLEEP,            _at_most("qualidade_sono", SLEEP_CRITICAL_MAX)),
    ClinicalRule(CriticalReason.FATIGUE,          _at_least("cansaco", FATIGUE_CRITICAL_MIN)),
    ClinicalRule(CriticalReason.SORENESS,         _at_least("dor_muscular", SORENESS_CRITICAL_MIN)),
    ClinicalRule(CriticalReason.MOOD,             _at_most("humor", MOOD_CRITICAL_MAX)),
    ClinicalRule(CriticalReason.LIBIDO,           _at_most("libido", LIBIDO_CRITICAL_MAX)),
)

WARNING_RULES: Tuple[ClinicalRule, ...] = (
    ClinicalRule(WarningReason.SLEEP,               _at_most("qualidade_sono", SLEEP_WARNING_MAX)),
    ClinicalRule(WarningReason.SORENESS,            _at_least("dor_muscular", SORENESS_WARNING_MIN)),
    ClinicalRule(WarningReason.FATIGUE,             _at_least("cansaco", FATIGUE_WARNING_MIN)),
    ClinicalRule(WarningReason.STRESS,              _at_least("estresse", STRESS_WARNING_MIN)),
    ClinicalRule(WarningReason.MOOD,                _at_most("humor", MOOD_WARNING_MAX)),
    ClinicalRule(WarningReason.LIBIDO,              _at_most("libido", LIBIDO_WARNING_MAX)),
    ClinicalRule(WarningReason.NO_MORNING_ERECTION, _flag_is("erecao_matinal", False, BiologicalSex.MALE)),
)


def _fired(rules: Tuple[ClinicalRule, ...], metrics: CheckinMetrics, sex: BiologicalSex) -> List:
    return [rule.reason for rule in rules if rule.fires(metrics, sex)]


def evaluate_clinical_status(
    metrics: Optional[CheckinMetrics],
    sex: Optional[BiologicalSex] = None,
) -> ClinicalEvaluation:
    """
    Classify one check-in.

    Args:
        metrics: The check-in snapshot, or None when the patient has none.
        sex:     Gates the cycle-disruption (female) and morning-erection
                 (male) rules. None is treated as UNKNOWN.

    Returns:
        ClinicalEvaluation. Never raises.
    """
    if metrics is None:
        return ClinicalEvaluation(status=Severity.NO_DATA)

    sex = sex or BiologicalSex.UNKNOWN

    critical = _fired(CRITICAL_RULES, metrics, sex)
    if critical:
        logger.debug(f"Clinical status: critical ({', '.join(r.value for r in critical)})")
        return ClinicalEvaluation(status=Severity.CRITICAL, critical_reasons=critical)

    warning = _fired(WARNING_RULES, metrics, sex)
    if warning:
        logger.debug(f"Clinical status: warning ({', '.join(r.value for r in warning)})")
        return ClinicalEvaluation(status=Severity.WARNING, warning_reasons=warning)

    return ClinicalEvaluation(status=Severity.SAFE)


def threshold_table() -> dict:
    """Reference view of the rule table, for the rules endpoint."""
    return {
        "metrics": [
            {
                "field": t.field,
                "direction": "at_most" if t.higher_is_better else "at_least",
                "critical": t.critical,
                "warning": t.warning,
            }
            for t in METRIC_THRESHOLDS.values()
        ],
        "flags": [
            {"field": "lesao", "when": True, "sex": None, "tier": Severity.CRITICAL.value},
            {"field": "ciclo_menstrual_alterado", "when": True, "sex": BiologicalSex.FEMALE.value,
             "tier": Severity.CRITICAL.value},
            {"field": "erecao_matinal", "when": False, "sex": BiologicalSex.MALE.value,
             "tier": Severity.WARNING.value},
        ],
    }
