"""
Period Summary

Statistics table of the printable patient report: averages of the most
recent check-ins with a good / attention / critical label per metric.
Labels are derived from the clinical rule thresholds, not re-declared here.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

import numpy as np

from acompanha.core.clinical import METRIC_THRESHOLDS, CheckinRecord
from acompanha.core.recovery import RecoveryStatus, calculate_recovery_score, recovery_status_for
from acompanha.utils import get_logger

logger = get_logger(__name__)

DEFAULT_RECENT_CHECKINS = 4

METRIC_NAMES = {
    "qualidade_sono": "Sleep Quality",
    "cansaco":        "Fatigue",
    "estresse":       "Stress",
    "humor":          "Mood",
    "dor_muscular":   "Muscle Soreness",
    "libido":         "Libido",
}

LABEL_GOOD      = "good"
LABEL_ATTENTION = "attention"
LABEL_CRITICAL  = "critical"
LABEL_NO_DATA   = "no_data"
LABEL_NONE      = "none"


@dataclass
class MetricAverage:
    field: str
    name: str
    average: Optional[float]
    samples: int
    label: str

    def to_dict(self) -> dict:
        return {
            "field": self.field,
            "name": self.name,
            "average": self.average,
            "samples": self.samples,
            "label": self.label,
        }


@dataclass
class PeriodSummary:
    checkin_count: int
    first_date: Optional[str] = None
    last_date: Optional[str] = None
    metrics: List[MetricAverage] = field(default_factory=list)
    average_weight: Optional[float] = None
    injury_count: int = 0
    injury_label: str = LABEL_NONE
    recovery_scores: List[int] = field(default_factory=list)
    average_recovery_score: Optional[float] = None
    average_recovery_status: Optional[RecoveryStatus] = None

    @property
    def injuries_text(self) -> str:
        return f"{self.injury_count}/{self.checkin_count}"

    def metric(self, name: str) -> Optional[MetricAverage]:
        return next((m for m in self.metrics if m.field == name), None)

    def to_dict(self) -> dict:
        return {
            "checkin_count": self.checkin_count,
            "first_date": self.first_date,
            "last_date": self.last_date,
            "metrics": [m.to_dict() for m in self.metrics],
            "average_weight": self.average_weight,
            "injuries": self.injuries_text,
            "injury_label": self.injury_label,
            "recovery_scores": self.recovery_scores,
            "average_recovery_score": self.average_recovery_score,
            "average_recovery_status": (
                self.average_recovery_status.value if self.average_recovery_status else None
            ),
        }


def classify_average(field_name: str, average: Optional[float]) -> str:
    """Label an average against the critical / warning thresholds of its metric."""
    if average is None:
        return LABEL_NO_DATA
    threshold = METRIC_THRESHOLDS[field_name]
    if threshold.crosses(average, threshold.critical):
        return LABEL_CRITICAL
    if threshold.crosses(average, threshold.warning):
        return LABEL_ATTENTION
    return LABEL_GOOD


def _mean(values: List[float]) -> Optional[float]:
    # Nulls are excluded, never averaged in as zero
    if not values:
        return None
    return round(float(np.mean(values)), 1)


def most_recent(records: Iterable[CheckinRecord], count: int) -> List[CheckinRecord]:
    """The `count` latest check-ins, oldest first."""
    ordered = sorted(records, key=lambda r: r.date)
    return ordered[-count:] if count > 0 else []


def summarize_period(
    records: Iterable[CheckinRecord],
    recent: int = DEFAULT_RECENT_CHECKINS,
) -> PeriodSummary:
    """
    Build the report statistics table over the most recent check-ins.

    Args:
        records: A patient's check-ins in any order.
        recent:  How many of the latest check-ins to include.
    """
    window = most_recent(records, recent)
    if not window:
        return PeriodSummary(checkin_count=0)

    metrics = []
    for field_name, display_name in METRIC_NAMES.items():
        values = [getattr(r.metrics, field_name) for r in window]
        present = [v for v in values if v is not None]
        average = _mean(present)
        metrics.append(MetricAverage(
            field=field_name,
            name=display_name,
            average=average,
            samples=len(present),
            label=classify_average(field_name, average),
        ))

    weights = [r.metrics.peso for r in window if r.metrics.peso is not None]
    injuries = sum(1 for r in window if r.metrics.lesao)
    scores = [calculate_recovery_score(r.metrics).score for r in window]
    average_score = _mean(scores)

    logger.debug(f"Period summary over {len(window)} check-in(s): {injuries} injury report(s)")

    return PeriodSummary(
        checkin_count=len(window),
        first_date=window[0].date,
        last_date=window[-1].date,
        metrics=metrics,
        average_weight=_mean(weights),
        injury_count=injuries,
        injury_label=LABEL_NONE if injuries == 0 else LABEL_ATTENTION,
        recovery_scores=scores,
        average_recovery_score=average_score,
        average_recovery_status=recovery_status_for(average_score),
    )
