"""
Week-over-week comparison of a patient's two latest check-ins.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from acompanha.core.clinical import CheckinRecord

IMPROVED = "improved"
WORSENED = "worsened"
STABLE   = "stable"
NEUTRAL  = "neutral"

# (field, label, higher_is_better); None = direction-neutral
COMPARED_METRICS = (
    ("qualidade_sono", "Sleep",           True),
    ("humor",          "Mood",            True),
    ("libido",         "Libido",          True),
    ("cansaco",        "Fatigue",         False),
    ("estresse",       "Stress",          False),
    ("dor_muscular",   "Muscle Soreness", False),
    ("peso",           "Weight",          None),
)


@dataclass
class MetricChange:
    field: str
    label: str
    current: Optional[float]
    previous: Optional[float]
    diff: Optional[float]
    direction: str

    def to_dict(self) -> dict:
        return {
            "field": self.field,
            "label": self.label,
            "current": self.current,
            "previous": self.previous,
            "diff": self.diff,
            "direction": self.direction,
        }


@dataclass
class WeeklyComparison:
    is_baseline: bool
    current_date: Optional[str] = None
    previous_date: Optional[str] = None
    changes: List[MetricChange] = field(default_factory=list)
    summary: str = ""

    @property
    def improvements(self) -> List[MetricChange]:
        return [c for c in self.changes if c.direction == IMPROVED]

    @property
    def worsenings(self) -> List[MetricChange]:
        return [c for c in self.changes if c.direction == WORSENED]

    def to_dict(self) -> dict:
        return {
            "is_baseline": self.is_baseline,
            "current_date": self.current_date,
            "previous_date": self.previous_date,
            "changes": [c.to_dict() for c in self.changes],
            "summary": self.summary,
        }


def _direction(diff: Optional[float], higher_is_better: Optional[bool]) -> str:
    if diff is None or higher_is_better is None:
        return NEUTRAL
    if diff == 0:
        return STABLE
    if higher_is_better:
        return IMPROVED if diff > 0 else WORSENED
    return IMPROVED if diff < 0 else WORSENED


def _narrative(current: CheckinRecord, previous: CheckinRecord, changes: List[MetricChange]) -> str:
    parts = []

    if current.metrics.lesao and not previous.metrics.lesao:
        parts.append("New injury reported this week.")
    elif current.metrics.lesao and previous.metrics.lesao:
        parts.append("Patient continues to report an injury.")

    improvements = [c for c in changes if c.direction == IMPROVED]
    worsenings = [c for c in changes if c.direction == WORSENED]

    if improvements:
        top = max(improvements, key=lambda c: abs(c.diff))
        parts.append(f"Notable improvement in {top.label}.")
    if worsenings:
        top = max(worsenings, key=lambda c: abs(c.diff))
        parts.append(f"Watch for worsening in {top.label}.")
    if not improvements and not worsenings:
        parts.append("Stable compared with the previous week.")

    return " ".join(parts)


def compare_latest(records: Iterable[CheckinRecord]) -> WeeklyComparison:
    """
    Compare the latest check-in with the one before it.

    Fewer than two check-ins yields a baseline result with no changes.
    """
    ordered = sorted(records, key=lambda r: r.date, reverse=True)
    if len(ordered) < 2:
        return WeeklyComparison(
            is_baseline=True,
            current_date=ordered[0].date if ordered else None,
            summary="First check-in: the comparison starts with the next submission.",
        )

    current, previous = ordered[0], ordered[1]
    changes = []
    for name, label, higher_is_better in COMPARED_METRICS:
        curr_val = getattr(current.metrics, name)
        prev_val = getattr(previous.metrics, name)
        diff = None if curr_val is None or prev_val is None else curr_val - prev_val
        changes.append(MetricChange(
            field=name,
            label=label,
            current=curr_val,
            previous=prev_val,
            diff=diff,
            direction=_direction(diff, higher_is_better),
        ))

    return WeeklyComparison(
        is_baseline=False,
        current_date=current.date,
        previous_date=previous.date,
        changes=changes,
        summary=_narrative(current, previous, changes),
    )
