"""
Recovery Score - Hooper Index

Continuous 0-100 wellness score for trend display. Independent of the
clinical rule table: the two may disagree on the same check-in.

Formula:
    HI        = fatigue + stress + muscle_soreness + (10 - sleep)      # 0-40
    base      = 100 - HI * 2.5                                         # 0-100
    adjust    = (mood - 5) * 2 + (libido - 5) * 1
    raw       = base + adjust
    injury    -> raw - 12, then capped at 70
    score     = round(clamp(raw, 0, 100))

Missing values are replaced by the neutral midpoint (5) and a missing
injury flag by False, so a score is always produced.

Reference:
    Hooper SL, Mackinnon LT. (1995). Monitoring overtraining in athletes.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from acompanha.core.clinical.base import CheckinMetrics
from acompanha.utils import get_logger

logger = get_logger(__name__)

NEUTRAL_VALUE       = 5
HOOPER_WEIGHT       = 2.5
MOOD_WEIGHT         = 2
LIBIDO_WEIGHT       = 1
INJURY_PENALTY      = 12
INJURY_SCORE_CAP    = 70

SAFE_MIN_SCORE      = 80
WARNING_MIN_SCORE   = 60


class RecoveryStatus(str, Enum):
    SAFE     = "safe"       # >= 80
    WARNING  = "warning"    # 60-79
    CRITICAL = "critical"   # < 60


@dataclass(frozen=True)
class RecoveryResult:
    score: int
    status: RecoveryStatus
    hooper_index: float

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "status": self.status.value,
            "hooper_index": self.hooper_index,
        }


@dataclass(frozen=True)
class _ScoringInputs:
    fatigue: float
    stress: float
    muscle_soreness: float
    sleep: float
    mood: float
    libido: float
    injury: bool


def _with_neutral_defaults(metrics: CheckinMetrics) -> _ScoringInputs:
    """Neutral substitution used only by the recovery score."""
    def neutral(value):
        return NEUTRAL_VALUE if value is None else value

    return _ScoringInputs(
        fatigue=neutral(metrics.cansaco),
        stress=neutral(metrics.estresse),
        muscle_soreness=neutral(metrics.dor_muscular),
        sleep=neutral(metrics.qualidade_sono),
        mood=neutral(metrics.humor),
        libido=neutral(metrics.libido),
        injury=bool(metrics.lesao),
    )


def recovery_status_for(score: float) -> RecoveryStatus:
    if score >= SAFE_MIN_SCORE:
        return RecoveryStatus.SAFE
    if score >= WARNING_MIN_SCORE:
        return RecoveryStatus.WARNING
    return RecoveryStatus.CRITICAL


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_recovery_score(metrics: CheckinMetrics) -> RecoveryResult:
    """
    Compute the Recovery Score of one check-in.

    Args:
        metrics: Non-null check-in snapshot.

    Returns:
        RecoveryResult with the rounded score, its status and the unrounded
        Hooper Index.
    """
    inputs = _with_neutral_defaults(metrics)

    hooper_index = inputs.fatigue + inputs.stress + inputs.muscle_soreness + (10 - inputs.sleep)
    base_score = 100 - hooper_index * HOOPER_WEIGHT
    adjustment = (inputs.mood - NEUTRAL_VALUE) * MOOD_WEIGHT + (inputs.libido - NEUTRAL_VALUE) * LIBIDO_WEIGHT
    raw_score = base_score + adjustment

    if inputs.injury:
        raw_score = min(raw_score - INJURY_PENALTY, INJURY_SCORE_CAP)

    score = _round_half_up(max(0, min(100, raw_score)))
    status = recovery_status_for(score)

    logger.debug(f"Recovery score: HI={hooper_index} raw={raw_score} score={score} ({status.value})")
    return RecoveryResult(score=score, status=status, hooper_index=hooper_index)
