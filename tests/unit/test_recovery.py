"""
Unit Tests for the Recovery Score Calculator (Hooper Index)
"""
import pytest

from acompanha.core.clinical import CheckinMetrics
from acompanha.core.recovery import (
    RecoveryResult,
    RecoveryStatus,
    calculate_recovery_score,
    recovery_status_for,
)


class TestHooperFormula:
    """Hooper Index, base score and mood / libido adjustment."""

    def test_all_neutral(self, neutral_metrics):
        result = calculate_recovery_score(neutral_metrics)

        assert result.hooper_index == 20
        assert result.score == 50
        assert result.status == RecoveryStatus.CRITICAL

    def test_best_case_clamped_to_100(self, healthy_metrics):
        result = calculate_recovery_score(healthy_metrics)

        # base 100 + adjustment 15 = 115 -> 100
        assert result.hooper_index == 0
        assert result.score == 100
        assert result.status == RecoveryStatus.SAFE

    def test_worst_case_clamped_to_0(self):
        metrics = CheckinMetrics(
            qualidade_sono=0, cansaco=10, dor_muscular=10, estresse=10, humor=0, libido=0,
        )
        result = calculate_recovery_score(metrics)

        assert result.hooper_index == 40
        assert result.score == 0
        assert result.status == RecoveryStatus.CRITICAL

    def test_mood_weighs_twice_libido(self, neutral_metrics):
        base = neutral_metrics.to_dict()
        mood_up = calculate_recovery_score(CheckinMetrics(**{**base, "humor": 6}))
        libido_up = calculate_recovery_score(CheckinMetrics(**{**base, "libido": 6}))

        assert mood_up.score == 52
        assert libido_up.score == 51

    def test_missing_fields_default_to_neutral(self):
        result = calculate_recovery_score(CheckinMetrics())

        assert result.hooper_index == 20
        assert result.score == 50

    def test_partial_metrics(self):
        # HI = 2 + 5 + 5 + (10 - 8) = 14 ; base = 65 ; adjustment = (7-5)*2 = 4
        result = calculate_recovery_score(CheckinMetrics(qualidade_sono=8, cansaco=2, humor=7))

        assert result.hooper_index == 14
        assert result.score == 69
        assert result.status == RecoveryStatus.WARNING

    def test_hooper_index_not_rounded(self):
        result = calculate_recovery_score(CheckinMetrics(cansaco=2.5))
        assert result.hooper_index == 17.5

    def test_half_points_round_up(self):
        result = calculate_recovery_score(CheckinMetrics(cansaco=4, estresse=4, dor_muscular=4, qualidade_sono=5))

        # HI = 17 -> base 57.5 -> 58
        assert result.hooper_index == 17
        assert result.score == 58


class TestInjuryPenalty:
    """-12 penalty and the 70 ceiling for injured patients."""

    def test_penalty_then_cap(self):
        # HI = 2 -> base 95, adjustment 0 -> raw 95 ; 95 - 12 = 83 -> capped 70
        metrics = CheckinMetrics(
            qualidade_sono=10, cansaco=1, dor_muscular=1, estresse=0,
            humor=5, libido=5, lesao=True,
        )
        result = calculate_recovery_score(metrics)

        assert result.score == 70
        assert result.status == RecoveryStatus.WARNING

    def test_penalty_below_cap(self, neutral_metrics):
        metrics = CheckinMetrics(**{**neutral_metrics.to_dict(), "lesao": True})
        result = calculate_recovery_score(metrics)

        assert result.score == 38

    def test_penalty_never_negative(self):
        metrics = CheckinMetrics(
            qualidade_sono=0, cansaco=10, dor_muscular=10, estresse=10, lesao=True,
        )
        assert calculate_recovery_score(metrics).score == 0

    def test_injured_patient_never_safe(self, healthy_metrics):
        metrics = CheckinMetrics(**{**healthy_metrics.to_dict(), "lesao": True})
        result = calculate_recovery_score(metrics)

        assert result.score == 70
        assert result.status != RecoveryStatus.SAFE

    def test_null_injury_is_no_injury(self, healthy_metrics):
        metrics = CheckinMetrics(**{**healthy_metrics.to_dict(), "lesao": None})
        assert calculate_recovery_score(metrics).score == 100


class TestRecoveryStatus:

    @pytest.mark.parametrize("score,expected", [
        (100, RecoveryStatus.SAFE),
        (80, RecoveryStatus.SAFE),
        (79, RecoveryStatus.WARNING),
        (60, RecoveryStatus.WARNING),
        (59, RecoveryStatus.CRITICAL),
        (0, RecoveryStatus.CRITICAL),
    ])
    def test_thresholds(self, score, expected):
        assert recovery_status_for(score) == expected

    def test_status_follows_rounded_score(self):
        # HI = 8 -> base 80 ; adjustment (4.5 - 5) * 1 = -0.5 -> 79.5 -> 80
        metrics = CheckinMetrics(
            qualidade_sono=10, cansaco=4, dor_muscular=2, estresse=2, humor=5, libido=4.5,
        )
        result = calculate_recovery_score(metrics)

        assert result.score == 80
        assert result.status == RecoveryStatus.SAFE

    def test_idempotent(self, neutral_metrics):
        assert calculate_recovery_score(neutral_metrics) == calculate_recovery_score(neutral_metrics)

    def test_to_dict(self, neutral_metrics):
        data = calculate_recovery_score(neutral_metrics).to_dict()
        assert data == {"score": 50, "status": "critical", "hooper_index": 20}


def test_result_is_frozen(neutral_metrics):
    result = calculate_recovery_score(neutral_metrics)
    assert isinstance(result, RecoveryResult)
    with pytest.raises(Exception):
        result.score = 99
