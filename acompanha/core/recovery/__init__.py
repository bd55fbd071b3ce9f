"""
Recovery Score Layer

Usage:
    from acompanha.core.recovery import calculate_recovery_score

    result = calculate_recovery_score(metrics)
    result.score, result.status, result.hooper_index
"""
from .hooper import (
    RecoveryResult,
    RecoveryStatus,
    calculate_recovery_score,
    recovery_status_for,
)

__all__ = [
    "RecoveryResult",
    "RecoveryStatus",
    "calculate_recovery_score",
    "recovery_status_for",
]
