"""
Pytest Configuration and Fixtures

Shared fixtures for the check-in monitoring tests.
"""
import pytest
from datetime import date
from pathlib import Path
import sys

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from acompanha.core.clinical import CheckinMetrics, CheckinRecord


@pytest.fixture
def reference_date() -> date:
    """Fixed 'today' for window calculations."""
    return date(2024, 3, 15)


@pytest.fixture
def healthy_metrics() -> CheckinMetrics:
    """Check-in with every metric at its best value."""
    return CheckinMetrics(
        qualidade_sono=10,
        cansaco=0,
        dor_muscular=0,
        estresse=0,
        humor=10,
        libido=10,
        erecao_matinal=True,
        lesao=False,
        ciclo_menstrual_alterado=False,
    )


@pytest.fixture
def neutral_metrics() -> CheckinMetrics:
    """Every 0-10 metric at the midpoint, no injury."""
    return CheckinMetrics(
        qualidade_sono=5,
        cansaco=5,
        dor_muscular=5,
        estresse=5,
        humor=5,
        libido=5,
        lesao=False,
    )


@pytest.fixture
def make_record():
    """Factory for dated check-in records."""
    def _make(day: str, **metrics) -> CheckinRecord:
        return CheckinRecord(date=day, metrics=CheckinMetrics(**metrics))
    return _make
