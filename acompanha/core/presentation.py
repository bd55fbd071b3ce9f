"""
Status → display lookup tables.

Dashboards, alert feeds and the score card depend on this mapping; keep it
in one place.
"""
from typing import Union

from acompanha.core.clinical.base import Severity
from acompanha.core.recovery.hooper import RecoveryStatus

RED    = "#ef4444"
ORANGE = "#f97316"
GREEN  = "#22c55e"
SLATE  = "#94a3b8"

SEVERITY_COLORS = {
    Severity.CRITICAL: RED,
    Severity.WARNING:  ORANGE,
    Severity.SAFE:     GREEN,
    Severity.NO_DATA:  SLATE,
}

SEVERITY_BADGES = {
    Severity.CRITICAL: "destructive",
    Severity.WARNING:  "secondary",
    Severity.SAFE:     "default",
    Severity.NO_DATA:  "outline",
}

SEVERITY_LABELS = {
    Severity.CRITICAL: "Critical",
    Severity.WARNING:  "Warning",
    Severity.SAFE:     "Safe",
    Severity.NO_DATA:  "No Data",
}

RECOVERY_COLORS = {
    RecoveryStatus.SAFE:     GREEN,
    RecoveryStatus.WARNING:  ORANGE,
    RecoveryStatus.CRITICAL: RED,
}

RECOVERY_BADGES = {
    RecoveryStatus.SAFE:     "default",
    RecoveryStatus.WARNING:  "secondary",
    RecoveryStatus.CRITICAL: "destructive",
}

RECOVERY_BADGE_CLASSES = {
    RecoveryStatus.SAFE:     "bg-green-100 text-green-700 border-green-200 hover:bg-green-100",
    RecoveryStatus.WARNING:  "bg-orange-100 text-orange-700 border-orange-200 hover:bg-orange-100",
    RecoveryStatus.CRITICAL: "bg-red-100 text-red-700 border-red-200 hover:bg-red-100",
}


def status_color(status: Union[Severity, RecoveryStatus]) -> str:
    if isinstance(status, RecoveryStatus):
        return RECOVERY_COLORS[status]
    return SEVERITY_COLORS.get(status, SLATE)


def badge_variant(status: Union[Severity, RecoveryStatus]) -> str:
    if isinstance(status, RecoveryStatus):
        return RECOVERY_BADGES[status]
    return SEVERITY_BADGES.get(status, "outline")


def status_label(status: Union[Severity, RecoveryStatus]) -> str:
    if isinstance(status, RecoveryStatus):
        return SEVERITY_LABELS[Severity(status.value)]
    return SEVERITY_LABELS.get(status, "No Data")


def recovery_badge_classes(status: RecoveryStatus) -> str:
    return RECOVERY_BADGE_CLASSES[status]


def display(status: Union[Severity, RecoveryStatus]) -> dict:
    """Colour, badge variant and label bundle for API responses."""
    return {
        "label": status_label(status),
        "color": status_color(status),
        "badge_variant": badge_variant(status),
    }
