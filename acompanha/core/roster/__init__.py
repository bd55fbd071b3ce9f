"""
Roster Layer

Turns a patient roster into the alert feed and dashboard KPIs.

Usage:
    from acompanha.core.roster import RosterPatient, aggregate_alerts, summarize_roster

    alerts = aggregate_alerts(patients, window_days=7, reference_date=date.today())
"""
from .aggregator import (
    DEFAULT_WINDOW_DAYS,
    AlertEntry,
    RosterPatient,
    RosterSummary,
    aggregate_alerts,
    latest_checkin,
    recent_checkins,
    summarize_roster,
)

__all__ = [
    "DEFAULT_WINDOW_DAYS",
    "AlertEntry",
    "RosterPatient",
    "RosterSummary",
    "aggregate_alerts",
    "latest_checkin",
    "recent_checkins",
    "summarize_roster",
]
