"""
Monitoring Service - glue between API payloads and the evaluation core
"""
import logging
from datetime import date
from typing import Dict, Any, List, Optional

from acompanha.config import ALERT_WINDOW_DAYS, REPORT_RECENT_CHECKINS
from acompanha.core.clinical import (
    BiologicalSex,
    CheckinMetrics,
    CheckinRecord,
    describe,
    evaluate_clinical_status,
    threshold_table,
)
from acompanha.core.presentation import display, recovery_badge_classes
from acompanha.core.recovery import calculate_recovery_score
from acompanha.core.reports import compare_latest, summarize_period
from acompanha.core.roster import AlertEntry, RosterPatient, aggregate_alerts, summarize_roster

logger = logging.getLogger(__name__)


class MonitoringService:
    """
    Service class for the check-in monitoring logic.
    Decouples the core from FastAPI endpoints; accepts plain dict rows as
    they come out of storage and returns JSON-ready dicts.
    """

    def __init__(self, window_days: int = ALERT_WINDOW_DAYS, recent_checkins: int = REPORT_RECENT_CHECKINS):
        self.window_days = window_days
        self.recent_checkins = recent_checkins

    def evaluate(self, checkin: Optional[Dict[str, Any]], sexo: Optional[str] = None) -> Dict[str, Any]:
        """Clinical status of one check-in row (None -> no_data)."""
        metrics = CheckinMetrics.from_record(checkin) if checkin is not None else None
        evaluation = evaluate_clinical_status(metrics, BiologicalSex.from_code(sexo))
        return {
            **evaluation.to_dict(),
            **display(evaluation.status),
            "messages": describe(evaluation),
        }

    def recovery_score(self, checkin: Dict[str, Any]) -> Dict[str, Any]:
        result = calculate_recovery_score(CheckinMetrics.from_record(checkin))
        return {
            **result.to_dict(),
            **display(result.status),
            "badge_classes": recovery_badge_classes(result.status),
        }

    def _roster(self, patients: List[Dict[str, Any]]) -> List[RosterPatient]:
        return [RosterPatient.from_record(p) for p in patients]

    def alerts(
        self,
        patients: List[Dict[str, Any]],
        window_days: Optional[int] = None,
        reference_date: Optional[date] = None,
    ) -> List[Dict[str, Any]]:
        entries = aggregate_alerts(
            self._roster(patients),
            window_days=self.window_days if window_days is None else window_days,
            reference_date=reference_date,
        )
        return [_alert_view(a) for a in entries]

    def roster_summary(
        self,
        patients: List[Dict[str, Any]],
        window_days: Optional[int] = None,
        reference_date: Optional[date] = None,
    ) -> Dict[str, Any]:
        summary = summarize_roster(
            self._roster(patients),
            window_days=self.window_days if window_days is None else window_days,
            reference_date=reference_date,
        )
        data = summary.to_dict()
        data["alerts"] = [_alert_view(a) for a in summary.alerts]
        return data

    def period_summary(self, checkins: List[Dict[str, Any]], recent: Optional[int] = None) -> Dict[str, Any]:
        records = [CheckinRecord.from_record(c) for c in checkins]
        return summarize_period(records, recent or self.recent_checkins).to_dict()

    def weekly_comparison(self, checkins: List[Dict[str, Any]]) -> Dict[str, Any]:
        records = [CheckinRecord.from_record(c) for c in checkins]
        return compare_latest(records).to_dict()

    @staticmethod
    def rules() -> Dict[str, Any]:
        return threshold_table()


def _alert_view(entry: AlertEntry) -> Dict[str, Any]:
    view = display(entry.severity)
    return {**entry.to_dict(), "color": view["color"], "badge_variant": view["badge_variant"]}
