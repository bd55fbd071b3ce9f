"""
Unit Tests for logging setup and the exception hierarchy.
"""
import logging

from acompanha.utils import (
    CheckinDataError,
    MonitoringError,
    RosterDataError,
    get_logger,
    setup_logging,
)
from acompanha.utils.logging import StructuredFormatter


class TestExceptions:

    def test_base_error_dict(self):
        err = MonitoringError("boom")
        assert err.to_dict() == {"error": "UNKNOWN_ERROR", "message": "boom", "details": {}}

    def test_checkin_error_carries_field(self):
        err = CheckinDataError("bad date", field="data", details={"value": "x"})

        assert isinstance(err, MonitoringError)
        assert err.code == "CHECKIN_DATA_ERROR"
        assert err.details == {"field": "data", "value": "x"}

    def test_roster_error_carries_patient(self):
        err = RosterDataError("missing id", patient_id="p9")

        assert err.to_dict()["error"] == "ROSTER_DATA_ERROR"
        assert err.details["patient_id"] == "p9"


class TestLogging:

    def test_setup_replaces_own_handlers_only(self):
        root = logging.getLogger()
        foreign = logging.NullHandler()
        root.addHandler(foreign)
        try:
            setup_logging("DEBUG")
            setup_logging("INFO")

            ours = [h for h in root.handlers if getattr(h, "_acompanha", False)]
            assert len(ours) == 1
            assert foreign in root.handlers
            assert root.level == logging.INFO
        finally:
            root.removeHandler(foreign)

    def test_formatter_output(self):
        record = logging.LogRecord("acompanha.test", logging.WARNING, __file__, 1, "hello %s", ("world",), None)
        line = StructuredFormatter().format(record)

        assert "WARNING" in line
        assert "[acompanha.test]" in line
        assert "hello world" in line
        assert "\033[" not in line

    def test_context_fields_appended(self):
        record = logging.LogRecord("acompanha.roster", logging.INFO, __file__, 1, "Roster summary", (), None)
        record.window_days = 7
        record.patient_id = None

        line = StructuredFormatter().format(record)
        assert line.endswith("Roster summary | window_days=7")

    def test_color_wraps_line(self):
        record = logging.LogRecord("acompanha.x", logging.ERROR, __file__, 1, "failed", (), None)
        line = StructuredFormatter(use_color=True).format(record)

        assert line.startswith("\033[31m")
        assert line.endswith("\033[0m")

    def test_get_logger(self):
        assert get_logger("acompanha.x").name == "acompanha.x"
