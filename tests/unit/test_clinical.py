"""
Unit Tests for the Clinical Status Evaluator

Rule thresholds, critical short-circuit, sex gating, null handling,
record parsing and reason messages.
"""
import pytest
from datetime import date, datetime

from acompanha.core.clinical import (
    BiologicalSex,
    CheckinMetrics,
    CheckinRecord,
    ClinicalEvaluation,
    CriticalReason,
    Severity,
    WarningReason,
    alert_text,
    critical_risk_message,
    describe,
    evaluate_clinical_status,
    parse_checkin_date,
    reason_label,
    threshold_table,
    warning_risk_message,
)
from acompanha.utils.exceptions import CheckinDataError


class TestNoDataAndSafe:
    """Absence of data vs. a present but unremarkable check-in."""

    def test_null_metrics_is_no_data(self):
        result = evaluate_clinical_status(None)

        assert result.status == Severity.NO_DATA
        assert result.critical_reasons == []
        assert result.warning_reasons == []

    def test_all_null_fields_is_safe(self):
        result = evaluate_clinical_status(CheckinMetrics(), BiologicalSex.MALE)

        assert result.status == Severity.SAFE
        assert result.reasons == []

    def test_all_null_fields_with_false_flags_is_safe(self):
        metrics = CheckinMetrics(lesao=False, ciclo_menstrual_alterado=False)
        assert evaluate_clinical_status(metrics, BiologicalSex.FEMALE).status == Severity.SAFE

    def test_healthy_checkin_is_safe(self, healthy_metrics):
        for sex in BiologicalSex:
            assert evaluate_clinical_status(healthy_metrics, sex).status == Severity.SAFE

    def test_no_data_is_not_actionable(self):
        assert not evaluate_clinical_status(None).is_actionable
        assert not evaluate_clinical_status(CheckinMetrics()).is_actionable


class TestCriticalRules:
    """Critical tier and the short-circuit over warning rules."""

    def test_injury_alone_short_circuits(self, healthy_metrics):
        metrics = CheckinMetrics(**{**healthy_metrics.to_dict(), "lesao": True})
        result = evaluate_clinical_status(metrics)

        assert result.status == Severity.CRITICAL
        assert result.critical_reasons == [CriticalReason.INJURY]
        assert result.critical_reasons == ["lesao"]
        assert result.warning_reasons == []

    def test_critical_suppresses_true_warnings(self):
        # stress 9 would be a warning, but sleep 2 is critical
        metrics = CheckinMetrics(qualidade_sono=2, estresse=9, humor=4)
        result = evaluate_clinical_status(metrics)

        assert result.status == Severity.CRITICAL
        assert result.critical_reasons == [CriticalReason.SLEEP]
        assert result.warning_reasons == []

    @pytest.mark.parametrize("field,value,reason", [
        ("qualidade_sono", 3, CriticalReason.SLEEP),
        ("cansaco", 9, CriticalReason.FATIGUE),
        ("dor_muscular", 9, CriticalReason.SORENESS),
        ("humor", 2, CriticalReason.MOOD),
        ("libido", 2, CriticalReason.LIBIDO),
    ])
    def test_critical_threshold_boundaries(self, field, value, reason):
        result = evaluate_clinical_status(CheckinMetrics(**{field: value}))

        assert result.status == Severity.CRITICAL
        assert result.critical_reasons == [reason]

    def test_sleep_four_is_warning_not_critical(self):
        result = evaluate_clinical_status(CheckinMetrics(qualidade_sono=4))

        assert result.status == Severity.WARNING
        assert result.critical_reasons == []
        assert result.warning_reasons == [WarningReason.SLEEP]

    def test_critical_reasons_keep_rule_order(self):
        metrics = CheckinMetrics(
            libido=1, humor=0, dor_muscular=10, cansaco=10,
            qualidade_sono=0, ciclo_menstrual_alterado=True, lesao=True,
        )
        result = evaluate_clinical_status(metrics, BiologicalSex.FEMALE)

        assert result.critical_reasons == [
            CriticalReason.INJURY,
            CriticalReason.CYCLE_DISRUPTION,
            CriticalReason.SLEEP,
            CriticalReason.FATIGUE,
            CriticalReason.SORENESS,
            CriticalReason.MOOD,
            CriticalReason.LIBIDO,
        ]

    def test_stress_has_no_critical_tier(self):
        result = evaluate_clinical_status(CheckinMetrics(estresse=10))

        assert result.status == Severity.WARNING
        assert result.warning_reasons == [WarningReason.STRESS]


class TestWarningRules:
    """Warning tier thresholds and ordering."""

    @pytest.mark.parametrize("field,value,reason", [
        ("qualidade_sono", 5, WarningReason.SLEEP),
        ("dor_muscular", 7, WarningReason.SORENESS),
        ("cansaco", 7, WarningReason.FATIGUE),
        ("estresse", 8, WarningReason.STRESS),
        ("humor", 4, WarningReason.MOOD),
        ("libido", 5, WarningReason.LIBIDO),
    ])
    def test_warning_threshold_boundaries(self, field, value, reason):
        result = evaluate_clinical_status(CheckinMetrics(**{field: value}))

        assert result.status == Severity.WARNING
        assert result.warning_reasons == [reason]
        assert result.critical_reasons == []

    @pytest.mark.parametrize("field,value", [
        ("qualidade_sono", 6),
        ("dor_muscular", 6),
        ("cansaco", 6),
        ("estresse", 7),
        ("humor", 5),
        ("libido", 6),
    ])
    def test_just_inside_safe_band(self, field, value):
        assert evaluate_clinical_status(CheckinMetrics(**{field: value})).status == Severity.SAFE

    def test_warning_reasons_keep_rule_order(self):
        metrics = CheckinMetrics(
            erecao_matinal=False, libido=4, humor=3, estresse=8,
            cansaco=8, dor_muscular=8, qualidade_sono=5,
        )
        result = evaluate_clinical_status(metrics, BiologicalSex.MALE)

        assert result.warning_reasons == [
            WarningReason.SLEEP,
            WarningReason.SORENESS,
            WarningReason.FATIGUE,
            WarningReason.STRESS,
            WarningReason.MOOD,
            WarningReason.LIBIDO,
            WarningReason.NO_MORNING_ERECTION,
        ]


class TestSexGating:
    """Cycle disruption (female) and morning erection (male) rules."""

    def test_cycle_disruption_only_for_female(self):
        metrics = CheckinMetrics(ciclo_menstrual_alterado=True)

        female = evaluate_clinical_status(metrics, BiologicalSex.FEMALE)
        assert female.status == Severity.CRITICAL
        assert female.critical_reasons == [CriticalReason.CYCLE_DISRUPTION]

        for sex in (BiologicalSex.MALE, BiologicalSex.UNKNOWN, None):
            assert evaluate_clinical_status(metrics, sex).status == Severity.SAFE

    def test_missing_morning_erection_only_for_male(self):
        metrics = CheckinMetrics(erecao_matinal=False)

        male = evaluate_clinical_status(metrics, BiologicalSex.MALE)
        assert male.status == Severity.WARNING
        assert male.warning_reasons == [WarningReason.NO_MORNING_ERECTION]

        assert evaluate_clinical_status(metrics, BiologicalSex.FEMALE).status == Severity.SAFE
        assert evaluate_clinical_status(metrics).status == Severity.SAFE

    def test_null_morning_erection_is_not_absence(self):
        metrics = CheckinMetrics(erecao_matinal=None)
        assert evaluate_clinical_status(metrics, BiologicalSex.MALE).status == Severity.SAFE

    @pytest.mark.parametrize("code,expected", [
        ("M", BiologicalSex.MALE),
        ("m", BiologicalSex.MALE),
        ("F", BiologicalSex.FEMALE),
        (" f ", BiologicalSex.FEMALE),
        (None, BiologicalSex.UNKNOWN),
        ("X", BiologicalSex.UNKNOWN),
    ])
    def test_sex_from_code(self, code, expected):
        assert BiologicalSex.from_code(code) == expected


class TestInputHandling:
    """Out-of-range values, idempotence and record parsing."""

    def test_out_of_range_values_compared_as_is(self):
        assert evaluate_clinical_status(CheckinMetrics(qualidade_sono=15)).status == Severity.SAFE
        result = evaluate_clinical_status(CheckinMetrics(qualidade_sono=-1))
        assert result.critical_reasons == [CriticalReason.SLEEP]

    def test_idempotent(self):
        metrics = CheckinMetrics(qualidade_sono=4, estresse=9, humor=1)
        first = evaluate_clinical_status(metrics, BiologicalSex.MALE)
        second = evaluate_clinical_status(metrics, BiologicalSex.MALE)

        assert first == second

    def test_from_record_reads_storage_columns(self):
        metrics = CheckinMetrics.from_record({
            "qualidade_sono": "7",
            "cansaco": 3,
            "dor_muscular": None,
            "estresse": 2.5,
            "lesao": True,
            "peso": "81.4",
            "unrelated": "ignored",
        })

        assert metrics.qualidade_sono == 7
        assert metrics.cansaco == 3
        assert metrics.dor_muscular is None
        assert metrics.estresse == 2.5
        assert metrics.lesao is True
        assert metrics.peso == 81.4
        assert metrics.humor is None

    def test_from_record_rejects_non_numeric(self):
        with pytest.raises(CheckinDataError) as exc_info:
            CheckinMetrics.from_record({"humor": "great"})

        assert exc_info.value.field == "humor"
        assert exc_info.value.to_dict()["error"] == "CHECKIN_DATA_ERROR"

    def test_from_record_rejects_boolean_metric(self):
        with pytest.raises(CheckinDataError):
            CheckinMetrics.from_record({"libido": True})

    def test_from_record_rejects_non_boolean_flag(self):
        with pytest.raises(CheckinDataError) as exc_info:
            CheckinMetrics.from_record({"lesao": "yes"})
        assert exc_info.value.field == "lesao"

    def test_checkin_record_date(self):
        record = CheckinRecord.from_record({"data": "2024-03-10T08:30:00Z", "patient_id": 42, "humor": 6})

        assert record.date == "2024-03-10T08:30:00Z"
        assert record.calendar_date.isoformat() == "2024-03-10"
        assert record.patient_id == "42"
        assert record.metrics.humor == 6

    def test_date_key_used_when_data_is_null(self):
        record = CheckinRecord.from_record({"data": None, "date": "2024-03-14", "humor": 5})

        assert record.date == "2024-03-14"
        assert record.metrics.humor == 5

    def test_timestamp_object_truncated_to_date(self):
        record = CheckinRecord.from_record({"data": datetime(2024, 3, 10, 8, 30)})

        assert record.calendar_date == date(2024, 3, 10)
        assert parse_checkin_date(datetime(2024, 3, 10, 23, 59)) == date(2024, 3, 10)
        assert type(parse_checkin_date(datetime(2024, 3, 10))) is date

    def test_checkin_record_requires_valid_date(self):
        with pytest.raises(CheckinDataError):
            CheckinRecord.from_record({"data": "10/03/2024"})
        with pytest.raises(CheckinDataError):
            CheckinRecord.from_record({"humor": 5})


class TestMessages:
    """Reason labels, alert text and risk messages."""

    def test_alert_text_joins_labels_in_order(self):
        evaluation = evaluate_clinical_status(CheckinMetrics(lesao=True, qualidade_sono=2))
        assert alert_text(evaluation) == "Injury reported, Very poor sleep"

    def test_describe_uses_fired_tier(self):
        evaluation = evaluate_clinical_status(CheckinMetrics(estresse=9))
        messages = describe(evaluation)

        assert len(messages) == 1
        assert messages[0].startswith("High stress")

    def test_describe_safe_is_empty(self):
        assert describe(ClinicalEvaluation(status=Severity.SAFE)) == []

    def test_labels_accept_raw_keys(self):
        assert reason_label("lesao") == "Injury reported"
        assert reason_label("something_else") == "something_else"

    def test_unknown_keys_fall_back(self):
        assert critical_risk_message("unknown") == "Critical metric detected."
        assert warning_risk_message("unknown") == "Warning sign identified."

    def test_every_reason_has_label_and_message(self):
        for reason in CriticalReason:
            assert reason_label(reason) != reason.value
            assert critical_risk_message(reason) != "Critical metric detected."
        for reason in WarningReason:
            assert reason_label(reason) != reason.value
            assert warning_risk_message(reason) != "Warning sign identified."


def test_threshold_table_matches_rules():
    table = threshold_table()
    by_field = {m["field"]: m for m in table["metrics"]}

    assert by_field["qualidade_sono"] == {"field": "qualidade_sono", "direction": "at_most", "critical": 3, "warning": 5}
    assert by_field["estresse"]["critical"] is None
    assert by_field["estresse"]["warning"] == 8
    assert by_field["cansaco"]["direction"] == "at_least"
    assert len(table["flags"]) == 3
