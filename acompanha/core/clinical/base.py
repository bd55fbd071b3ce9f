"""
Clinical Evaluation - Base Types

Defines the check-in snapshot consumed by the evaluator and the calculator,
and the evaluation result produced by the rule table. Storage column names
(`qualidade_sono`, `cansaco`, ...) are kept as field names because they are
the contract with whatever fetched the row.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from acompanha.utils.exceptions import CheckinDataError


class Severity(str, Enum):
    """
    Discrete clinical tier of one check-in.

    CRITICAL – at least one critical rule fired
    WARNING  – no critical rule, at least one warning rule fired
    SAFE     – a check-in exists and no rule fired
    NO_DATA  – no check-in at all (never conflated with SAFE)
    """
    CRITICAL = "critical"
    WARNING  = "warning"
    SAFE     = "safe"
    NO_DATA  = "no_data"


class BiologicalSex(str, Enum):
    """Gates the two sex-specific check-in flags."""
    MALE    = "M"
    FEMALE  = "F"
    UNKNOWN = "unknown"

    @classmethod
    def from_code(cls, code: Optional[str]) -> "BiologicalSex":
        """Map the stored `sexo` column ("M", "F", absent) to an enum member."""
        if code is None:
            return cls.UNKNOWN
        normalized = str(code).strip().upper()
        if normalized == "M":
            return cls.MALE
        if normalized == "F":
            return cls.FEMALE
        return cls.UNKNOWN


class CriticalReason(str, Enum):
    INJURY           = "lesao"
    CYCLE_DISRUPTION = "ciclo_alterado"
    SLEEP            = "sono_critico"
    FATIGUE          = "cansaco_critico"
    SORENESS         = "dor_critica"
    MOOD             = "humor_critico"
    LIBIDO           = "libido_critica"


class WarningReason(str, Enum):
    SLEEP             = "sono_atencao"
    SORENESS          = "dor_atencao"
    FATIGUE           = "cansaco_atencao"
    STRESS            = "estresse_atencao"
    MOOD              = "humor_atencao"
    LIBIDO            = "libido_atencao"
    NO_MORNING_ERECTION = "erecao_matinal_atencao"


# 0-10 subjective scales, in storage order
SCALE_FIELDS = (
    "qualidade_sono",
    "cansaco",
    "dor_muscular",
    "estresse",
    "humor",
    "libido",
)

FLAG_FIELDS = (
    "erecao_matinal",
    "lesao",
    "ciclo_menstrual_alterado",
)


def _parse_number(record: Mapping[str, Any], name: str) -> Optional[float]:
    value = record.get(name)
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise CheckinDataError(f"'{name}' must be numeric, got a boolean", field=name)
    if isinstance(value, (int, float)):
        return value
    try:
        number = float(str(value).strip())
    except ValueError:
        raise CheckinDataError(
            f"'{name}' must be numeric, got {value!r}", field=name
        ) from None
    return int(number) if number.is_integer() else number


def _parse_flag(record: Mapping[str, Any], name: str) -> Optional[bool]:
    value = record.get(name)
    if value is None or isinstance(value, bool):
        return value
    raise CheckinDataError(f"'{name}' must be a boolean, got {value!r}", field=name)


@dataclass(frozen=True)
class CheckinMetrics:
    """
    Immutable snapshot of one submitted check-in.

    Every field may be None ("unknown"). The evaluator skips rules over
    unknown fields; the recovery calculator substitutes neutral values.
    """
    qualidade_sono: Optional[float] = None            # higher = better
    cansaco: Optional[float] = None                   # higher = worse
    dor_muscular: Optional[float] = None              # higher = worse
    estresse: Optional[float] = None                  # higher = worse
    humor: Optional[float] = None                     # higher = better
    libido: Optional[float] = None                    # higher = better
    erecao_matinal: Optional[bool] = None             # male only
    lesao: Optional[bool] = None
    ciclo_menstrual_alterado: Optional[bool] = None   # female only
    peso: Optional[float] = None                      # display only

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "CheckinMetrics":
        """
        Build a snapshot from a stored row (dict-like, storage column names).

        Raises:
            CheckinDataError: a metric is neither null nor numeric, or a flag
                              is neither null nor boolean.
        """
        values: Dict[str, Any] = {name: _parse_number(record, name) for name in SCALE_FIELDS}
        values.update({name: _parse_flag(record, name) for name in FLAG_FIELDS})
        values["peso"] = _parse_number(record, "peso")
        return cls(**values)

    def to_dict(self) -> dict:
        return {
            name: getattr(self, name)
            for name in (*SCALE_FIELDS, *FLAG_FIELDS, "peso")
        }


def parse_checkin_date(raw: Any) -> date:
    """Calendar date of a stored date string (`YYYY-MM-DD` or an ISO timestamp)."""
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str) or len(raw) < 10:
        raise CheckinDataError(f"Invalid check-in date {raw!r}", field="data")
    try:
        return date.fromisoformat(raw[:10])
    except ValueError:
        raise CheckinDataError(f"Invalid check-in date {raw!r}", field="data") from None


@dataclass(frozen=True)
class CheckinRecord:
    """A dated check-in as stored: date string, metrics and owner."""
    date: str
    metrics: CheckinMetrics
    patient_id: Optional[str] = None

    @property
    def calendar_date(self) -> date:
        return parse_checkin_date(self.date)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "CheckinRecord":
        """
        Build from a stored row. The date is read from `data` (storage
        column) or `date`.
        """
        raw_date = record.get("data") or record.get("date")
        if isinstance(raw_date, date):
            raw_date = raw_date.isoformat()
        # validates the date up front
        parse_checkin_date(raw_date)
        patient_id = record.get("patient_id")
        return cls(
            date=raw_date,
            metrics=CheckinMetrics.from_record(record),
            patient_id=str(patient_id) if patient_id is not None else None,
        )


@dataclass(frozen=True)
class ClinicalEvaluation:
    """
    Output of the evaluator.

    `critical_reasons` non-empty  <=> status is CRITICAL
    `warning_reasons` non-empty   <=> status is WARNING
    both empty                    <=> status is SAFE or NO_DATA
    """
    status: Severity
    critical_reasons: List[CriticalReason] = field(default_factory=list)
    warning_reasons: List[WarningReason] = field(default_factory=list)

    @property
    def reasons(self) -> List[str]:
        """Reason keys of whichever tier fired (tiers never mix)."""
        return [r.value for r in (self.critical_reasons or self.warning_reasons)]

    @property
    def is_actionable(self) -> bool:
        return self.status in (Severity.CRITICAL, Severity.WARNING)

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "critical_reasons": [r.value for r in self.critical_reasons],
            "warning_reasons": [r.value for r in self.warning_reasons],
        }
