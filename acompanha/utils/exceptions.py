"""
Custom Exception Hierarchy

Errors raised at the record-parsing boundary. The evaluation core itself
never raises for structurally valid input.
"""
from typing import Optional, Dict, Any


class MonitoringError(Exception):
    """Base exception for all monitoring errors."""
    
    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details
        }


class CheckinDataError(MonitoringError):
    """A stored check-in record is structurally invalid."""
    
    def __init__(
        self,
        message: str,
        field: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="CHECKIN_DATA_ERROR",
            details={"field": field, **(details or {})}
        )
        self.field = field


class RosterDataError(MonitoringError):
    """A roster entry or aggregation argument is invalid."""
    
    def __init__(
        self,
        message: str,
        patient_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="ROSTER_DATA_ERROR",
            details={"patient_id": patient_id, **(details or {})}
        )
        self.patient_id = patient_id
