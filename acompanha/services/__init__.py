from .monitoring import MonitoringService

__all__ = ["MonitoringService"]
