# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .eta_service import EtaService
from .macro_service import MacroReportService
from .pause_service import PauseService
from .schedule_service import ScheduleService

__all__ = [
    "EtaService",
    "MacroReportService",
    "PauseService",
    "ScheduleService",
]
