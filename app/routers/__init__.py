# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - macros.py: Macro-range report
# - eta.py: Driver ETA estimate
# - pauses.py: Subscription pause requests
# - schedule.py: Daily delivery scheduler trigger
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import macros
from . import eta
from . import pauses
from . import schedule

__all__ = [
    "health",
    "macros",
    "eta",
    "pauses",
    "schedule",
]
