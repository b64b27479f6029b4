# =============================================================================
# workers/ - Celery Background Task Workers
# =============================================================================
# This package contains the Celery configuration and task definitions for
# periodic work.
#
# Components:
# - celery_app.py: Celery application configuration
# - tasks.py: Task definitions (daily delivery scheduler)
# - config.py: Worker settings and beat schedule
#
# Usage:
#   # Start worker with beat
#   celery -A workers.celery_app worker -B -Q default,scheduler --loglevel=info
#
#   # Or use the script
#   python scripts/start_worker.py
#
#   # Run the scheduler once, out of band
#   from workers.tasks import schedule_today
#   schedule_today.delay()
# =============================================================================

from .celery_app import celery_app
from . import tasks

__all__ = [
    "celery_app",
    "tasks",
]
