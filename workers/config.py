# =============================================================================
# workers/config.py - Celery Worker Configuration
# =============================================================================
# Settings specific to Celery workers and the beat scheduler.
# =============================================================================

from celery.schedules import crontab

from app.config import settings
from lib.delivery_calendar import DELIVERY_TIMEZONE


class CeleryConfig:
    """
    Celery configuration settings.

    These are applied to the Celery app via app.config_from_object().
    """

    # -------------------------------------------------------------------------
    # Broker Settings (Redis)
    # -------------------------------------------------------------------------

    # Redis URL for message broker
    broker_url = settings.REDIS_URL

    # Redis URL for result backend (store task results)
    result_backend = settings.REDIS_URL

    # -------------------------------------------------------------------------
    # Task Settings
    # -------------------------------------------------------------------------

    # Only prefetch one task at a time
    worker_prefetch_multiplier = 1

    # Task results expire after 1 day
    result_expires = 86400

    # Default task timeout (5 minutes)
    task_time_limit = 300

    # Soft timeout (4 minutes) - gives task time to clean up
    task_soft_time_limit = 240

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    # Use JSON for task serialization (safer than pickle)
    task_serializer = "json"
    result_serializer = "json"
    accept_content = ["json"]

    # -------------------------------------------------------------------------
    # Task Routing
    # -------------------------------------------------------------------------

    task_routes = {
        "workers.tasks.schedule_today": {"queue": "scheduler"},
    }

    # Default queue for unrouted tasks
    task_default_queue = "default"

    # -------------------------------------------------------------------------
    # Monitoring
    # -------------------------------------------------------------------------

    # Send task events for monitoring (Flower, etc.)
    worker_send_task_events = True
    task_send_sent_event = True

    # -------------------------------------------------------------------------
    # Timezone
    # -------------------------------------------------------------------------
    # Crontab entries below are read in this timezone

    timezone = DELIVERY_TIMEZONE.key
    enable_utc = True

    # -------------------------------------------------------------------------
    # Beat Schedule
    # -------------------------------------------------------------------------
    # Failed runs are not retried; the next day's run is independent.

    beat_schedule = {
        "schedule-today-daily": {
            "task": "workers.tasks.schedule_today",
            "schedule": crontab(
                hour=settings.SCHEDULE_TODAY_HOUR,
                minute=settings.SCHEDULE_TODAY_MINUTE,
            ),
        },
    }
