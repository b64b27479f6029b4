# =============================================================================
# workers/tasks.py - Celery Task Definitions
# =============================================================================
# Tasks:
# - schedule_today: the daily scheduler, triggered by Celery beat
# =============================================================================

import logging
from typing import Any

from celery import shared_task

from core.services.schedule_service import ScheduleService
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)


@shared_task(name="workers.tasks.schedule_today")
def schedule_today() -> dict[str, Any]:
    """
    Materialize today's menu instance and deliveries.

    Uses the service_role client. Failures propagate so Celery records the
    task as failed; there is no automatic retry.

    Returns:
        ScheduleResult as a JSON-serializable dict
    """
    client = SupabaseClient.get_service_client()
    result = ScheduleService.schedule_today(client)
    logger.info(f"Daily scheduler: {result.message}")
    return result.model_dump(mode="json")
