# =============================================================================
# app/routers/schedule.py - Daily Scheduler Endpoint
# =============================================================================
# HTTP trigger for the daily scheduler, for platform cron jobs that call a
# URL. Celery beat runs the same service directly (workers/tasks.py).
# Restricted to service_role callers.
# =============================================================================

from fastapi import APIRouter, Depends

from app.auth import require_service_role
from app.dependencies import ServiceClientDep
from core.models.responses import ScheduleResult
from core.services.schedule_service import ScheduleService

router = APIRouter()


@router.post(
    "/schedule-today",
    response_model=ScheduleResult,
    dependencies=[Depends(require_service_role)],
)
def schedule_today(client: ServiceClientDep) -> ScheduleResult:
    """
    Materialize today's menu and deliveries (Asia/Kolkata calendar).

    Sundays return "Sunday, no deliveries scheduled." without writing.
    Calling this twice on the same day inserts the deliveries twice.
    """
    return ScheduleService.schedule_today(client)
