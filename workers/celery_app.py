# =============================================================================
# workers/celery_app.py - Scheduler Worker Application
# =============================================================================
# The Celery app that carries the daily delivery scheduler. Beat fires
# "schedule-today-daily" (see workers/config.py) and a worker on the
# "scheduler" queue runs it against the service_role client.
#
# Usage:
#   # Worker with embedded beat
#   celery -A workers.celery_app worker -B -Q default,scheduler --loglevel=info
#
#   # Is the scheduler worker up?
#   celery -A workers.celery_app inspect registered
# =============================================================================

import logging
from typing import Any

from celery import Celery
from celery.signals import beat_init, task_failure, task_postrun, task_prerun
from dotenv import load_dotenv

# Broker and Supabase settings may live in .env
load_dotenv()

from app.config import settings  # noqa: E402

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def redact_broker_url(url: str) -> str:
    """
    Drop user and password from a broker URL so it can be logged.

    Examples:
        >>> redact_broker_url("redis://:s3cret@cache.internal:6379/0")
        'redis://cache.internal:6379/0'
        >>> redact_broker_url("redis://localhost:6379/0")
        'redis://localhost:6379/0'
    """
    scheme, separator, location = url.partition("://")
    if not separator:
        scheme, location = "", url
    location = location.rsplit("@", 1)[-1]
    return f"{scheme}{separator}{location}"


def create_celery_app() -> Celery:
    """Build the scheduler app from CeleryConfig, on the Redis broker."""
    app = Celery(
        "nutrifit_worker",
        broker=settings.REDIS_URL,
        backend=settings.REDIS_URL,
        include=["workers.tasks"],
    )
    app.config_from_object("workers.config:CeleryConfig")

    logger.info(f"Scheduler app using broker {redact_broker_url(settings.REDIS_URL)}")
    return app


celery_app = create_celery_app()


def describe_beat_schedule(schedule: dict[str, dict[str, Any]], timezone: str) -> list[str]:
    """One line per beat entry: name, task and the crontab it fires on."""
    lines = []
    for name, entry in sorted(schedule.items()):
        lines.append(f"{name} -> {entry['task']} at {entry['schedule']} ({timezone})")
    return lines


# =============================================================================
# Lifecycle Signals
# =============================================================================

@beat_init.connect
def beat_init_handler(sender=None, **extra):
    """Log what beat is about to fire, so a wrong timezone shows up at startup."""
    conf = sender.app.conf if sender is not None else celery_app.conf
    for line in describe_beat_schedule(conf.beat_schedule, conf.timezone):
        logger.info(f"Beat entry: {line}")


@task_prerun.connect
def task_prerun_handler(sender=None, task_id=None, task=None, **extra):
    logger.info(f"Task started: {task.name} [{task_id}]")


@task_postrun.connect
def task_postrun_handler(sender=None, task_id=None, task=None, retval=None, state=None, **extra):
    """Log completion; scheduler runs also report what they created."""
    if isinstance(retval, dict) and "deliveries_created" in retval:
        logger.info(
            f"Task completed: {task.name} [{task_id}] - State: {state} - "
            f"date={retval.get('date')} menu_created={retval.get('menu_created')} "
            f"deliveries={retval['deliveries_created']} skipped={retval.get('skipped')}"
        )
        return
    logger.info(f"Task completed: {task.name} [{task_id}] - State: {state}")


@task_failure.connect
def task_failure_handler(sender=None, task_id=None, exception=None, **extra):
    """A failed scheduler run is not retried; the next beat tick starts fresh."""
    logger.error(f"Task failed: {sender.name} [{task_id}] - Error: {exception}")


if __name__ == "__main__":
    celery_app.start()
