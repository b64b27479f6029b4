# =============================================================================
# core/services/schedule_service.py - Daily Delivery Scheduler
# =============================================================================
# Materializes today's menu and delivery rows. Runs with the service_role
# client, either from Celery beat (workers/tasks.py) or from the
# /schedule-today endpoint.
#
# Steps for a (Kolkata) day that is not a Sunday:
# 1. Create today's menu_instances row from the biweekly template, unless
#    one already exists
# 2. Load active subscriptions
# 3. Load pauses covering today
# 4. Bulk insert one "scheduled" lunch delivery per active, unpaused
#    subscription
#
# Reruns: the menu step is guarded by an existence check (check-then-insert,
# not atomic). The delivery insert is NOT guarded, so running twice on the
# same day inserts the deliveries twice. A unique (subscription_id, date)
# constraint in the database is the intended fix.
# =============================================================================

import logging
from datetime import date, datetime
from typing import Any

from supabase import Client

from app.exceptions import BackendError, MenuTemplateNotFoundError
from core.models.entities import (
    DeliveryCreate,
    DeliveryStatus,
    MealSlot,
    MenuInstance,
    SubscriptionStatus,
)
from core.models.responses import ScheduleResult
from lib.delivery_calendar import delivery_today, is_rest_day, iso_day_of_week, menu_week_for
from lib.utils import error_message

logger = logging.getLogger(__name__)

REST_DAY_MESSAGE = "Sunday, no deliveries scheduled."


class ScheduleService:
    """Service for the daily scheduling run."""

    # -------------------------------------------------------------------------
    # Menu
    # -------------------------------------------------------------------------

    @staticmethod
    def menu_instance_exists(client: Client, day: date) -> bool:
        try:
            response = (
                client.table("menu_instances")
                .select("id")
                .eq("date", day.isoformat())
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise BackendError(
                f"Failed to check menu instance: {error_message(e)}",
                operation="check_menu_instance",
            ) from e
        return bool(response.data)

    @staticmethod
    def fetch_template(client: Client, week_no: int, dow: int) -> dict[str, Any]:
        """
        The menu template cell for (week_no, dow).

        Raises:
            MenuTemplateNotFoundError: No row, or the query failed
        """
        try:
            response = (
                client.table("menu_templates")
                .select("recipe_id, meal_slot")
                .eq("week_no", week_no)
                .eq("dow", dow)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise MenuTemplateNotFoundError(week_no, dow, error_message(e)) from e

        if not response.data:
            raise MenuTemplateNotFoundError(week_no, dow)
        return response.data[0]

    @staticmethod
    def ensure_menu_instance(client: Client, day: date) -> bool:
        """
        Create the menu instance for a day if it doesn't exist yet.

        Returns:
            True if a row was inserted, False if one already existed

        Raises:
            MenuTemplateNotFoundError: No template for the day
            BackendError: The insert failed
        """
        if ScheduleService.menu_instance_exists(client, day):
            logger.info(f"Menu instance for {day} already exists")
            return False

        week_no = menu_week_for(day)
        template = ScheduleService.fetch_template(client, week_no, iso_day_of_week(day))
        instance = MenuInstance(
            date=day,
            week_no=week_no,
            recipe_id=template["recipe_id"],
            meal_slot=template.get("meal_slot"),
        )

        try:
            client.table("menu_instances").insert(instance.to_row()).execute()
        except Exception as e:
            raise BackendError(
                f"Failed to insert menu instance: {error_message(e)}",
                operation="insert_menu_instance",
            ) from e

        logger.info(f"Materialized menu for {day}: week {week_no}, recipe {instance.recipe_id}")
        return True

    # -------------------------------------------------------------------------
    # Deliveries
    # -------------------------------------------------------------------------

    @staticmethod
    def fetch_active_subscription_ids(client: Client) -> list[Any]:
        try:
            response = (
                client.table("subscriptions")
                .select("id")
                .eq("status", SubscriptionStatus.ACTIVE.value)
                .execute()
            )
        except Exception as e:
            raise BackendError(error_message(e), operation="fetch_active_subscriptions") from e
        return [row["id"] for row in response.data or []]

    @staticmethod
    def fetch_paused_subscription_ids(client: Client, day: date) -> set[str]:
        """Ids of subscriptions with a pause where start_date <= day <= end_date."""
        try:
            response = (
                client.table("pauses")
                .select("subscription_id")
                .lte("start_date", day.isoformat())
                .gte("end_date", day.isoformat())
                .execute()
            )
        except Exception as e:
            raise BackendError(error_message(e), operation="fetch_pauses") from e
        return {str(row["subscription_id"]) for row in response.data or []}

    @staticmethod
    def build_deliveries(
        subscription_ids: list[Any],
        paused_ids: set[str],
        day: date,
    ) -> list[DeliveryCreate]:
        """One scheduled lunch delivery per subscription that isn't paused."""
        return [
            DeliveryCreate(
                subscription_id=subscription_id,
                date=day,
                status=DeliveryStatus.SCHEDULED,
                # Every plan is lunch-only for now
                meal_slot=MealSlot.LUNCH,
            )
            for subscription_id in subscription_ids
            if str(subscription_id) not in paused_ids
        ]

    # -------------------------------------------------------------------------
    # Entry point
    # -------------------------------------------------------------------------

    @staticmethod
    def schedule_today(client: Client, now: datetime | None = None) -> ScheduleResult:
        """
        Run the daily scheduler.

        Args:
            client: Elevated (service_role) Supabase client
            now: Instant to treat as "now"; defaults to the current time

        Returns:
            ScheduleResult describing what was written

        Raises:
            MenuTemplateNotFoundError: No template for today
            BackendError: Any query or insert failed
        """
        today = delivery_today(now)

        if is_rest_day(today):
            logger.info(f"{today} is a Sunday, nothing to schedule")
            return ScheduleResult(message=REST_DAY_MESSAGE, date=today, skipped=True)

        menu_week = menu_week_for(today)
        menu_created = ScheduleService.ensure_menu_instance(client, today)

        subscription_ids = ScheduleService.fetch_active_subscription_ids(client)
        paused_ids = ScheduleService.fetch_paused_subscription_ids(client, today)
        deliveries = ScheduleService.build_deliveries(subscription_ids, paused_ids, today)

        if deliveries:
            try:
                client.table("deliveries").insert([d.to_row() for d in deliveries]).execute()
            except Exception as e:
                raise BackendError(
                    f"Failed to insert deliveries: {error_message(e)}",
                    operation="insert_deliveries",
                ) from e

        logger.info(
            f"Scheduled {len(deliveries)} deliveries for {today} "
            f"({len(subscription_ids)} active, {len(paused_ids)} paused)"
        )
        return ScheduleResult(
            message=f"Processed {len(deliveries)} deliveries.",
            date=today,
            menu_week=menu_week,
            menu_created=menu_created,
            deliveries_created=len(deliveries),
        )
