# =============================================================================
# core/services/pause_service.py - Subscription Pauses
# =============================================================================
# Registers a pause for a subscription and marks the deliveries inside the
# paused window as skipped.
#
# Database contract: a trigger on pauses rejects overlapping windows and
# windows that exceed the subscription's pause-day allowance. Its error
# surfaces here as a failed insert.
#
# Partial failure: once the pause row exists it is authoritative. If the
# delivery update fails afterwards, the failure is logged and the pause is
# still returned to the caller. No rollback.
# =============================================================================

import logging
from datetime import date
from typing import Any
from uuid import UUID

from supabase import Client

from app.exceptions import BackendError, ForbiddenError, SubscriptionNotFoundError
from core.models.entities import DeliveryStatus, PauseCreate, UserRole
from lib.utils import error_message, normalize_uuid, same_id

logger = logging.getLogger(__name__)


class PauseService:
    """
    Service for pause requests.

    Every query runs through the caller-scoped client, so RLS policies
    apply on top of the ownership check done here.
    """

    @staticmethod
    def get_subscription_owner(client: Client, subscription_id: str | int) -> str:
        """
        Return the user_id that owns a subscription.

        Raises:
            SubscriptionNotFoundError: If no row is visible or the query fails
        """
        try:
            response = (
                client.table("subscriptions")
                .select("user_id")
                .eq("id", str(subscription_id))
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.warning(f"Subscription lookup failed for {subscription_id}: {e}")
            raise SubscriptionNotFoundError(subscription_id) from e

        if not response.data:
            raise SubscriptionNotFoundError(subscription_id)
        return response.data[0].get("user_id")

    @staticmethod
    def get_role(client: Client, user_id: str) -> str | None:
        """Role from profiles, or None when the profile can't be read."""
        try:
            response = (
                client.table("profiles")
                .select("role")
                .eq("id", user_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.warning(f"Profile lookup failed for {user_id}: {e}")
            return None

        if not response.data:
            return None
        return response.data[0].get("role")

    @staticmethod
    def mark_deliveries_skipped(
        client: Client,
        subscription_id: str | int,
        start_date: date,
        end_date: date,
    ) -> int:
        """
        Set status=skipped_paused on deliveries inside [start_date, end_date].

        Returns:
            Number of rows the backend reported as updated

        Raises:
            Exception: Whatever the Supabase client raised
        """
        response = (
            client.table("deliveries")
            .update({"status": DeliveryStatus.SKIPPED_PAUSED.value})
            .eq("subscription_id", str(subscription_id))
            .gte("date", start_date.isoformat())
            .lte("date", end_date.isoformat())
            .execute()
        )
        return len(response.data or [])

    @staticmethod
    def request_pause(
        client: Client,
        caller_id: UUID | str,
        subscription_id: str | int,
        start_date: date,
        end_date: date,
        reason: str | None = None,
    ) -> dict[str, Any]:
        """
        Create a pause on behalf of the caller.

        Args:
            client: Caller-scoped Supabase client
            caller_id: Authenticated user id
            subscription_id: Subscription to pause
            start_date: First paused day, inclusive
            end_date: Last paused day, inclusive
            reason: Optional note stored with the pause

        Returns:
            The created pause row

        Raises:
            SubscriptionNotFoundError: Subscription doesn't exist or isn't visible
            ForbiddenError: Caller neither owns the subscription nor is an admin
            BackendError: The insert failed (including trigger rejections)
        """
        caller = normalize_uuid(caller_id)

        owner_id = PauseService.get_subscription_owner(client, subscription_id)
        role = PauseService.get_role(client, caller)

        if not same_id(owner_id, caller) and role != UserRole.ADMIN.value:
            logger.info(f"User {caller} (role={role}) may not pause subscription {subscription_id}")
            raise ForbiddenError("Only the subscription owner or an admin can request a pause")

        pause = PauseCreate(
            subscription_id=subscription_id,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            created_by=caller,
        )

        try:
            response = client.table("pauses").insert(pause.to_row()).execute()
        except Exception as e:
            logger.error(f"Failed to create pause for subscription {subscription_id}: {e}")
            raise BackendError(error_message(e), operation="insert_pause") from e

        if not response.data:
            raise BackendError("Pause insert returned no data", operation="insert_pause")
        created = response.data[0]
        logger.info(f"Created pause {created.get('id')} for subscription {subscription_id} ({start_date}..{end_date})")

        try:
            skipped = PauseService.mark_deliveries_skipped(client, subscription_id, start_date, end_date)
            logger.info(f"Marked {skipped} deliveries as skipped_paused for subscription {subscription_id}")
        except Exception as e:
            logger.error(f"Failed to update deliveries, but pause was created: {error_message(e)}")

        return created
