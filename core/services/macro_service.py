# =============================================================================
# core/services/macro_service.py - Macro-Range Report
# =============================================================================
# Reads per-day macro totals for one client from the v_client_macro_range
# view. The view does the joining and summing; this service only filters
# and orders.
# =============================================================================

import logging
from datetime import date
from typing import Any

from supabase import Client

from app.exceptions import BackendError
from lib.utils import error_message

logger = logging.getLogger(__name__)

MACRO_RANGE_VIEW = "v_client_macro_range"


class MacroReportService:
    """Service for the macro-range report."""

    @staticmethod
    def fetch_range(
        client: Client,
        user_id: str | int,
        start_date: date,
        end_date: date,
    ) -> list[dict[str, Any]]:
        """
        Fetch report rows for a user between two dates, inclusive.

        Args:
            client: Caller-scoped Supabase client (RLS applies)
            user_id: Client whose rows to return
            start_date: First day, inclusive
            end_date: Last day, inclusive

        Returns:
            View rows ordered by date ascending, unmodified

        Raises:
            BackendError: If the query fails
        """
        try:
            response = (
                client.table(MACRO_RANGE_VIEW)
                .select("*")
                .eq("user_id", str(user_id))
                .gte("date", start_date.isoformat())
                .lte("date", end_date.isoformat())
                .order("date", desc=False)
                .execute()
            )
        except Exception as e:
            logger.error(f"Macro range query failed for user {user_id}: {e}")
            raise BackendError(error_message(e), operation="fetch_macro_range") from e

        rows = response.data or []
        logger.debug(f"Fetched {len(rows)} macro rows for user {user_id} ({start_date}..{end_date})")
        return rows
