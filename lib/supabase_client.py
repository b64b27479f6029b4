# =============================================================================
# lib/supabase_client.py - Supabase Client Factory
# =============================================================================
# This module builds the two kinds of Supabase clients the service uses:
#
# - Service client: created once with the service_role key. Bypasses Row
#   Level Security. Only the daily scheduler, the Celery worker and the seed
#   script may use it, and they receive it as an explicit argument.
# - User client: created per request with the anon key and the caller's
#   bearer token, so every query runs under the caller's RLS policies.
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   admin = SupabaseClient.get_service_client()
#   scoped = SupabaseClient.for_user(token)
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from supabase import Client, ClientOptions, create_client

from app.config import settings

# Set up logging for this module
logger = logging.getLogger(__name__)


class SupabaseClientError(Exception):
    """
    Error during Supabase client setup.

    Provides actionable error messages:
    "Errors should tell HOW to fix, not just WHAT failed."
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class SupabaseClient:
    """
    Factory for Supabase clients.

    The service client is a lazily created singleton. User clients are
    never cached because each one carries a single caller's token.

    Example:
        admin = SupabaseClient.get_service_client()
        rows = admin.table("subscriptions").select("id").eq("status", "active").execute().data
    """

    _service_instance: Client | None = None

    @classmethod
    def get_service_client(cls) -> Client:
        """
        Get or create the elevated (service_role) client.

        Returns:
            Client: Supabase client instance

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._service_instance is None:
            try:
                cls._service_instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_ROLE_KEY,
                )
                logger.info("Supabase service client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase service client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY in your .env file",
                ) from e
        return cls._service_instance

    @classmethod
    def for_user(cls, access_token: str | None) -> Client:
        """
        Create a client that acts on behalf of the caller.

        Args:
            access_token: The caller's JWT. When None, requests go out with
                the anon key only and RLS treats them as anonymous.

        Raises:
            SupabaseClientError: If client creation fails
        """
        headers = {"Authorization": f"Bearer {access_token}"} if access_token else {}
        try:
            return create_client(
                settings.SUPABASE_URL,
                settings.SUPABASE_ANON_KEY,
                options=ClientOptions(
                    headers=headers,
                    auto_refresh_token=False,
                    persist_session=False,
                ),
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to create Supabase user client: {e}",
                code="CLIENT_INIT_FAILED",
                suggestion="Check SUPABASE_URL and SUPABASE_ANON_KEY in your .env file",
            ) from e

    @classmethod
    def reset(cls) -> None:
        """Drop the cached service client (used by tests and after key rotation)."""
        cls._service_instance = None
