# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
#
# Two client flavours:
# - UserClientDep: acts as the caller (anon key + caller's bearer token)
# - ServiceClientDep: service_role client, only for the scheduler route
# =============================================================================

from typing import Annotated, Optional

from fastapi import Depends
from supabase import Client

from app.auth.dependencies import get_bearer_token
from app.config import settings
from lib.supabase_client import SupabaseClient


def get_user_client(
    token: Optional[str] = Depends(get_bearer_token)
) -> Client:
    """Supabase client scoped to the caller's token."""
    return SupabaseClient.for_user(token)


def get_service_client() -> Client:
    """
    Elevated Supabase client.

    Returns the shared service_role client.
    """
    return SupabaseClient.get_service_client()


def get_avg_speed_kmph() -> float:
    """Average driver speed used by the ETA estimator."""
    return settings.DEFAULT_AVG_SPEED_KMPH


# Type aliases for dependency injection
UserClientDep = Annotated[Client, Depends(get_user_client)]
ServiceClientDep = Annotated[Client, Depends(get_service_client)]
AvgSpeedDep = Annotated[float, Depends(get_avg_speed_kmph)]
