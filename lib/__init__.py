# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Service-role and caller-scoped Supabase clients
# - geo.py: Haversine distance, ETA minutes and status labels
# - delivery_calendar.py: Asia/Kolkata "today", ISO week, menu week parity
# - utils.py: Shared utilities (UUID normalization, error messages)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.geo import EtaStatus, classify_eta, eta_minutes, haversine_km
from lib.delivery_calendar import (
    DELIVERY_TIMEZONE,
    delivery_today,
    is_rest_day,
    iso_day_of_week,
    iso_week_number,
    menu_week_for,
)
from lib.utils import error_message, normalize_uuid, same_id

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Geo
    "EtaStatus",
    "classify_eta",
    "eta_minutes",
    "haversine_km",
    # Calendar
    "DELIVERY_TIMEZONE",
    "delivery_today",
    "is_rest_day",
    "iso_day_of_week",
    "iso_week_number",
    "menu_week_for",
    # Utils
    "error_message",
    "normalize_uuid",
    "same_id",
]
