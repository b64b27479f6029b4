# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - entities.py: Rows this service reads/writes (profiles, pauses, menus...)
# - requests.py: Handler request bodies
# - responses.py: Handler response bodies
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# Entities - Rows in the Supabase project
# -----------------------------------------------------------------------------
from .entities import (
    Address,
    DeliveryCreate,
    DeliveryStatus,
    DriverLocation,
    MealSlot,
    MenuInstance,
    MenuTemplate,
    PauseCreate,
    Profile,
    Recipe,
    Subscription,
    SubscriptionStatus,
    UserRole,
)

# -----------------------------------------------------------------------------
# Requests - Handler inputs
# -----------------------------------------------------------------------------
from .requests import (
    EtaRequest,
    HandlerRequest,
    MacroRangeRequest,
    PauseRequest,
    RowId,
)

# -----------------------------------------------------------------------------
# Responses - Handler outputs
# -----------------------------------------------------------------------------
from .responses import EtaResponse, ScheduleResult

__all__ = [
    # Entities
    "Address",
    "DeliveryCreate",
    "DeliveryStatus",
    "DriverLocation",
    "MealSlot",
    "MenuInstance",
    "MenuTemplate",
    "PauseCreate",
    "Profile",
    "Recipe",
    "Subscription",
    "SubscriptionStatus",
    "UserRole",
    # Requests
    "EtaRequest",
    "HandlerRequest",
    "MacroRangeRequest",
    "PauseRequest",
    "RowId",
    # Responses
    "EtaResponse",
    "ScheduleResult",
]
