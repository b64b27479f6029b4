# =============================================================================
# core/models/entities.py - Domain Entities
# =============================================================================
# Rows as this service reads and writes them. The tables themselves (and
# the triggers guarding them) live in the Supabase project, not here.
#
# Status and slot values are stored as plain text columns, so every enum
# subclasses str and is written with .value.
# =============================================================================

import datetime as dt
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from core.models.requests import RowId


# =============================================================================
# Enums
# =============================================================================

class UserRole(str, Enum):
    """Role stored on profiles.role; gates authorization decisions."""
    ADMIN = "admin"
    CHEF = "chef"
    DRIVER = "driver"
    CLIENT = "client"


class SubscriptionStatus(str, Enum):
    """Only active subscriptions receive deliveries."""
    ACTIVE = "active"
    PAUSED = "paused"
    CANCELLED = "cancelled"


class DeliveryStatus(str, Enum):
    """
    Lifecycle of a delivery row.

    - scheduled: created by the daily scheduler
    - skipped_paused: falls inside a pause window
    - out_for_delivery / delivered: set by the driver app
    """
    SCHEDULED = "scheduled"
    SKIPPED_PAUSED = "skipped_paused"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"


class MealSlot(str, Enum):
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"


# =============================================================================
# People and places
# =============================================================================

class Profile(BaseModel):
    id: str
    role: UserRole
    full_name: str | None = None


class Address(BaseModel):
    id: RowId | None = None
    user_id: str
    line1: str
    city: str
    pincode: str
    lat: float | None = None
    lng: float | None = None


class DriverLocation(BaseModel):
    """Latest row per driver (by updated_at) is authoritative."""
    driver_id: str
    lat: float | None = None
    lng: float | None = None
    updated_at: dt.datetime | None = None


# =============================================================================
# Subscriptions and pauses
# =============================================================================

class Subscription(BaseModel):
    id: RowId | None = None
    user_id: str
    status: SubscriptionStatus = SubscriptionStatus.ACTIVE
    start_date: dt.date
    next_billing_date: dt.date | None = None


class PauseCreate(BaseModel):
    """
    Row inserted into pauses.

    Overlap with existing pauses and the per-subscription day limit are
    checked by a database trigger on insert.
    """
    subscription_id: RowId
    start_date: dt.date
    end_date: dt.date
    reason: str | None = None
    created_by: str

    def to_row(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


# =============================================================================
# Menu
# =============================================================================

class Recipe(BaseModel):
    name: str
    kcal: int = Field(..., ge=0)
    protein_g: float = Field(..., ge=0)
    carbs_g: float = Field(..., ge=0)
    fats_g: float = Field(..., ge=0)


class MenuTemplate(BaseModel):
    """One (week_no, dow) cell of the biweekly menu."""
    week_no: int = Field(..., ge=1, le=2)
    dow: int = Field(..., ge=1, le=7, description="ISO weekday, 1 = Monday")
    recipe_id: RowId
    meal_slot: MealSlot = MealSlot.LUNCH


class MenuInstance(BaseModel):
    """A template resolved to one calendar date."""
    date: dt.date
    week_no: int = Field(..., ge=1, le=2)
    recipe_id: RowId
    meal_slot: str | None = None

    def to_row(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


# =============================================================================
# Deliveries
# =============================================================================

class DeliveryCreate(BaseModel):
    subscription_id: RowId
    date: dt.date
    status: DeliveryStatus = DeliveryStatus.SCHEDULED
    meal_slot: MealSlot = MealSlot.LUNCH

    def to_row(self) -> dict[str, Any]:
        return self.model_dump(mode="json")
