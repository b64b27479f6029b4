# =============================================================================
# core/models/requests.py - Handler Request Bodies
# =============================================================================
# Input schemas for the four HTTP handlers.
#
# Every field is optional at the schema level so that an absent or empty
# value reaches the handler and is reported as "Missing required parameters"
# (400) rather than as a schema error. Each model lists the fields it
# actually requires in REQUIRED_FIELDS.
# =============================================================================

from datetime import date
from typing import Any, ClassVar

from pydantic import BaseModel, Field, field_validator

# Row identifiers are UUID strings (users, drivers) or bigint ids
# (addresses, subscriptions), so both are accepted.
RowId = str | int


class HandlerRequest(BaseModel):
    """Base class: blank strings count as missing."""

    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ()

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def missing_fields(self) -> list[str]:
        """Names of required fields that are absent or falsy."""
        return [name for name in self.REQUIRED_FIELDS if not getattr(self, name)]


class MacroRangeRequest(HandlerRequest):
    """
    Body for POST /compute-macros-range.

    Example:
        {"user_id": "550e8400-...", "start_date": "2024-01-01", "end_date": "2024-01-07"}
    """

    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("user_id", "start_date", "end_date")

    user_id: RowId | None = Field(default=None, description="Client whose macros to report")
    start_date: date | None = Field(default=None, description="First day, inclusive")
    end_date: date | None = Field(default=None, description="Last day, inclusive")


class EtaRequest(HandlerRequest):
    """
    Body for POST /eta.

    Example:
        {"driver_id": "660e8400-...", "client_address_id": 12}
    """

    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("driver_id", "client_address_id")

    driver_id: RowId | None = Field(default=None, description="Driver profile id")
    client_address_id: RowId | None = Field(default=None, description="Delivery address id")


class PauseRequest(HandlerRequest):
    """
    Body for POST /request-pause.

    Example:
        {"subscription_id": 7, "start_date": "2024-02-01", "end_date": "2024-02-03",
         "reason": "Travelling"}
    """

    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("subscription_id", "start_date", "end_date")

    subscription_id: RowId | None = Field(default=None, description="Subscription to pause")
    start_date: date | None = Field(default=None, description="First paused day, inclusive")
    end_date: date | None = Field(default=None, description="Last paused day, inclusive")
    reason: str | None = Field(default=None, max_length=500, description="Optional note")
