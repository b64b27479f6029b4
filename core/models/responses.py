# =============================================================================
# core/models/responses.py - Handler Response Bodies
# =============================================================================
# Output schemas for handlers whose response is not passed through verbatim.
# The macro report and the created pause are returned as the rows Supabase
# gives back, so they have no schema here.
# =============================================================================

import datetime as dt

from pydantic import BaseModel, Field

from lib.geo import EtaStatus


class EtaResponse(BaseModel):
    """
    Result of POST /eta.

    Example:
        {"eta_minutes": 9, "status": "Arriving", "distance_km": 2.96}
    """

    eta_minutes: int = Field(..., ge=0, description="Whole minutes until arrival")
    status: EtaStatus = Field(..., description="Customer-facing label")
    distance_km: float = Field(..., ge=0, description="Great-circle distance, unrounded")


class ScheduleResult(BaseModel):
    """
    Outcome of one daily scheduler run.

    Example:
        {"message": "Processed 2 deliveries.", "date": "2024-01-15", "menu_week": 1,
         "menu_created": true, "deliveries_created": 2, "skipped": false}
    """

    message: str
    date: dt.date | None = None
    menu_week: int | None = Field(default=None, ge=1, le=2)
    menu_created: bool = False
    deliveries_created: int = Field(default=0, ge=0)
    skipped: bool = Field(default=False, description="True on rest days")
