# =============================================================================
# app/routers/macros.py - Macro-Range Report Endpoint
# =============================================================================
# Returns a client's per-day macro totals between two dates.
# Runs under the caller's token, so RLS decides which rows are visible.
# =============================================================================

from typing import Any

from fastapi import APIRouter

from app.dependencies import UserClientDep
from app.exceptions import MissingParametersError
from core.models.requests import MacroRangeRequest
from core.services.macro_service import MacroReportService

router = APIRouter()


@router.post("/compute-macros-range")
def compute_macros_range(
    request: MacroRangeRequest,
    client: UserClientDep,
) -> list[dict[str, Any]]:
    """
    Macro report rows for `user_id` with `start_date <= date <= end_date`.

    Rows come back ordered by date, exactly as the v_client_macro_range
    view returns them.

    Errors:
        400: user_id, start_date or end_date missing
        500: query failed (plain-text message)
    """
    missing = request.missing_fields()
    if missing:
        raise MissingParametersError(missing)

    return MacroReportService.fetch_range(
        client,
        user_id=request.user_id,
        start_date=request.start_date,
        end_date=request.end_date,
    )
