# =============================================================================
# app/routers/pauses.py - Pause Request Endpoint
# =============================================================================
# Lets a client (or an admin) pause a subscription for a date range.
#
# Check order: body (400) -> caller token (401) -> subscription lookup ->
# ownership/admin (403) -> insert (201).
# =============================================================================

from typing import Any, Optional

from fastapi import APIRouter, Depends, status

from app.auth import authenticate, get_bearer_token
from app.dependencies import UserClientDep
from app.exceptions import MissingParametersError
from core.models.requests import PauseRequest
from core.services.pause_service import PauseService

router = APIRouter()


@router.post("/request-pause", status_code=status.HTTP_201_CREATED)
def request_pause(
    request: PauseRequest,
    client: UserClientDep,
    token: Optional[str] = Depends(get_bearer_token),
) -> dict[str, Any]:
    """
    Create a pause and skip the deliveries inside it.

    The created pause row is returned even if marking deliveries as
    skipped fails afterwards; that failure is only logged.

    Errors:
        400: subscription_id, start_date or end_date missing
        401: no valid session
        403: caller is neither the owner nor an admin
        500: lookup or insert failed, including overlap/day-limit
             rejections from the database (plain-text message)
    """
    missing = request.missing_fields()
    if missing:
        raise MissingParametersError(missing)

    user = authenticate(token)

    return PauseService.request_pause(
        client,
        caller_id=user.id,
        subscription_id=request.subscription_id,
        start_date=request.start_date,
        end_date=request.end_date,
        reason=request.reason,
    )
