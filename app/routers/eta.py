# =============================================================================
# app/routers/eta.py - Driver ETA Endpoint
# =============================================================================
# Straight-line ETA from a driver's latest location to a client address.
#
# Missing top-level fields are a 400 with a JSON body. Every failure after
# that (unknown driver, unknown address, bad coordinates) is a 500 with the
# message as plain text.
# =============================================================================

from fastapi import APIRouter

from app.dependencies import AvgSpeedDep, UserClientDep
from app.exceptions import MissingParametersError
from core.models.requests import EtaRequest
from core.models.responses import EtaResponse
from core.services.eta_service import EtaService

router = APIRouter()


@router.post("/eta", response_model=EtaResponse)
def estimate_eta(
    request: EtaRequest,
    client: UserClientDep,
    avg_speed_kmph: AvgSpeedDep,
) -> EtaResponse:
    """
    Estimate when a driver reaches a client address.

    Returns `{eta_minutes, status, distance_km}` where status is one of
    "Arriving soon" (< 2 min), "Arriving", or "Out for delivery" (> 30 min).
    """
    missing = request.missing_fields()
    if missing:
        raise MissingParametersError(missing)

    return EtaService.estimate(
        client,
        driver_id=request.driver_id,
        client_address_id=request.client_address_id,
        avg_speed_kmph=avg_speed_kmph,
    )
