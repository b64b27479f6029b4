# =============================================================================
# core/services/eta_service.py - Driver ETA
# =============================================================================
# Estimates how long a driver needs to reach a client address:
# 1. Latest driver_locations row for the driver
# 2. The client's addresses row
# 3. Haversine distance -> minutes at the configured average speed
# 4. Minutes -> status label
#
# This is a straight-line heuristic, not routing.
# =============================================================================

import logging
from typing import Any

from supabase import Client

from app.exceptions import (
    AddressNotFoundError,
    DriverLocationNotFoundError,
    InvalidLocationError,
)
from core.models.entities import DriverLocation
from core.models.responses import EtaResponse
from lib.geo import classify_eta, eta_minutes, haversine_km

logger = logging.getLogger(__name__)


class EtaService:
    """Service for driver ETA estimates."""

    @staticmethod
    def fetch_driver_location(client: Client, driver_id: str | int) -> DriverLocation:
        """
        Most recent location row for a driver, newest updated_at first.

        Raises:
            DriverLocationNotFoundError: If the driver has no rows or the query fails
        """
        try:
            response = (
                client.table("driver_locations")
                .select("driver_id, lat, lng, updated_at")
                .eq("driver_id", str(driver_id))
                .order("updated_at", desc=True)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.warning(f"Driver location lookup failed for {driver_id}: {e}")
            raise DriverLocationNotFoundError(driver_id) from e

        if not response.data:
            raise DriverLocationNotFoundError(driver_id)
        return DriverLocation.model_validate(response.data[0])

    @staticmethod
    def fetch_address(client: Client, address_id: str | int) -> dict[str, Any]:
        """
        Coordinates of a client address.

        Raises:
            AddressNotFoundError: If the address doesn't exist or the query fails
        """
        try:
            response = (
                client.table("addresses")
                .select("lat, lng")
                .eq("id", str(address_id))
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.warning(f"Address lookup failed for {address_id}: {e}")
            raise AddressNotFoundError(address_id) from e

        if not response.data:
            raise AddressNotFoundError(address_id)
        return response.data[0]

    @staticmethod
    def estimate(
        client: Client,
        driver_id: str | int,
        client_address_id: str | int,
        avg_speed_kmph: float,
    ) -> EtaResponse:
        """
        Estimate the driver's arrival time at a client address.

        Args:
            client: Caller-scoped Supabase client
            driver_id: Driver profile id
            client_address_id: Destination address id
            avg_speed_kmph: Assumed average speed

        Returns:
            EtaResponse with eta_minutes, status and distance_km

        Raises:
            DriverLocationNotFoundError, AddressNotFoundError: Lookup misses
            InvalidLocationError: A coordinate is missing or zero
        """
        driver = EtaService.fetch_driver_location(client, driver_id)
        address = EtaService.fetch_address(client, client_address_id)

        # None and 0 are both rejected
        coordinates = (driver.lat, driver.lng, address.get("lat"), address.get("lng"))
        if not all(coordinates):
            raise InvalidLocationError()

        driver_lat, driver_lng, client_lat, client_lng = (float(value) for value in coordinates)
        distance_km = haversine_km(driver_lat, driver_lng, client_lat, client_lng)
        minutes = eta_minutes(distance_km, avg_speed_kmph)
        status = classify_eta(minutes)

        logger.info(
            f"ETA driver={driver_id} address={client_address_id}: "
            f"{distance_km:.2f} km, {minutes} min ({status.value})"
        )
        return EtaResponse(eta_minutes=minutes, status=status, distance_km=distance_km)
