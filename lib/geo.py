# =============================================================================
# lib/geo.py - Distance and ETA Helpers
# =============================================================================
# Pure functions used by the ETA estimator:
# - haversine_km: great-circle distance between two lat/lng points
# - eta_minutes: distance + average speed -> whole minutes
# - classify_eta: minutes -> customer-facing status label
#
# No I/O here, so everything is unit-testable in isolation.
# =============================================================================

import math
from enum import Enum

EARTH_RADIUS_KM = 6371.0

# Status thresholds, in minutes
ARRIVING_SOON_BELOW = 2
OUT_FOR_DELIVERY_ABOVE = 30


class EtaStatus(str, Enum):
    """Label shown to the client next to the ETA."""
    ARRIVING_SOON = "Arriving soon"
    ARRIVING = "Arriving"
    OUT_FOR_DELIVERY = "Out for delivery"


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Great-circle distance between two points, in kilometres.

    Uses the cosine form of the haversine:
        a = 0.5 - cos(dlat)/2 + cos(lat1) * cos(lat2) * (1 - cos(dlon))/2
        d = 2R * asin(sqrt(a))

    Args:
        lat1, lon1: First point in degrees
        lat2, lon2: Second point in degrees

    Returns:
        Distance in km. Symmetric in its two points; 0 for identical points.

    Example:
        >>> round(haversine_km(19.9975, 73.7898, 20.0084, 73.7639), 1)
        3.0
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)

    a = (
        0.5 - math.cos(d_lat) / 2
        + math.cos(phi1) * math.cos(phi2) * (1 - math.cos(d_lon)) / 2
    )
    # Float rounding can push a just outside [0, 1]
    a = min(1.0, max(0.0, a))
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(a))


def eta_minutes(distance_km: float, speed_kmph: float) -> int:
    """
    Convert a distance to a travel time in whole minutes.

    Halves round up (2.5 -> 3), matching how client apps round.

    Raises:
        ValueError: If speed_kmph is not positive
    """
    if speed_kmph <= 0:
        raise ValueError(f"Average speed must be positive, got {speed_kmph}")
    return math.floor(distance_km / speed_kmph * 60 + 0.5)


def classify_eta(minutes: int) -> EtaStatus:
    """
    Map an ETA to its status label.

    < 2 min  -> Arriving soon
    > 30 min -> Out for delivery
    else     -> Arriving
    """
    if minutes < ARRIVING_SOON_BELOW:
        return EtaStatus.ARRIVING_SOON
    if minutes > OUT_FOR_DELIVERY_ABOVE:
        return EtaStatus.OUT_FOR_DELIVERY
    return EtaStatus.ARRIVING
