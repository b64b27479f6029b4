# =============================================================================
# tests/test_geo.py - Distance and ETA Helper Tests
# =============================================================================
# Unit tests for lib/geo.py:
# - Haversine distance (zero, symmetry, known distances)
# - Minutes rounding
# - Status thresholds
#
# Run with: pytest tests/test_geo.py -v
# =============================================================================

import pytest

from lib.geo import (
    EARTH_RADIUS_KM,
    EtaStatus,
    classify_eta,
    eta_minutes,
    haversine_km,
)

# College Road and Gangapur Road, Nashik
DRIVER = (19.9975, 73.7898)
CLIENT = (20.0084, 73.7639)


class TestHaversine:
    """Tests for haversine_km."""

    def test_identical_points_are_zero(self):
        assert haversine_km(*CLIENT, *CLIENT) == 0.0

    def test_symmetric(self):
        assert haversine_km(*DRIVER, *CLIENT) == pytest.approx(haversine_km(*CLIENT, *DRIVER))

    def test_nashik_example(self):
        """Two Nashik addresses are just under 3 km apart."""
        assert haversine_km(*DRIVER, *CLIENT) == pytest.approx(2.97, abs=0.05)

    def test_one_degree_of_latitude(self):
        expected = 2 * 3.141592653589793 * EARTH_RADIUS_KM / 360
        assert haversine_km(0.0, 10.0, 1.0, 10.0) == pytest.approx(expected, rel=1e-9)

    def test_antipodal_points(self):
        """Half the circumference; exercises the clamp at a = 1."""
        assert haversine_km(0.0, 0.0, 0.0, 180.0) == pytest.approx(3.141592653589793 * EARTH_RADIUS_KM)


class TestEtaMinutes:
    """Tests for eta_minutes."""

    def test_nashik_example_is_nine_minutes(self):
        distance = haversine_km(*DRIVER, *CLIENT)
        assert eta_minutes(distance, 20.0) == 9

    @pytest.mark.parametrize("distance,speed,expected", [
        (0.0, 20.0, 0),
        (0.4, 20.0, 1),   # 1.2 min
        (0.6, 20.0, 2),   # 1.8 min
        (10.0, 20.0, 30),
        (10.5, 20.0, 32),
    ])
    def test_rounds_to_nearest_minute(self, distance, speed, expected):
        assert eta_minutes(distance, speed) == expected

    @pytest.mark.parametrize("speed", [0, -5.0])
    def test_non_positive_speed_rejected(self, speed):
        with pytest.raises(ValueError):
            eta_minutes(1.0, speed)


class TestClassifyEta:
    """Tests for classify_eta thresholds."""

    @pytest.mark.parametrize("minutes,expected", [
        (0, EtaStatus.ARRIVING_SOON),
        (1, EtaStatus.ARRIVING_SOON),
        (2, EtaStatus.ARRIVING),
        (9, EtaStatus.ARRIVING),
        (30, EtaStatus.ARRIVING),
        (31, EtaStatus.OUT_FOR_DELIVERY),
    ])
    def test_thresholds(self, minutes, expected):
        assert classify_eta(minutes) == expected

    def test_labels(self):
        assert EtaStatus.ARRIVING_SOON.value == "Arriving soon"
        assert EtaStatus.ARRIVING.value == "Arriving"
        assert EtaStatus.OUT_FOR_DELIVERY.value == "Out for delivery"
