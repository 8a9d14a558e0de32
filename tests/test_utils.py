"""
Tests for SkyDrift utility functions.
"""

import math
import pytest
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from skydrift.utils import (
    haversine_distance,
    calculate_bearing,
    compass_label,
    is_finite_number,
    validate_coordinates,
    format_altitude,
    format_distance,
    format_speed,
    format_bearing,
)


class TestHaversineDistance:
    """Tests for haversine_distance function."""

    def test_same_point(self):
        """Distance between same point should be 0."""
        dist = haversine_distance(49.3508, 8.1364, 49.3508, 8.1364)
        assert dist == 0.0

    def test_quarter_great_circle(self):
        """Equator to 90°E is a quarter of the circumference."""
        dist = haversine_distance(0, 0, 0, 90)
        assert dist == pytest.approx(10007.5, abs=0.1)

    def test_symmetry(self):
        """Distance is the same in both directions."""
        pairs = [
            (49.3508, 8.1364, 50.1109, 8.6821),
            (-33.8688, 151.2093, -37.8136, 144.9631),
            (89.0, -179.0, -89.0, 179.0),
        ]
        for lat1, lon1, lat2, lon2 in pairs:
            assert haversine_distance(lat1, lon1, lat2, lon2) == pytest.approx(
                haversine_distance(lat2, lon2, lat1, lon1)
            )

    def test_antimeridian(self):
        """Points either side of the antimeridian are close."""
        dist = haversine_distance(0, 179.5, 0, -179.5)
        assert dist == pytest.approx(111.19, abs=0.1)

    def test_near_antipodal_points(self):
        """Antipodal pairs give half the circumference instead of raising."""
        half_circumference = math.pi * 6371.0
        for lat in (-87.5, -45.3, 0.0, 12.7, 87.5):
            dist = haversine_distance(lat, 0, -lat, 180)
            assert dist == pytest.approx(half_circumference, rel=1e-6)

    @pytest.mark.parametrize(
        "bad",[float("nan"), float("inf"), float("-inf"), None, "10", True]
    )
    def test_invalid_input_returns_zero(self, bad):
        """Any non-finite or non-numeric argument gives exactly 0."""
        assert haversine_distance(bad, 0, 10, 10) == 0
        assert haversine_distance(0, bad, 10, 10) == 0
        assert haversine_distance(0, 0, bad, 10) == 0
        assert haversine_distance(0, 0, 10, bad) == 0


class TestBearing:
    """Tests for calculate_bearing function."""

    def test_due_east(self):
        assert calculate_bearing(0, 0, 0, 10) == pytest.approx(90.0)

    def test_due_north(self):
        assert calculate_bearing(0, 0, 10, 0) == pytest.approx(0.0)

    def test_due_south_and_west(self):
        assert calculate_bearing(10, 0, 0, 0) == pytest.approx(180.0)
        assert calculate_bearing(0, 10, 0, 0) == pytest.approx(270.0)

    def test_range(self):
        """Bearing always falls in [0, 360)."""
        for lat2 in (-60, -1, 0, 1, 60):
            for lon2 in (-170, -1, 0, 1, 170):
                bearing = calculate_bearing(0.5, 0.5, lat2, lon2)
                assert 0 <= bearing < 360

    def test_invalid_input(self):
        assert calculate_bearing(float("nan"), 0, 1, 1) == 0.0


class TestCompassLabel:
    """Tests for compass_label function."""

    def test_cardinal_directions(self):
        assert compass_label(0) == "North"
        assert compass_label(90) == "East"
        assert compass_label(180) == "South"
        assert compass_label(270) == "West"

    def test_intercardinal_directions(self):
        assert compass_label(45) == "Northeast"
        assert compass_label(135) == "Southeast"
        assert compass_label(225) == "Southwest"
        assert compass_label(315) == "Northwest"

    def test_sector_boundaries_round_up(self):
        """Half-way between two labels rounds to the next one."""
        assert compass_label(22.4) == "North"
        assert compass_label(22.5) == "Northeast"
        assert compass_label(359) == "North"
        assert compass_label(337.5) == "North"


class TestValidation:
    """Tests for numeric and coordinate validation."""

    def test_is_finite_number(self):
        assert is_finite_number(1) is True
        assert is_finite_number(1.5) is True
        assert is_finite_number(math.nan) is False
        assert is_finite_number(math.inf) is False
        assert is_finite_number(None) is False
        assert is_finite_number("1") is False
        assert is_finite_number(False) is False

    def test_valid_coordinates(self):
        assert validate_coordinates(49.3508, 8.1364) is True
        assert validate_coordinates(-90, -180) is True
        assert validate_coordinates(90, 180) is True

    def test_invalid_coordinates(self):
        assert validate_coordinates(100, 0) is False
        assert validate_coordinates(0, -200) is False
        assert validate_coordinates(math.nan, 0) is False


class TestFormatting:
    """Tests for formatting functions."""

    def test_format_altitude(self):
        assert format_altitude(10) == "10.00 km (32808 ft)"
        assert format_altitude(10, include_feet=False) == "10.00 km"
        assert format_altitude(None) == "N/A"

    def test_format_distance(self):
        assert format_distance(1234.56) == "1,234.6 km"
        assert format_distance(None) == "N/A"

    def test_format_speed(self):
        assert format_speed(42.0) == "42.0 km/h"
        assert format_speed(None) == "N/A"

    def test_format_bearing(self):
        assert format_bearing(270) == "270.0° (West)"
        assert format_bearing(None) == "N/A"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
