"""
Unit tests for great-circle distance and coordinate validation.
"""

import math

import pytest

from qrintake.core.geo import EARTH_RADIUS_METERS, distance_meters, is_valid_coordinate


class TestDistanceMeters:
    def test_same_point_is_zero(self):
        assert distance_meters(37.7749, -122.4194, 37.7749, -122.4194) == 0

    def test_symmetric(self):
        a = distance_meters(40.7128, -74.0060, 51.5074, -0.1278)
        b = distance_meters(51.5074, -0.1278, 40.7128, -74.0060)
        assert a == pytest.approx(b)

    def test_small_offset_is_about_190_meters(self):
        """0.0017 degrees of latitude is roughly 189 m."""
        d = distance_meters(0.0, 0.0, 0.0017, 0.0)
        assert d == pytest.approx(189.0, abs=1.0)

    def test_one_degree_of_latitude(self):
        expected = EARTH_RADIUS_METERS * math.pi / 180
        assert distance_meters(10.0, 20.0, 11.0, 20.0) == pytest.approx(expected, rel=1e-9)

    def test_antipodal_points(self):
        assert distance_meters(0.0, 0.0, 0.0, 180.0) == pytest.approx(
            math.pi * EARTH_RADIUS_METERS
        )

    def test_grows_with_separation(self):
        near = distance_meters(0.0, 0.0, 0.001, 0.0)
        mid = distance_meters(0.0, 0.0, 0.002, 0.0)
        far = distance_meters(0.0, 0.0, 0.01, 0.0)
        assert 0 < near < mid < far

    def test_crosses_antimeridian(self):
        d = distance_meters(0.0, 179.9995, 0.0, -179.9995)
        assert d == pytest.approx(111.2, abs=0.5)


class TestIsValidCoordinate:
    @pytest.mark.parametrize(
        "latitude, longitude",
        [(0, 0), (90, 180), (-90, -180), (37.7749, -122.4194), (0.0, 0)],
    )
    def test_valid(self, latitude, longitude):
        assert is_valid_coordinate(latitude, longitude) is True

    @pytest.mark.parametrize(
        "latitude, longitude",
        [
            (91, 0),
            (0, 181),
            (-90.0001, 0),
            (None, 0),
            (0, None),
            ("37.7", "-122.4"),
            (True, 0),
            (float("nan"), 0),
            (0, float("inf")),
            (10**400, 0),
            (0, -(10**400)),
        ],
    )
    def test_invalid(self, latitude, longitude):
        assert is_valid_coordinate(latitude, longitude) is False
