"""
Unit tests for trackheat data models and point validation.
"""

import math

import pytest

from trackheat.config.loader import ConfigurationError
from trackheat.core.models import CanvasSpec, GeoBounds, GeoPoint, Track
from trackheat.core.validation import drop_invalid_points, is_renderable

NAN = math.nan


class TestGeoPoint:
    """Test GeoPoint dataclass."""

    def test_valid_point(self):
        """Test finite coordinates are valid."""
        assert GeoPoint(longitude=10.0, latitude=60.0).is_valid

    def test_nan_point(self):
        """Test a NaN on either axis invalidates the point."""
        assert not GeoPoint(longitude=NAN, latitude=60.0).is_valid
        assert not GeoPoint(longitude=10.0, latitude=NAN).is_valid

    def test_immutable(self):
        """Test points cannot be modified after creation."""
        point = GeoPoint(longitude=1.0, latitude=2.0)
        with pytest.raises(AttributeError):
            point.longitude = 3.0


class TestGeoBounds:
    """Test GeoBounds fail-fast construction."""

    def test_valid_bounds_center(self):
        """Test the center is the midpoint of both axes."""
        bounds = GeoBounds(min_longitude=9.8, max_longitude=10.2, min_latitude=59.9, max_latitude=60.1)
        assert bounds.center.longitude == pytest.approx(10.0)
        assert bounds.center.latitude == pytest.approx(60.0)

    @pytest.mark.parametrize("lon_range,lat_range", [
        ((10.0, 10.0), (59.0, 60.0)),
        ((10.0, 11.0), (60.0, 60.0)),
        ((11.0, 10.0), (59.0, 60.0)),
        ((10.0, 11.0), (NAN, 60.0)),
    ])
    def test_degenerate_bounds_raise(self, lon_range, lat_range):
        """Test zero, inverted or non-finite ranges raise ConfigurationError."""
        with pytest.raises(ConfigurationError):
            GeoBounds(
                min_longitude=lon_range[0], max_longitude=lon_range[1],
                min_latitude=lat_range[0], max_latitude=lat_range[1],
            )


class TestCanvasSpec:
    """Test CanvasSpec validation."""

    def test_valid_spec(self):
        """Test positive dimensions are accepted."""
        spec = CanvasSpec(width_px=1000, height_px=500)
        assert spec.aspect_ratio == 2.0

    @pytest.mark.parametrize("width,height", [(0, 10), (10, 0), (-5, 10), (10.5, 10)])
    def test_invalid_spec_raises(self, width, height):
        """Test non-positive or non-integer dimensions raise ConfigurationError."""
        with pytest.raises(ConfigurationError):
            CanvasSpec(width_px=width, height_px=height)


class TestTrack:
    """Test Track dataclass."""

    def test_defaults(self):
        """Test a track without a manifest has an empty category."""
        track = Track(source="a.gpx")
        assert track.category == ""
        assert len(track) == 0


class TestDropInvalidPoints:
    """Test NaN filtering."""

    def test_removes_exactly_nan_points_in_order(self):
        """Test NaN points are removed and the others keep their order."""
        points = [
            GeoPoint(1.0, 1.0),
            GeoPoint(NAN, 2.0),
            GeoPoint(3.0, 3.0),
            GeoPoint(4.0, NAN),
            GeoPoint(5.0, 5.0),
            GeoPoint(NAN, NAN),
        ]
        result = drop_invalid_points(points)
        assert [p.longitude for p in result] == [1.0, 3.0, 5.0]

    def test_all_valid_unchanged(self):
        """Test a clean sequence is returned unchanged, duplicates included."""
        points = [GeoPoint(1.0, 1.0), GeoPoint(1.0, 1.0), GeoPoint(2.0, 2.0)]
        assert drop_invalid_points(points) == points

    def test_input_not_modified(self):
        """Test the input sequence is left alone."""
        points = [GeoPoint(NAN, 1.0), GeoPoint(1.0, 1.0)]
        drop_invalid_points(points)
        assert len(points) == 2

    def test_empty(self):
        """Test empty input gives empty output."""
        assert drop_invalid_points([]) == []


class TestIsRenderable:
    """Test the two-vertex minimum."""

    def test_minimum_two_points(self):
        """Test fewer than two points cannot be drawn."""
        assert not is_renderable([])
        assert not is_renderable([GeoPoint(1.0, 1.0)])
        assert is_renderable([GeoPoint(1.0, 1.0), GeoPoint(2.0, 2.0)])
