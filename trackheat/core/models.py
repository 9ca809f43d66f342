"""
trackheat Data Models

Defines the core data structures shared by the parsers, projector, renderer
and pipeline: GeoPoint, Track, GeoBounds and CanvasSpec.
"""

import math
from dataclasses import dataclass, field
from typing import Tuple

from trackheat.config.loader import ConfigurationError

Rgba = Tuple[int, int, int, int]


@dataclass(frozen=True)
class GeoPoint:
    """A single recorded position in decimal degrees (WGS84)."""
    longitude: float
    latitude: float

    @property
    def is_valid(self) -> bool:
        return not (math.isnan(self.longitude) or math.isnan(self.latitude))


@dataclass(frozen=True)
class Track:
    """
    One recorded path read from a single source file.

    Attributes:
        source: File the points were read from
        points: Ordered positions; order defines the drawing order
        category: Activity label from the manifest ("" when no manifest is used)
    """
    source: str
    points: Tuple[GeoPoint, ...] = field(default_factory=tuple)
    category: str = ""

    def __len__(self) -> int:
        return len(self.points)


@dataclass(frozen=True)
class GeoBounds:
    """
    Visible geographic window of the output image.

    Both axes must span a positive, finite range; a degenerate window would
    make the projector divide by zero so it is rejected on construction.
    """
    min_longitude: float
    max_longitude: float
    min_latitude: float
    max_latitude: float

    def __post_init__(self):
        _check_range("longitude", self.min_longitude, self.max_longitude)
        _check_range("latitude", self.min_latitude, self.max_latitude)

    @property
    def center(self) -> GeoPoint:
        return GeoPoint(
            longitude=(self.min_longitude + self.max_longitude) / 2,
            latitude=(self.min_latitude + self.max_latitude) / 2,
        )


@dataclass(frozen=True)
class CanvasSpec:
    """Pixel dimensions of the output raster."""
    width_px: int
    height_px: int

    def __post_init__(self):
        for name, value in (("width_px", self.width_px), ("height_px", self.height_px)):
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise ConfigurationError(f"Canvas {name} must be a positive integer, got {value!r}")

    @property
    def aspect_ratio(self) -> float:
        return self.width_px / self.height_px


def _check_range(axis: str, lo: float, hi: float) -> None:
    if not (math.isfinite(lo) and math.isfinite(hi)):
        raise ConfigurationError(f"Non-finite {axis} range [{lo}, {hi}]")
    if hi <= lo:
        raise ConfigurationError(
            f"Degenerate {axis} range [{lo}, {hi}]: max must be greater than min"
        )
