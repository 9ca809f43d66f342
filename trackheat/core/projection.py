"""
Geographic to pixel projection.

Each axis is an independent linear map from a degree range onto [0, size].
The latitude axis is inverted because raster rows grow downwards while north
is up. Values outside the range are not clamped; they land off-canvas and the
renderer clips them.
"""

import math
from dataclasses import dataclass
from typing import Tuple

from trackheat.config.loader import ConfigurationError
from trackheat.core.models import CanvasSpec, GeoBounds, GeoPoint
from trackheat.utils.constants import (
    BASE_ASPECT_RATIO,
    BASE_LATITUDE_HALF_SPAN_DEG,
    BASE_LONGITUDE_HALF_SPAN_DEG,
)


@dataclass(frozen=True)
class AxisProjector:
    """
    pixel = (value - minimum) * scale, or size - that when inverted.

    Build with AxisProjector.for_range(); scale is size / (max - min) and is
    computed once per axis.
    """
    minimum: float
    scale: float
    size: float
    inverted: bool = False

    @classmethod
    def for_range(cls, minimum: float, maximum: float, size_px: int, inverted: bool = False) -> "AxisProjector":
        span = maximum - minimum
        if not math.isfinite(span) or span <= 0:
            raise ConfigurationError(
                f"Cannot project range [{minimum}, {maximum}]: max must be greater than min"
            )
        if size_px <= 0:
            raise ConfigurationError(f"Axis size must be positive, got {size_px}")
        size = float(size_px)
        return cls(minimum=minimum, scale=size / span, size=size, inverted=inverted)

    def project(self, value: float) -> float:
        offset = (value - self.minimum) * self.scale
        return self.size - offset if self.inverted else offset

    __call__ = project


@dataclass(frozen=True)
class Projection:
    """Longitude (x) and latitude (y, inverted) projectors for one canvas."""
    x: AxisProjector
    y: AxisProjector

    @classmethod
    def for_canvas(cls, bounds: GeoBounds, canvas: CanvasSpec) -> "Projection":
        return cls(
            x=AxisProjector.for_range(bounds.min_longitude, bounds.max_longitude, canvas.width_px),
            y=AxisProjector.for_range(bounds.min_latitude, bounds.max_latitude, canvas.height_px, inverted=True),
        )

    def project(self, point: GeoPoint) -> Tuple[float, float]:
        return self.x.project(point.longitude), self.y.project(point.latitude)


def bounds_from_center(latitude: float, longitude: float, canvas: CanvasSpec, scale: float = 1.0) -> GeoBounds:
    """
    Visible window around a center point.

    At scale 1.0 the window is +/-0.06 degrees of latitude; the longitude span
    grows with the canvas aspect ratio so a 1000x500 canvas shows +/-0.2
    degrees. Larger scales zoom out.
    """
    if not math.isfinite(scale) or scale <= 0:
        raise ConfigurationError(f"scale must be > 0, got {scale}")
    lat_half = BASE_LATITUDE_HALF_SPAN_DEG * scale
    lon_half = BASE_LONGITUDE_HALF_SPAN_DEG * scale * (canvas.aspect_ratio / BASE_ASPECT_RATIO)
    return GeoBounds(
        min_longitude=longitude - lon_half,
        max_longitude=longitude + lon_half,
        min_latitude=latitude - lat_half,
        max_latitude=latitude + lat_half,
    )
