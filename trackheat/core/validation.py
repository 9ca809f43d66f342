"""
Point validation.

Positions with a NaN longitude or latitude cannot be projected and are
removed before a track reaches the renderer.
"""

from typing import Iterable, List, Sequence

from trackheat.core.models import GeoPoint
from trackheat.utils.constants import MIN_RENDERABLE_POINTS


def drop_invalid_points(points: Iterable[GeoPoint]) -> List[GeoPoint]:
    """Return the points whose coordinates are both numbers, in their original order."""
    return [p for p in points if p.is_valid]


def is_renderable(points: Sequence[GeoPoint]) -> bool:
    """A polyline needs at least two vertices."""
    return len(points) >= MIN_RENDERABLE_POINTS
