"""
Canvas rendering.

Tracks are drawn as 1 px polylines. Each track is rasterised onto a
transparent layer covering only its own bounding box and then alpha-composited
onto the shared canvas, so strokes blend source-over with whatever earlier
tracks left behind.
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence, Tuple

from PIL import Image, ImageDraw

from trackheat.core.models import CanvasSpec, GeoPoint, Rgba
from trackheat.core.projection import Projection
from trackheat.utils.constants import DEFAULT_BACKGROUND_RGBA, STROKE_WIDTH_PX

logger = logging.getLogger(__name__)

PixelPoint = Tuple[float, float]
Segment = Tuple[PixelPoint, PixelPoint]


def create_canvas(spec: CanvasSpec, background: Rgba = DEFAULT_BACKGROUND_RGBA) -> Image.Image:
    """Blank RGBA canvas filled with a solid background colour."""
    return Image.new("RGBA", (spec.width_px, spec.height_px), tuple(background))


def draw_track(
    canvas: Image.Image,
    points: Sequence[GeoPoint],
    projection: Projection,
    color: Rgba,
) -> None:
    """
    Draw points[0] -> points[1] -> ... -> points[-1] onto canvas in place.

    The caller guarantees at least two points. Segments are clipped to the
    canvas before rasterisation; segments entirely off-canvas are skipped.
    """
    width, height = canvas.size
    projected = [projection.project(p) for p in points]

    segments: List[Tuple[Tuple[int, int], Tuple[int, int]]] = []
    for start, end in zip(projected, projected[1:]):
        clipped = clip_segment(start, end, width - 1, height - 1)
        if clipped is None:
            continue
        (x0, y0), (x1, y1) = clipped
        segments.append(((int(round(x0)), int(round(y0))), (int(round(x1)), int(round(y1)))))

    if not segments:
        logger.debug("Track lies entirely outside the canvas")
        return

    xs = [x for seg in segments for x, _ in seg]
    ys = [y for seg in segments for _, y in seg]
    left, top = min(xs), min(ys)
    layer = Image.new("RGBA", (max(xs) - left + 1, max(ys) - top + 1), (0, 0, 0, 0))
    draw = ImageDraw.Draw(layer)
    for (x0, y0), (x1, y1) in segments:
        draw.line([(x0 - left, y0 - top), (x1 - left, y1 - top)], fill=tuple(color), width=STROKE_WIDTH_PX)

    canvas.alpha_composite(layer, dest=(left, top))


def clip_segment(
    start: PixelPoint,
    end: PixelPoint,
    max_x: float,
    max_y: float,
) -> Optional[Segment]:
    """
    Liang-Barsky clip of a segment to the rectangle [0, max_x] x [0, max_y].

    Returns the visible part of the segment, or None when nothing is visible.
    A clipped endpoint lies exactly on the edge that cut it, and both
    endpoints are clamped to the rectangle.
    """
    x0, y0 = start
    x1, y1 = end
    if not all(math.isfinite(v) for v in (x0, y0, x1, y1)):
        return None
    dx = x1 - x0
    dy = y1 - y0
    t_enter, t_exit = 0.0, 1.0
    enter_edge: Optional[int] = None
    exit_edge: Optional[int] = None

    # edges: 0 is x = 0, 1 is x = max_x, 2 is y = 0, 3 is y = max_y
    for edge, (p, q) in enumerate(((-dx, x0), (dx, max_x - x0), (-dy, y0), (dy, max_y - y0))):
        if p == 0:
            if q < 0:
                return None
            continue
        t = q / p
        if p < 0:
            if t > t_exit:
                return None
            if t > t_enter:
                t_enter, enter_edge = t, edge
        else:
            if t < t_enter:
                return None
            if t < t_exit:
                t_exit, exit_edge = t, edge

    if enter_edge is not None:
        start = _point_on_edge(start, dx, dy, t_enter, enter_edge, max_x, max_y)
    if exit_edge is not None:
        end = _point_on_edge((x0, y0), dx, dy, t_exit, exit_edge, max_x, max_y)
    return start, end


def _point_on_edge(
    origin: PixelPoint,
    dx: float,
    dy: float,
    t: float,
    edge: int,
    max_x: float,
    max_y: float,
) -> PixelPoint:
    x = origin[0] + t * dx
    y = origin[1] + t * dy
    if edge == 0:
        x = 0.0
    elif edge == 1:
        x = float(max_x)
    elif edge == 2:
        y = 0.0
    else:
        y = float(max_y)
    return min(max(x, 0.0), float(max_x)), min(max(y, 0.0), float(max_y))
