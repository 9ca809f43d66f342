"""
trackheat Pipeline Module

Runs a full render: resolve the visible window, create the canvas, read
every track (manifest or glob mode), classify it, draw it, and report what
was drawn. The canvas is returned to the caller for encoding.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, Mapping, Optional, Tuple

from PIL import Image

from trackheat.config.loader import ConfigurationError, RenderConfig
from trackheat.core.classify import ActivityClassifier
from trackheat.core.models import CanvasSpec, GeoBounds, Rgba, Track
from trackheat.core.projection import Projection, bounds_from_center
from trackheat.core.render import create_canvas, draw_track
from trackheat.core.validation import drop_invalid_points, is_renderable
from trackheat.io.loader import TrackSource, discover_tracks, iter_tracks, read_manifest
from trackheat.utils.constants import DEFAULT_STROKE_RGBA

logger = logging.getLogger(__name__)

Geocoder = Callable[[str], Optional[Tuple[float, float]]]


@dataclass
class RenderStats:
    """Counters for one render run."""
    rendered: int = 0
    skipped: int = 0
    unmatched: Dict[str, int] = field(default_factory=dict)

    @property
    def unmatched_total(self) -> int:
        return sum(self.unmatched.values())


@dataclass
class PipelineResult:
    canvas: Image.Image
    bounds: GeoBounds
    stats: RenderStats


def resolve_bounds(config: RenderConfig, geocoder: Geocoder) -> Tuple[GeoBounds, CanvasSpec]:
    """Look up the center and derive the visible window. All failures here are fatal."""
    canvas_spec = CanvasSpec(width_px=config.width, height_px=config.height)

    logger.info(f"Looking up {config.center!r}...")
    location = geocoder(config.center)
    if location is None:
        raise ConfigurationError(f"Unable to find coordinates for center {config.center!r}")

    lat, lon = location
    bounds = bounds_from_center(lat, lon, canvas_spec, config.scale)
    logger.debug(
        f"Window lon [{bounds.min_longitude:.5f}, {bounds.max_longitude:.5f}] "
        f"lat [{bounds.min_latitude:.5f}, {bounds.max_latitude:.5f}]"
    )
    return bounds, canvas_spec


def render_tracks(
    canvas: Image.Image,
    tracks: Iterable[Tuple[TrackSource, Optional[Track]]],
    projection: Projection,
    color_for: Callable[[Track], Optional[Rgba]],
) -> RenderStats:
    """
    Draw every renderable track in order onto canvas.

    Tracks that are None or have fewer than two valid points are counted as
    skipped; tracks without a colour are left out.
    """
    stats = RenderStats()
    for source, track in tracks:
        if track is None:
            stats.skipped += 1
            continue

        points = drop_invalid_points(track.points)
        if not is_renderable(points):
            stats.skipped += 1
            continue

        color = color_for(track)
        if color is None:
            continue

        draw_track(canvas, points, projection, color)
        stats.rendered += 1
        logger.debug(f"Drew {source.path.name} ({len(points)} points)")
    return stats


def run_pipeline(
    config: RenderConfig,
    colors: Mapping[str, Rgba],
    geocoder: Geocoder,
) -> PipelineResult:
    """
    Execute a complete render for config.

    Args:
        config: Resolved run configuration
        colors: Activity label -> RGBA table used in manifest mode
        geocoder: Resolves config.center to (latitude, longitude) or None

    Returns:
        PipelineResult with the painted canvas and run counters

    Raises:
        ConfigurationError: For invalid settings, an unresolvable center, or an
            unreadable manifest. Per-file problems never raise.
    """
    config.validate()
    bounds, canvas_spec = resolve_bounds(config, geocoder)
    projection = Projection.for_canvas(bounds, canvas_spec)
    canvas = create_canvas(canvas_spec, config.background)

    if config.use_manifest:
        sources = read_manifest(config.manifest_path)
        classifier = ActivityClassifier(colors)
        color_for = lambda track: classifier.color_for(track.category)
    else:
        sources = discover_tracks(config.activities_dir)
        classifier = None
        color_for = lambda track: DEFAULT_STROKE_RGBA

    logger.info(f"Generating {canvas_spec.width_px}x{canvas_spec.height_px} image from {len(sources)} tracks...")
    stats = render_tracks(canvas, iter_tracks(sources, workers=config.workers), projection, color_for)
    if classifier is not None:
        stats.unmatched = classifier.unmatched

    _log_summary(stats)
    return PipelineResult(canvas=canvas, bounds=bounds, stats=stats)


def _log_summary(stats: RenderStats) -> None:
    logger.info(f"Rendered {stats.rendered} tracks, skipped {stats.skipped} unreadable or empty tracks")
    if stats.unmatched:
        logger.info(f"{stats.unmatched_total} tracks had no colour rule:")
        for label, count in sorted(stats.unmatched.items(), key=lambda item: (-item[1], item[0])):
            logger.info(f"  {label!r}: {count}")
