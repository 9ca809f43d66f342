"""
GPX Processing Module

Reads GPS-exchange track files into an ordered list of GeoPoints. Every
track and every segment is flattened in file order; routes and waypoints are
ignored because they are not recorded positions.
"""

import logging
from pathlib import Path
from typing import Iterator, Union

import gpxpy
import gpxpy.gpx

from trackheat.core.models import GeoPoint
from trackheat.utils.error_handling import contain_track_errors

logger = logging.getLogger(__name__)


@contain_track_errors(
    (OSError, ValueError, gpxpy.gpx.GPXException),
    error_context="GPX",
)
def read_gpx_points(path: Union[str, Path]) -> Iterator[GeoPoint]:
    """
    Extract (longitude, latitude) for every trkpt in the file.

    Returns a list (see contain_track_errors); an unreadable or malformed file
    yields an empty list rather than raising.
    """
    with open(path, "r", encoding="utf-8") as gpx_file:
        gpx = gpxpy.parse(gpx_file)

    count = 0
    for track in gpx.tracks:
        for segment in track.segments:
            for point in segment.points:
                count += 1
                yield GeoPoint(longitude=float(point.longitude), latitude=float(point.latitude))

    logger.debug(f"{Path(path).name}: {len(gpx.tracks)} tracks, {count} points")
