"""
FIT Processing Module

Reads gzip-compressed FIT activity recordings (the .fit.gz files of a Strava
bulk export) into an ordered list of GeoPoints.
"""

import gzip
import logging
import math
import zlib
from pathlib import Path
from typing import Iterator, List, Union

from fitparse import FitFile
from fitparse.utils import FitParseError

from trackheat.core.models import GeoPoint
from trackheat.utils.constants import FIT_SEMICIRCLE_TO_DEG
from trackheat.utils.error_handling import TrackReadError, contain_track_errors

logger = logging.getLogger(__name__)


def semicircles_to_degrees(value) -> float:
    """FIT stores positions as signed 32-bit semicircles; missing values map to NaN."""
    if value is None:
        return math.nan
    return float(value) * FIT_SEMICIRCLE_TO_DEG


@contain_track_errors(
    (OSError, EOFError, ValueError, KeyError, IndexError, TypeError, zlib.error, FitParseError),
    error_context="FIT",
)
def read_fit_points(path: Union[str, Path]) -> Iterator[GeoPoint]:
    """
    Extract positions from every `record` message of a gzip-compressed FIT file.

    The file must describe an activity, either through file_id.type or an
    `activity` message. Records are only emitted once that is known, so a
    non-activity file produces no points at all. Records without a position
    become NaN points for the validator to drop.
    """
    with gzip.open(path, "rb") as fobj:
        fit = FitFile(fobj)

        is_activity = False
        pending: List[GeoPoint] = []
        records = 0
        for message in fit.get_messages():
            if message.name == "file_id":
                if message.get_value("type") == "activity":
                    is_activity = True
            elif message.name == "activity":
                is_activity = True
            elif message.name == "record":
                records += 1
                pending.append(GeoPoint(
                    longitude=semicircles_to_degrees(message.get_value("position_long")),
                    latitude=semicircles_to_degrees(message.get_value("position_lat")),
                ))

            if is_activity and pending:
                yield from pending
                pending = []

    if not is_activity:
        raise TrackReadError(f"no activity record found ({records} records ignored)")

    logger.debug(f"{Path(path).name}: {records} records")
