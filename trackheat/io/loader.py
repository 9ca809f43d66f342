"""
Track source discovery.

Two ways to find the files to draw:

- Manifest mode reads activities.csv (Strava bulk-export layout). The header
  row is scanned once for the "Filename" and "Activity Type" columns; each
  data row names a track file relative to the manifest's directory.
- Glob mode lists every *.gpx and *.fit.gz file in the directory, without
  activity labels.

Either way, load_track() then parses and validates one source, returning None
for anything that cannot be drawn.
"""

import logging
from collections import deque
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from itertools import islice
from pathlib import Path
from typing import Deque, Iterable, Iterator, List, Optional, Tuple

import pandas as pd

from trackheat.config.loader import ConfigurationError
from trackheat.core.models import Track
from trackheat.core.readers import read_track_points
from trackheat.core.validation import drop_invalid_points, is_renderable
from trackheat.utils.constants import (
    FIT_GZ_SUFFIX,
    GPX_SUFFIX,
    MANIFEST_CATEGORY_HEADER,
    MANIFEST_FILENAME_HEADER,
    PROGRESS_EVERY_N_FILES,
    TRACKS_IN_FLIGHT_PER_WORKER,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrackSource:
    """A track file to read and the activity label it carries ("" in glob mode)."""
    path: Path
    category: str = ""


def read_manifest(manifest_path: Path) -> List[TrackSource]:
    """
    Read activities.csv into TrackSources, in row order.

    If a header is missing its column index falls back to 0 and a warning is
    logged. Rows with an empty filename are skipped.

    Raises:
        ConfigurationError: If the manifest cannot be read or has no header row
    """
    try:
        df = pd.read_csv(
            manifest_path,
            header=None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            engine="python",
            on_bad_lines=_log_bad_line,
        )
    except FileNotFoundError as exc:
        raise ConfigurationError(f"manifest not found at {manifest_path}") from exc
    except (pd.errors.EmptyDataError, pd.errors.ParserError, OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"unable to read manifest {manifest_path}: {exc}") from exc

    if df.empty:
        raise ConfigurationError(f"manifest {manifest_path} has no header row")

    header = [_cell(v) for v in df.iloc[0].tolist()]
    file_idx = _header_index(header, MANIFEST_FILENAME_HEADER)
    category_idx = _header_index(header, MANIFEST_CATEGORY_HEADER)

    base_dir = manifest_path.parent
    sources: List[TrackSource] = []
    for row_number, row in enumerate(df.iloc[1:].itertuples(index=False, name=None), start=2):
        filename = _cell(row[file_idx]).strip() if file_idx < len(row) else ""
        category = _cell(row[category_idx]) if category_idx < len(row) else ""
        if not filename:
            logger.warning(f"{manifest_path.name} row {row_number}: no filename, skipping")
            continue
        sources.append(TrackSource(path=base_dir / filename, category=category))

    logger.info(f"Found {len(sources)} activities in {manifest_path.name}")
    return sources


def discover_tracks(directory: Path) -> List[TrackSource]:
    """List *.gpx files then *.fit.gz files in directory, each group sorted by name."""
    sources: List[TrackSource] = []
    for suffix in (GPX_SUFFIX, FIT_GZ_SUFFIX):
        matches = sorted(
            p for p in directory.iterdir()
            if p.is_file() and p.name.lower().endswith(suffix)
        )
        logger.info(f"Found {len(matches)} {suffix} files")
        sources.extend(TrackSource(path=p) for p in matches)
    return sources


def load_track(source: TrackSource) -> Optional[Track]:
    """Parse and validate one source; None when the file is missing or has < 2 valid points."""
    if not source.path.is_file():
        logger.warning(f"Track file not found: {source.path}")
        return None

    raw_points = read_track_points(source.path)
    points = drop_invalid_points(raw_points)
    dropped = len(raw_points) - len(points)
    if dropped:
        logger.debug(f"{source.path.name}: dropped {dropped} points with invalid coordinates")

    if not is_renderable(points):
        logger.info(f"{source.path.name}: {len(points)} valid points, not enough to draw")
        return None

    return Track(source=str(source.path), points=tuple(points), category=source.category)


def iter_tracks(
    sources: Iterable[TrackSource],
    workers: int = 1,
) -> Iterator[Tuple[TrackSource, Optional[Track]]]:
    """
    Yield (source, track-or-None) in source order.

    With workers > 1 files are parsed on a thread pool; results are still
    yielded in order on the calling thread, so the caller remains the only
    writer of anything it draws on. At most workers * TRACKS_IN_FLIGHT_PER_WORKER
    files are parsed ahead of the consumer.
    """
    sources = list(sources)
    total = len(sources)

    if workers > 1:
        window = workers * TRACKS_IN_FLIGHT_PER_WORKER
        upcoming = iter(sources)
        with ThreadPoolExecutor(max_workers=workers) as pool:
            in_flight: Deque[Tuple[TrackSource, Future]] = deque(
                (source, pool.submit(load_track, source)) for source in islice(upcoming, window)
            )
            done = 0
            while in_flight:
                source, future = in_flight.popleft()
                track = future.result()
                following = next(upcoming, None)
                if following is not None:
                    in_flight.append((following, pool.submit(load_track, following)))
                done += 1
                _log_progress(done, total)
                yield source, track
    else:
        for done, source in enumerate(sources, start=1):
            track = load_track(source)
            _log_progress(done, total)
            yield source, track


def _header_index(header: List[str], name: str) -> int:
    if name in header:
        return header.index(name)
    logger.warning(f"Manifest header {name!r} not found; falling back to column 0")
    return 0


def _cell(value) -> str:
    return value if isinstance(value, str) else ""


def _log_bad_line(bad_line: List[str]) -> None:
    logger.warning(f"Skipping malformed manifest line: {bad_line!r}")
    return None


def _log_progress(done: int, total: int) -> None:
    if done % PROGRESS_EVERY_N_FILES == 0 or done == total:
        logger.debug(f"Read {done}/{total} track files")
