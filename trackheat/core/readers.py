"""
Track file dispatch by extension.
"""

import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from trackheat.core.fit.processor import read_fit_points
from trackheat.core.gpx.processor import read_gpx_points
from trackheat.core.models import GeoPoint
from trackheat.utils.constants import FIT_GZ_SUFFIX, GPX_SUFFIX

logger = logging.getLogger(__name__)

Reader = Callable[[Union[str, Path]], List[GeoPoint]]

READERS: Dict[str, Reader] = {
    GPX_SUFFIX: read_gpx_points,
    FIT_GZ_SUFFIX: read_fit_points,
}


def reader_for(path: Union[str, Path]) -> Optional[Reader]:
    """Return the parser for path's extension (case-insensitive), or None."""
    name = Path(path).name.lower()
    for suffix, reader in READERS.items():
        if name.endswith(suffix):
            return reader
    return None


def read_track_points(path: Union[str, Path]) -> List[GeoPoint]:
    """Parse any supported track file; unsupported extensions give an empty list."""
    reader = reader_for(path)
    if reader is None:
        logger.debug(f"No reader for {Path(path).name}; treating as empty track")
        return []
    return reader(path)
