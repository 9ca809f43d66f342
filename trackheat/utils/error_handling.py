"""
Error Handling Utilities

Containment for per-file failures: a corrupt or unreadable track file must
cost only that track, never the whole run. Fatal configuration problems use
ConfigurationError (trackheat.config.loader) and are not handled here.
"""

import logging
import traceback
from functools import wraps
from pathlib import Path
from typing import Callable, Iterator, List, Tuple, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TrackReadError(Exception):
    """Raised inside a parser when a track file is structurally unusable."""
    pass


def contain_track_errors(
    exceptions: Tuple[Type[BaseException], ...],
    error_context: str = "",
) -> Callable[[Callable[..., Iterator[T]]], Callable[..., List[T]]]:
    """
    Decorator turning a point-yielding generator into a list-returning reader.

    Items yielded before a failure are kept, so a truncated file still
    contributes its readable prefix. Any exception listed in `exceptions`
    (TrackReadError is always included) is logged with the file name and
    swallowed; anything else propagates.

    Args:
        exceptions: Exception types that indicate a bad file
        error_context: Prefix for log messages (e.g. "GPX")

    Returns:
        Decorator function
    """
    caught = tuple(exceptions) + (TrackReadError,)

    def decorator(func: Callable[..., Iterator[T]]) -> Callable[..., List[T]]:
        @wraps(func)
        def wrapper(path, *args, **kwargs) -> List[T]:
            items: List[T] = []
            try:
                for item in func(path, *args, **kwargs):
                    items.append(item)
            except caught as e:
                context = f"{error_context}: " if error_context else ""
                logger.warning(
                    f"{context}skipping unreadable content in {Path(path).name}: "
                    f"{type(e).__name__}: {e} ({len(items)} points kept)"
                )
                logger.debug(f"Error details for {func.__name__}: {traceback.format_exc()}")
            return items
        return wrapper
    return decorator
