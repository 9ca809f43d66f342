"""
Colour Table Loader for trackheat

Loads the activity colour rules from YAML once at startup and returns them as
a read-only mapping. The mapping is passed explicitly to the classifier; no
module keeps a global copy.
"""

from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional
import logging

import yaml

from trackheat.config.loader import ConfigurationError
from trackheat.core.models import Rgba

logger = logging.getLogger(__name__)

CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"
DEFAULT_COLORS_FILE = CONFIG_DIR / "activity_colors.yml"


def load_activity_colors(path: Optional[Path] = None) -> Mapping[str, Rgba]:
    """
    Load activity_colors.yml into an immutable label -> RGBA mapping.

    Args:
        path: Alternative YAML file; defaults to the packaged activity_colors.yml

    Returns:
        Read-only mapping of exact activity labels to (r, g, b, a) tuples

    Raises:
        ConfigurationError: If the file is missing, is not valid YAML, or holds
            a colour value that cannot be parsed

    Example:
        >>> colors = load_activity_colors()
        >>> colors["Ride"][:3]
        (252, 76, 2)
    """
    path = path or DEFAULT_COLORS_FILE
    logger.debug(f"Loading activity colours from: {path}")

    if not path.exists():
        raise ConfigurationError(f"activity colour table not found at {path}")

    with path.open("r", encoding="utf-8") as f:
        try:
            document = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"invalid YAML in {path}: {exc}") from exc

    raw = document.get("activity_colors") if isinstance(document, dict) else None
    if not isinstance(raw, dict):
        raise ConfigurationError(f"{path} has no 'activity_colors' mapping")

    table = build_color_table(raw)
    logger.info(f"Loaded {len(table)} activity colours from {path.name}")
    return table


def build_color_table(raw: Dict[Any, Any]) -> Mapping[str, Rgba]:
    """Parse every value of raw into an RGBA tuple; labels are kept verbatim."""
    table: Dict[str, Rgba] = {}
    for label, value in raw.items():
        table[str(label)] = parse_color(value, context=f"colour for '{label}'")
    return MappingProxyType(table)


def parse_color(value: Any, context: str = "colour") -> Rgba:
    """Accept '#RRGGBB', '#RRGGBBAA' or a 3/4 item sequence of 0-255 ints."""
    if isinstance(value, str):
        digits = value.strip().lstrip("#")
        if len(digits) not in (6, 8):
            raise ConfigurationError(f"{context}: expected #RRGGBB or #RRGGBBAA, got {value!r}")
        try:
            channels = [int(digits[i:i + 2], 16) for i in range(0, len(digits), 2)]
        except ValueError as exc:
            raise ConfigurationError(f"{context}: invalid hex colour {value!r}") from exc
    elif isinstance(value, (list, tuple)) and len(value) in (3, 4):
        try:
            channels = [int(c) for c in value]
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"{context}: non-integer channel in {value!r}") from exc
    else:
        raise ConfigurationError(f"{context}: unsupported colour value {value!r}")

    if len(channels) == 3:
        channels.append(255)
    if any(not 0 <= c <= 255 for c in channels):
        raise ConfigurationError(f"{context}: channels must be 0-255, got {value!r}")
    return (channels[0], channels[1], channels[2], channels[3])
