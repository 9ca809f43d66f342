"""
Render configuration loader.

Builds the resolved RenderConfig consumed by the pipeline, either from CLI
arguments or from an optional YAML run file, and validates it once before any
track is processed.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from trackheat.utils.constants import (
    DEFAULT_BACKGROUND_RGBA,
    DEFAULT_HEIGHT_PX,
    DEFAULT_SCALE,
    DEFAULT_WIDTH_PX,
    MANIFEST_FILENAME,
)


class ConfigurationError(ValueError):
    """Raised for fatal configuration problems that must abort the run before rendering."""


@dataclass(frozen=True)
class RenderConfig:
    activities_dir: Path
    out_file: Path
    center: str
    width: int = DEFAULT_WIDTH_PX
    height: int = DEFAULT_HEIGHT_PX
    scale: float = DEFAULT_SCALE
    use_manifest: bool = False
    manifest_name: str = MANIFEST_FILENAME
    colors_file: Optional[Path] = None
    background: Tuple[int, int, int, int] = DEFAULT_BACKGROUND_RGBA
    workers: int = 1
    verbose: bool = False

    @property
    def manifest_path(self) -> Path:
        return self.activities_dir / self.manifest_name

    def validate(self) -> "RenderConfig":
        """Raise ConfigurationError for any setting that would make the run meaningless."""
        if not self.center or not self.center.strip():
            raise ConfigurationError("center location must not be empty")
        _require_positive_int("width", self.width)
        _require_positive_int("height", self.height)
        _require_positive_int("workers", self.workers)
        if not isinstance(self.scale, (int, float)) or not self.scale > 0:
            raise ConfigurationError(f"scale must be > 0, got {self.scale!r}")
        if not self.activities_dir.is_dir():
            raise ConfigurationError(f"activities directory not found at {self.activities_dir}")
        if self.use_manifest and not self.manifest_path.is_file():
            raise ConfigurationError(f"{self.manifest_name} not found at {self.manifest_path}")
        if len(self.background) != 4 or any(not 0 <= c <= 255 for c in self.background):
            raise ConfigurationError(f"background must be an RGBA tuple of 0-255 ints, got {self.background!r}")
        return self


def load_render_config(path: Path, **overrides: Any) -> RenderConfig:
    """Load a YAML run file and apply non-None keyword overrides (typically CLI flags)."""
    if not path.exists():
        raise ConfigurationError(f"run config not found at {path}")

    with path.open("r", encoding="utf-8") as handle:
        try:
            raw = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"invalid YAML in {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigurationError(f"{path} must contain a mapping at the top level")

    merged = dict(raw)
    merged.update({k: v for k, v in overrides.items() if v is not None})
    return build_render_config(merged, base_dir=path.parent)


def build_render_config(values: Dict[str, Any], base_dir: Optional[Path] = None) -> RenderConfig:
    """Build a RenderConfig from a plain mapping, resolving relative paths against base_dir."""
    for field_name in ("activities_dir", "out_file", "center"):
        if values.get(field_name) in (None, ""):
            raise ConfigurationError(f"missing required setting: {field_name}")

    config = RenderConfig(
        activities_dir=_resolve_path(values["activities_dir"], base_dir),
        out_file=_resolve_path(values["out_file"], base_dir),
        center=str(values["center"]),
    )

    optional: Dict[str, Any] = {}
    for key in ("width", "height", "workers"):
        if key in values:
            optional[key] = _as_int(key, values[key])
    if "scale" in values:
        optional["scale"] = _as_float("scale", values["scale"])
    if "use_manifest" in values:
        optional["use_manifest"] = bool(values["use_manifest"])
    if values.get("manifest_name"):
        optional["manifest_name"] = str(values["manifest_name"])
    if values.get("colors_file"):
        optional["colors_file"] = _resolve_path(values["colors_file"], base_dir)
    if values.get("background") is not None:
        # imported here: trackheat.common.config imports ConfigurationError from this module
        from trackheat.common.config import parse_color

        optional["background"] = parse_color(values["background"], context="background")
    if "verbose" in values:
        optional["verbose"] = bool(values["verbose"])

    return replace(config, **optional)


def _resolve_path(path_value: Any, base_dir: Optional[Path]) -> Path:
    candidate = Path(str(path_value)).expanduser()
    if candidate.is_absolute() or base_dir is None:
        return candidate
    return base_dir / candidate


def _require_positive_int(name: str, value: Any) -> None:
    if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
        raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")


def _as_int(name: str, value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from exc


def _as_float(name: str, value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from exc
