"""
PNG export of a rendered canvas.
"""

import logging
from pathlib import Path

from PIL import Image

logger = logging.getLogger(__name__)


def save_png(canvas: Image.Image, out_file: Path) -> Path:
    """Write canvas to out_file as PNG, creating parent directories."""
    out_file.parent.mkdir(parents=True, exist_ok=True)
    canvas.save(out_file, format="PNG")
    logger.info(f"Exported {canvas.size[0]}x{canvas.size[1]} image as {out_file}")
    return out_file
