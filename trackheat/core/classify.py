"""
Activity classification.

Maps an activity label to its stroke colour. Labels missing from the colour
table are not errors: they are tallied so the run can report them, and the
track is left out of the image.
"""

import logging
from collections import Counter
from typing import Dict, Mapping, Optional

from trackheat.core.models import Rgba

logger = logging.getLogger(__name__)


class ActivityClassifier:
    """
    Exact-match lookup of activity labels in a colour table.

    Matching is case and whitespace sensitive: "Ride" and "ride " are
    different labels. The table is never modified.
    """

    def __init__(self, colors: Mapping[str, Rgba]):
        self._colors = colors
        self._unmatched: Counter = Counter()

    def color_for(self, label: str) -> Optional[Rgba]:
        """Return the colour for label, or None after counting it as unmatched."""
        color = self._colors.get(label)
        if color is None:
            self._unmatched[label] += 1
            logger.debug(f"No colour rule for activity type {label!r}")
        return color

    @property
    def unmatched(self) -> Dict[str, int]:
        return dict(self._unmatched)

    @property
    def unmatched_total(self) -> int:
        return sum(self._unmatched.values())
