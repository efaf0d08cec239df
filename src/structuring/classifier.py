"""
Block classifier for the document structuring pipeline.

Provides:
- Bounding box extraction from provider geometry
- Line classification (heading / list item) via an ordered rule table

Each function looks at a single block only.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

from .document import BoundingBox, round_half_up

logger = logging.getLogger(__name__)


DEFAULT_HEADING_MAX_LENGTH = 50
DEFAULT_BBOX_PRECISION = 2


# ============================================================================
# Geometry
# ============================================================================

def extract_bounding_box(
    geometry: Optional[Mapping[str, Any]],
    precision: int = DEFAULT_BBOX_PRECISION
) -> Optional[BoundingBox]:
    """
    Extract a rounded bounding box from provider geometry.

    Args:
        geometry: Provider ``Geometry`` mapping (may be None)
        precision: Decimal places kept for each coordinate

    Returns:
        BoundingBox in fractional page units, or None if absent
    """
    if not geometry:
        return None
    box = geometry.get("BoundingBox")
    if not box:
        return None

    def coord(key: str) -> float:
        return round_half_up(box.get(key) or 0.0, precision)

    return BoundingBox(
        left=coord("Left"),
        top=coord("Top"),
        width=coord("Width"),
        height=coord("Height")
    )


# ============================================================================
# Line Classification
# ============================================================================

TITLE_CASE_PATTERN = re.compile(r"[A-Z][a-z]+(?:\s+[A-Z][a-z]+)*")

LIST_ITEM_PATTERNS: Tuple[re.Pattern, ...] = (
    re.compile(r"\s*[-•*]\s"),  # bullet
    re.compile(r"\s*[0-9]+\.\s"),  # ordinal
)


@dataclass(frozen=True)
class LineClassification:
    """Heading / list-item flags of a line. Both may be set."""
    is_heading: bool = False
    is_list_item: bool = False


def is_heading(text: Optional[str], max_length: int = DEFAULT_HEADING_MAX_LENGTH) -> bool:
    """Short line that is either all upper-case or Title Case."""
    if not text:
        return False
    stripped = text.strip()
    if not stripped or len(stripped) >= max_length:
        return False
    return stripped.isupper() or TITLE_CASE_PATTERN.fullmatch(stripped) is not None


def is_list_item(text: Optional[str]) -> bool:
    """Line starting with a bullet or ``N.`` marker followed by whitespace."""
    if not text:
        return False
    return any(p.match(text) for p in LIST_ITEM_PATTERNS)


def classify_line(
    text: Optional[str],
    heading_max_length: int = DEFAULT_HEADING_MAX_LENGTH
) -> LineClassification:
    return LineClassification(
        is_heading=is_heading(text, heading_max_length),
        is_list_item=is_list_item(text)
    )


class LineClassifier:
    """Line classifier bound to a configuration."""

    def __init__(
        self,
        heading_max_length: int = DEFAULT_HEADING_MAX_LENGTH,
        bbox_precision: int = DEFAULT_BBOX_PRECISION
    ):
        self.heading_max_length = heading_max_length
        self.bbox_precision = bbox_precision

    def classify(self, text: Optional[str]) -> LineClassification:
        return classify_line(text, self.heading_max_length)

    def bounding_box(self, geometry: Optional[Mapping[str, Any]]) -> Optional[BoundingBox]:
        return extract_bounding_box(geometry, self.bbox_precision)
