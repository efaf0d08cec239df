"""
Section organizer.

Splits the ordered line sequence into sections, using heading lines as
boundaries. Lines before the first heading go to an introduction section.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from .document import LineRecord, Section

logger = logging.getLogger(__name__)

DEFAULT_INTRODUCTION_TITLE = "Introduction"


class _OpenSection:
    """Section being filled while walking the lines."""

    def __init__(self, title: str, start_line: int, confidence: Optional[float]):
        self.title = title
        self.start_line = start_line
        self.confidence = confidence
        self.content: List[str] = []

    def close(self) -> Section:
        return Section(
            title=self.title,
            content=tuple(self.content),
            start_line=self.start_line,
            confidence=self.confidence
        )


def organize_sections(
    lines: Sequence[LineRecord],
    introduction_title: str = DEFAULT_INTRODUCTION_TITLE
) -> Tuple[Section, ...]:
    """
    Group lines into titled sections.

    Args:
        lines: Classified lines in reading order
        introduction_title: Title of the section holding lines before the
            first heading

    Returns:
        Sections in order of appearance
    """
    sections: List[Section] = []
    current: Optional[_OpenSection] = None

    for index, line in enumerate(lines):
        if line.is_heading:
            if current is not None:
                sections.append(current.close())
            current = _OpenSection(line.text, index, line.confidence)
            continue

        if current is None:
            current = _OpenSection(introduction_title, 0, line.confidence)
        current.content.append(line.text)

    if current is not None:
        sections.append(current.close())

    logger.debug(f"Organized {len(lines)} lines into {len(sections)} sections")
    return tuple(sections)
