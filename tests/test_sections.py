"""
Tests for the section organizer.
"""

import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


def make_line(text, heading=False, list_item=False, confidence=90.0):
    from structuring.document import LineRecord

    return LineRecord(
        text=text,
        confidence=confidence,
        bounding_box=None,
        is_heading=heading,
        is_list_item=list_item
    )


class TestOrganizeSections:
    """Test section organization."""

    def test_two_headed_sections(self):
        from structuring.sections import organize_sections

        lines = [
            make_line("TITLE ONE", heading=True),
            make_line("body 1"),
            make_line("TITLE TWO", heading=True),
            make_line("body 2"),
        ]
        sections = organize_sections(lines)

        assert [s.title for s in sections] == ["TITLE ONE", "TITLE TWO"]
        assert sections[0].content == ("body 1",)
        assert sections[1].content == ("body 2",)
        assert sections[0].start_line == 0
        assert sections[1].start_line == 2

    def test_introduction_section(self):
        from structuring.sections import organize_sections

        lines = [
            make_line("intro text", confidence=75.0),
            make_line("TITLE", heading=True, confidence=99.0),
            make_line("body"),
        ]
        sections = organize_sections(lines)

        assert len(sections) == 2
        assert sections[0].title == "Introduction"
        assert sections[0].content == ("intro text",)
        assert sections[0].start_line == 0
        assert sections[0].confidence == 75.0
        assert sections[1].title == "TITLE"
        assert sections[1].content == ("body",)
        assert sections[1].confidence == 99.0

    def test_custom_introduction_title(self):
        from structuring.sections import organize_sections

        sections = organize_sections([make_line("preface")], introduction_title="Preamble")

        assert sections[0].title == "Preamble"

    def test_list_items_treated_as_content(self):
        from structuring.sections import organize_sections

        lines = [
            make_line("STEPS", heading=True),
            make_line("1. mix", list_item=True),
            make_line("then wait"),
        ]
        sections = organize_sections(lines)

        assert sections[0].content == ("1. mix", "then wait")

    def test_consecutive_headings(self):
        """A heading with no body still forms a section."""
        from structuring.sections import organize_sections

        sections = organize_sections([
            make_line("ONE", heading=True),
            make_line("TWO", heading=True),
        ])

        assert [s.title for s in sections] == ["ONE", "TWO"]
        assert sections[0].content == ()

    def test_no_lines(self):
        from structuring.sections import organize_sections

        assert organize_sections([]) == ()

    def test_section_to_dict(self):
        from structuring.sections import organize_sections

        section = organize_sections([make_line("HEAD", heading=True), make_line("x")])[0]

        assert section.to_dict() == {
            "title": "HEAD",
            "content": ["x"],
            "startLine": 0,
            "confidence": 90.0
        }
