"""
Output records for the document structuring pipeline.

Every record is immutable; ``to_dict`` produces the camelCase wire shape
consumed by callers of the pipeline.
"""

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional, Tuple


# ============================================================================
# Enums
# ============================================================================

class WordType(Enum):
    """Semantic subtype of a WORD block."""
    NUMBER = "number"
    DECIMAL = "decimal"
    PHONE = "phone"
    EMAIL = "email"
    DATE = "date"
    TEXT = "text"


# ============================================================================
# Rounding
# ============================================================================

def round_half_up(value: float, precision: int) -> float:
    """Round to ``precision`` decimals with halves going up (0.125 -> 0.13)."""
    quantum = Decimal(1).scaleb(-precision)
    return float(Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))


# ============================================================================
# Geometry
# ============================================================================

@dataclass(frozen=True)
class BoundingBox:
    """Rectangle in fractional page coordinates (0-1)."""
    left: float
    top: float
    width: float
    height: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "left": self.left,
            "top": self.top,
            "width": self.width,
            "height": self.height
        }


def _bbox_dict(bbox: Optional[BoundingBox]) -> Optional[Dict[str, float]]:
    return bbox.to_dict() if bbox is not None else None


# ============================================================================
# Content Records
# ============================================================================

@dataclass(frozen=True)
class LineRecord:
    """A classified LINE block."""
    text: str
    confidence: Optional[float]
    bounding_box: Optional[BoundingBox]
    is_heading: bool = False
    is_list_item: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "confidence": self.confidence,
            "boundingBox": _bbox_dict(self.bounding_box),
            "isHeading": self.is_heading,
            "isListItem": self.is_list_item
        }


@dataclass(frozen=True)
class WordRecord:
    """A typed WORD block."""
    text: str
    confidence: Optional[float]
    bounding_box: Optional[BoundingBox]
    word_type: WordType = WordType.TEXT

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "confidence": self.confidence,
            "boundingBox": _bbox_dict(self.bounding_box),
            "type": self.word_type.value
        }


# ============================================================================
# Structure Records
# ============================================================================

@dataclass(frozen=True)
class CellRecord:
    """A table cell."""
    text: str
    confidence: Optional[float]
    row_index: Optional[int]
    column_index: Optional[int]
    bounding_box: Optional[BoundingBox]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "confidence": self.confidence,
            "rowIndex": self.row_index,
            "columnIndex": self.column_index,
            "boundingBox": _bbox_dict(self.bounding_box)
        }


@dataclass(frozen=True)
class TableRecord:
    """
    A table. Built either from a TABLE block (declared row/column counts)
    or synthesized as a placeholder for cells that arrive without one.
    """
    id: Optional[str]
    confidence: Optional[float]
    bounding_box: Optional[BoundingBox] = None
    row_count: Optional[int] = None
    column_count: Optional[int] = None
    cells: Tuple[CellRecord, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "confidence": self.confidence,
            "boundingBox": _bbox_dict(self.bounding_box),
            "rowCount": self.row_count,
            "columnCount": self.column_count,
            "cells": [c.to_dict() for c in self.cells]
        }


@dataclass(frozen=True)
class KeyValueRecord:
    """A key/value region of a form-like document."""
    id: Optional[str]
    entity_types: FrozenSet[str]
    confidence: Optional[float]
    bounding_box: Optional[BoundingBox]
    is_key: bool = False
    is_value: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "entityTypes": sorted(self.entity_types),
            "confidence": self.confidence,
            "boundingBox": _bbox_dict(self.bounding_box),
            "isKey": self.is_key,
            "isValue": self.is_value
        }


@dataclass(frozen=True)
class Section:
    """A heading and the lines that follow it up to the next heading."""
    title: str
    content: Tuple[str, ...] = ()
    start_line: int = 0
    confidence: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "content": list(self.content),
            "startLine": self.start_line,
            "confidence": self.confidence
        }


# ============================================================================
# Statistics
# ============================================================================

CONFIDENCE_MIN_START = 100.0
CONFIDENCE_MAX_START = 0.0


@dataclass(frozen=True)
class ConfidenceStats:
    """Confidence summary over every block carrying a confidence value."""
    average: float = 0.0
    min: float = CONFIDENCE_MIN_START
    max: float = CONFIDENCE_MAX_START
    count: int = 0

    def to_dict(self) -> Dict[str, float]:
        return {
            "average": self.average,
            "min": self.min,
            "max": self.max
        }


# ============================================================================
# Document
# ============================================================================

@dataclass(frozen=True)
class StructuredDocument:
    """Complete structured representation of one block list."""
    full_text: str = ""
    total_blocks: int = 0
    confidence: ConfidenceStats = field(default_factory=ConfidenceStats)

    lines: Tuple[LineRecord, ...] = ()
    paragraphs: Tuple[LineRecord, ...] = ()
    headings: Tuple[LineRecord, ...] = ()
    lists: Tuple[LineRecord, ...] = ()

    words: Tuple[WordRecord, ...] = ()
    numbers: Tuple[WordRecord, ...] = ()
    dates: Tuple[WordRecord, ...] = ()
    emails: Tuple[WordRecord, ...] = ()
    phones: Tuple[WordRecord, ...] = ()
    addresses: Tuple[WordRecord, ...] = ()

    tables: Tuple[TableRecord, ...] = ()
    forms: Tuple[Dict[str, Any], ...] = ()
    key_value_pairs: Tuple[KeyValueRecord, ...] = ()
    sections: Tuple[Section, ...] = ()

    processing_time: str = ""
    block_types: Dict[str, int] = field(default_factory=dict)
    page_count: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "document": {
                "fullText": self.full_text,
                "totalBlocks": self.total_blocks,
                "confidence": self.confidence.to_dict()
            },
            "content": {
                "lines": [l.to_dict() for l in self.lines],
                "paragraphs": [l.to_dict() for l in self.paragraphs],
                "headings": [l.to_dict() for l in self.headings],
                "lists": [l.to_dict() for l in self.lists]
            },
            "entities": {
                "words": [w.to_dict() for w in self.words],
                "numbers": [w.to_dict() for w in self.numbers],
                "dates": [w.to_dict() for w in self.dates],
                "emails": [w.to_dict() for w in self.emails],
                "phones": [w.to_dict() for w in self.phones],
                "addresses": [w.to_dict() for w in self.addresses]
            },
            "structure": {
                "tables": [t.to_dict() for t in self.tables],
                "forms": list(self.forms),
                "keyValuePairs": [kv.to_dict() for kv in self.key_value_pairs],
                "sections": [s.to_dict() for s in self.sections]
            },
            "metadata": {
                "processingTime": self.processing_time,
                "blockTypes": dict(self.block_types),
                "pageCount": self.page_count
            }
        }
