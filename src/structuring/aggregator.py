"""
Document aggregator for the document structuring pipeline.

Provides:
- Single-pass fold of the block sequence into content, entity and
  structure containers
- Confidence statistics and block type histogram
- Section organization of the resulting lines
"""

import logging
from collections import Counter
from dataclasses import replace
from datetime import datetime
from typing import Any, Iterable, List, Mapping, Optional, Union

import numpy as np

from .blocks import (
    BaseBlock, CellBlock, KeyValueBlock, LineBlock, TableBlock, WordBlock,
    parse_block,
)
from .classifier import DEFAULT_BBOX_PRECISION, DEFAULT_HEADING_MAX_LENGTH, LineClassifier
from .document import (
    CONFIDENCE_MAX_START, CONFIDENCE_MIN_START, CellRecord, ConfidenceStats,
    KeyValueRecord, LineRecord, StructuredDocument, TableRecord, WordRecord, WordType,
    round_half_up,
)
from .entities import classify_word
from .sections import DEFAULT_INTRODUCTION_TITLE, organize_sections

logger = logging.getLogger(__name__)


PLACEHOLDER_TABLE_ID = "table-1"
DEFAULT_CONFIDENCE_PRECISION = 2

RawBlock = Union[Mapping[str, Any], BaseBlock]


# ============================================================================
# Accumulator
# ============================================================================

class _Accumulator:
    """Mutable state of one aggregation pass. Never escapes ``aggregate``."""

    def __init__(self):
        self.total_blocks = 0
        self.text_parts: List[str] = []
        self.confidences: List[float] = []
        self.block_types: Counter = Counter()

        self.lines: List[LineRecord] = []
        self.headings: List[LineRecord] = []
        self.lists: List[LineRecord] = []
        self.paragraphs: List[LineRecord] = []

        self.words: List[WordRecord] = []
        self.numbers: List[WordRecord] = []
        self.emails: List[WordRecord] = []
        self.phones: List[WordRecord] = []

        self.tables: List[TableRecord] = []
        self.first_table_cells: List[CellRecord] = []
        self.key_value_pairs: List[KeyValueRecord] = []


# ============================================================================
# Aggregator
# ============================================================================

class DocumentAggregator:
    """
    Folds an ordered block list into a StructuredDocument.

    Arrival order of lines, words, tables and key-value regions is kept in
    every output sequence.
    """

    def __init__(
        self,
        heading_max_length: int = DEFAULT_HEADING_MAX_LENGTH,
        bbox_precision: int = DEFAULT_BBOX_PRECISION,
        confidence_precision: int = DEFAULT_CONFIDENCE_PRECISION,
        introduction_title: str = DEFAULT_INTRODUCTION_TITLE,
        placeholder_table_id: str = PLACEHOLDER_TABLE_ID
    ):
        self.classifier = LineClassifier(heading_max_length, bbox_precision)
        self.confidence_precision = confidence_precision
        self.introduction_title = introduction_title
        self.placeholder_table_id = placeholder_table_id

    def aggregate(self, blocks: Optional[Iterable[RawBlock]]) -> StructuredDocument:
        """
        Build the structured document for one block list.

        Args:
            blocks: Provider blocks in reading order, or None

        Returns:
            Immutable StructuredDocument

        Raises:
            BlockValidationError: If a block fails boundary validation
        """
        acc = _Accumulator()

        for raw in blocks or ():
            self._add_block(acc, parse_block(raw))

        document = self._build(acc)
        logger.debug(
            f"Structured {document.total_blocks} blocks: "
            f"{len(document.lines)} lines, {len(document.words)} words, "
            f"{len(document.tables)} tables, {len(document.sections)} sections"
        )
        return document

    # ------------------------------------------------------------------------
    # Per-block handling
    # ------------------------------------------------------------------------

    def _add_block(self, acc: _Accumulator, block: BaseBlock):
        acc.total_blocks += 1
        acc.block_types[block.block_type] += 1
        if block.confidence is not None:
            acc.confidences.append(block.confidence)

        if isinstance(block, LineBlock):
            self._add_line(acc, block)
        elif isinstance(block, WordBlock):
            self._add_word(acc, block)
        elif isinstance(block, TableBlock):
            self._add_table(acc, block)
        elif isinstance(block, CellBlock):
            self._add_cell(acc, block)
        elif isinstance(block, KeyValueBlock):
            self._add_key_value(acc, block)

    def _add_line(self, acc: _Accumulator, block: LineBlock):
        text = block.text or ""
        flags = self.classifier.classify(text)
        record = LineRecord(
            text=text,
            confidence=block.confidence,
            bounding_box=self.classifier.bounding_box(block.geometry),
            is_heading=flags.is_heading,
            is_list_item=flags.is_list_item
        )
        acc.lines.append(record)
        acc.text_parts.append(text + "\n")

        # Heading wins over list item.
        if record.is_heading:
            acc.headings.append(record)
        elif record.is_list_item:
            acc.lists.append(record)
        else:
            acc.paragraphs.append(record)

    def _add_word(self, acc: _Accumulator, block: WordBlock):
        text = block.text or ""
        record = WordRecord(
            text=text,
            confidence=block.confidence,
            bounding_box=self.classifier.bounding_box(block.geometry),
            word_type=classify_word(text)
        )
        acc.words.append(record)

        if record.word_type == WordType.NUMBER:
            acc.numbers.append(record)
        elif record.word_type == WordType.EMAIL:
            acc.emails.append(record)
        elif record.word_type == WordType.PHONE:
            acc.phones.append(record)

    def _add_table(self, acc: _Accumulator, block: TableBlock):
        acc.tables.append(TableRecord(
            id=block.block_id,
            confidence=block.confidence,
            bounding_box=self.classifier.bounding_box(block.geometry),
            row_count=block.row_count,
            column_count=block.column_count
        ))

    def _add_cell(self, acc: _Accumulator, block: CellBlock):
        if not acc.tables:
            acc.tables.append(TableRecord(
                id=self.placeholder_table_id,
                confidence=block.confidence
            ))
        elif len(acc.tables) > 1:
            # TODO: route cells by their parent TABLE relationship once the
            # provider's Relationships field is parsed.
            logger.debug(
                f"Cell {block.block_id} appended to first table "
                f"{acc.tables[0].id} of {len(acc.tables)}"
            )

        acc.first_table_cells.append(CellRecord(
            text=block.text or "",
            confidence=block.confidence,
            row_index=block.row_index,
            column_index=block.column_index,
            bounding_box=self.classifier.bounding_box(block.geometry)
        ))

    def _add_key_value(self, acc: _Accumulator, block: KeyValueBlock):
        acc.key_value_pairs.append(KeyValueRecord(
            id=block.block_id,
            entity_types=block.entity_types,
            confidence=block.confidence,
            bounding_box=self.classifier.bounding_box(block.geometry),
            is_key="KEY" in block.entity_types,
            is_value="VALUE" in block.entity_types
        ))

    # ------------------------------------------------------------------------
    # Result
    # ------------------------------------------------------------------------

    def _confidence_stats(self, confidences: List[float]) -> ConfidenceStats:
        if not confidences:
            return ConfidenceStats()

        values = np.asarray(confidences, dtype=float)
        average = round_half_up(float(values.sum()) / values.size, self.confidence_precision)
        return ConfidenceStats(
            average=average,
            min=min(CONFIDENCE_MIN_START, float(values.min())),
            max=max(CONFIDENCE_MAX_START, float(values.max())),
            count=int(values.size)
        )

    def _build(self, acc: _Accumulator) -> StructuredDocument:
        tables = list(acc.tables)
        if tables and acc.first_table_cells:
            tables[0] = replace(tables[0], cells=tuple(acc.first_table_cells))

        return StructuredDocument(
            full_text="".join(acc.text_parts),
            total_blocks=acc.total_blocks,
            confidence=self._confidence_stats(acc.confidences),
            lines=tuple(acc.lines),
            paragraphs=tuple(acc.paragraphs),
            headings=tuple(acc.headings),
            lists=tuple(acc.lists),
            words=tuple(acc.words),
            numbers=tuple(acc.numbers),
            emails=tuple(acc.emails),
            phones=tuple(acc.phones),
            tables=tuple(tables),
            key_value_pairs=tuple(acc.key_value_pairs),
            sections=organize_sections(acc.lines, self.introduction_title),
            processing_time=datetime.now().isoformat(),
            block_types=dict(acc.block_types)
        )


def structure_document(
    blocks: Optional[Iterable[RawBlock]],
    **options: Any
) -> StructuredDocument:
    """
    Convert a provider block list into a StructuredDocument.

    Args:
        blocks: Provider blocks in reading order, or None
        **options: Keyword arguments for DocumentAggregator

    Returns:
        Immutable StructuredDocument
    """
    return DocumentAggregator(**options).aggregate(blocks)
