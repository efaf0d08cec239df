"""
Modules of the document structuring pipeline.
"""

from .blocks import BlockValidationError, parse_block
from .classifier import classify_line, extract_bounding_box, LineClassifier
from .entities import classify_word, ENTITY_RULES
from .sections import organize_sections
from .aggregator import DocumentAggregator, structure_document
from .document import StructuredDocument, Section, WordType, BoundingBox
from .io import load_blocks, save_json, load_json, ensure_dir
from .export import MarkdownExporter, DocumentExporter

__all__ = [
    # Blocks
    "BlockValidationError", "parse_block",
    # Classification
    "classify_line", "extract_bounding_box", "LineClassifier",
    "classify_word", "ENTITY_RULES",
    # Assembly
    "organize_sections", "DocumentAggregator", "structure_document",
    "StructuredDocument", "Section", "WordType", "BoundingBox",
    # IO
    "load_blocks", "save_json", "load_json", "ensure_dir",
    # Export
    "MarkdownExporter", "DocumentExporter",
]
