"""
Input block model for the document structuring pipeline.

Provides:
- Block variants, one per Textract-style BlockType (tagged union)
- Boundary validation of raw provider dictionaries
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Mapping, Optional, Union

logger = logging.getLogger(__name__)


class BlockValidationError(ValueError):
    """Raised when a raw block cannot be interpreted."""


# ============================================================================
# Block Type Tags
# ============================================================================

class BlockTag:
    """Provider block type identifiers."""
    PAGE = "PAGE"
    LINE = "LINE"
    WORD = "WORD"
    TABLE = "TABLE"
    CELL = "CELL"
    KEY_VALUE_SET = "KEY_VALUE_SET"
    SELECTION_ELEMENT = "SELECTION_ELEMENT"


# ============================================================================
# Block Variants
# ============================================================================

@dataclass(frozen=True)
class BaseBlock:
    """Fields shared by every block variant."""
    block_type: str
    block_id: Optional[str] = None
    confidence: Optional[float] = None
    geometry: Optional[Mapping[str, Any]] = None


@dataclass(frozen=True)
class LineBlock(BaseBlock):
    text: Optional[str] = None


@dataclass(frozen=True)
class WordBlock(BaseBlock):
    text: Optional[str] = None


@dataclass(frozen=True)
class TableBlock(BaseBlock):
    row_count: Optional[int] = None
    column_count: Optional[int] = None


@dataclass(frozen=True)
class CellBlock(BaseBlock):
    text: Optional[str] = None
    row_index: Optional[int] = None
    column_index: Optional[int] = None


@dataclass(frozen=True)
class KeyValueBlock(BaseBlock):
    entity_types: FrozenSet[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class GenericBlock(BaseBlock):
    """Any block type the pipeline only counts (PAGE, SELECTION_ELEMENT, ...)."""
    text: Optional[str] = None


Block = Union[LineBlock, WordBlock, TableBlock, CellBlock, KeyValueBlock, GenericBlock]


# ============================================================================
# Boundary Parsing
# ============================================================================

def _optional_float(raw: Mapping[str, Any], key: str) -> Optional[float]:
    value = raw.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise BlockValidationError(f"{key} must be numeric, got {value!r}")
    return float(value)


def _optional_int(raw: Mapping[str, Any], key: str) -> Optional[int]:
    value = raw.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise BlockValidationError(f"{key} must be an integer, got {value!r}")
    return int(value)


def _optional_text(raw: Mapping[str, Any]) -> Optional[str]:
    value = raw.get("Text")
    if value is not None and not isinstance(value, str):
        raise BlockValidationError(f"Text must be a string, got {value!r}")
    return value


BOX_KEYS = ("Left", "Top", "Width", "Height")


def _optional_geometry(raw: Mapping[str, Any]) -> Optional[Mapping[str, Any]]:
    geometry = raw.get("Geometry")
    if geometry is None:
        return None
    if not isinstance(geometry, Mapping):
        raise BlockValidationError(f"Geometry must be a mapping, got {geometry!r}")

    box = geometry.get("BoundingBox")
    if box is None:
        return geometry
    if not isinstance(box, Mapping):
        raise BlockValidationError(f"BoundingBox must be a mapping, got {box!r}")
    for key in BOX_KEYS:
        _optional_float(box, key)
    return geometry


def _entity_types(raw: Mapping[str, Any]) -> FrozenSet[str]:
    value = raw.get("EntityTypes")
    if value is None:
        return frozenset()
    if isinstance(value, str):
        return frozenset((value,))
    if not isinstance(value, (list, tuple, set, frozenset)):
        raise BlockValidationError(f"EntityTypes must be a list of strings, got {value!r}")
    for item in value:
        if not isinstance(item, str):
            raise BlockValidationError(f"EntityTypes entries must be strings, got {item!r}")
    return frozenset(value)


def parse_block(raw: Union[Mapping[str, Any], BaseBlock]) -> BaseBlock:
    """
    Convert a raw provider block into its typed variant.

    Args:
        raw: Provider dictionary (PascalCase keys) or an already parsed block

    Returns:
        The block variant matching ``BlockType``

    Raises:
        BlockValidationError: If the block is not a mapping, has no
            ``BlockType``, or a field has the wrong type (non-string
            ``Text``, malformed ``Geometry``, non-numeric confidence,
            coordinate or index, non-string ``EntityTypes`` entry)
    """
    if isinstance(raw, BaseBlock):
        return raw
    if not isinstance(raw, Mapping):
        raise BlockValidationError(f"Block must be a mapping, got {type(raw).__name__}")

    block_type = raw.get("BlockType")
    if not block_type or not isinstance(block_type, str):
        raise BlockValidationError(f"Block {raw.get('Id')!r} has no BlockType")

    common: Dict[str, Any] = {
        "block_type": block_type,
        "block_id": raw.get("Id"),
        "confidence": _optional_float(raw, "Confidence"),
        "geometry": _optional_geometry(raw),
    }

    if block_type == BlockTag.LINE:
        return LineBlock(text=_optional_text(raw), **common)
    if block_type == BlockTag.WORD:
        return WordBlock(text=_optional_text(raw), **common)
    if block_type == BlockTag.TABLE:
        return TableBlock(
            row_count=_optional_int(raw, "RowCount"),
            column_count=_optional_int(raw, "ColumnCount"),
            **common
        )
    if block_type == BlockTag.CELL:
        return CellBlock(
            text=_optional_text(raw),
            row_index=_optional_int(raw, "RowIndex"),
            column_index=_optional_int(raw, "ColumnIndex"),
            **common
        )
    if block_type == BlockTag.KEY_VALUE_SET:
        return KeyValueBlock(entity_types=_entity_types(raw), **common)

    return GenericBlock(text=_optional_text(raw), **common)
