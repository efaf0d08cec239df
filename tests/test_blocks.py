"""
Tests for block parsing at the input boundary.
"""

import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


class TestParseBlock:
    """Test conversion of raw provider blocks."""

    def test_line_block(self):
        from structuring.blocks import parse_block, LineBlock

        block = parse_block({
            "BlockType": "LINE",
            "Id": "l-1",
            "Text": "Hello",
            "Confidence": 99.5,
            "Geometry": {"BoundingBox": {"Left": 0.1, "Top": 0.1, "Width": 0.2, "Height": 0.05}}
        })

        assert isinstance(block, LineBlock)
        assert block.text == "Hello"
        assert block.confidence == 99.5
        assert block.block_id == "l-1"
        assert block.geometry["BoundingBox"]["Left"] == 0.1

    def test_table_and_cell_blocks(self):
        from structuring.blocks import parse_block, TableBlock, CellBlock

        table = parse_block({"BlockType": "TABLE", "Id": "t", "RowCount": 3, "ColumnCount": 2})
        cell = parse_block({"BlockType": "CELL", "RowIndex": 1, "ColumnIndex": 2, "Text": "x"})

        assert isinstance(table, TableBlock)
        assert (table.row_count, table.column_count) == (3, 2)
        assert isinstance(cell, CellBlock)
        assert (cell.row_index, cell.column_index) == (1, 2)

    def test_key_value_block(self):
        from structuring.blocks import parse_block, KeyValueBlock

        block = parse_block({"BlockType": "KEY_VALUE_SET", "EntityTypes": ["KEY"]})

        assert isinstance(block, KeyValueBlock)
        assert block.entity_types == frozenset({"KEY"})

    def test_unknown_type_is_generic(self):
        from structuring.blocks import parse_block, GenericBlock

        block = parse_block({"BlockType": "PAGE", "Confidence": 50})

        assert isinstance(block, GenericBlock)
        assert block.block_type == "PAGE"
        assert block.confidence == 50.0

    def test_optional_fields_absent(self):
        from structuring.blocks import parse_block

        line = parse_block({"BlockType": "LINE"})
        kv = parse_block({"BlockType": "KEY_VALUE_SET", "EntityTypes": None})

        assert line.text is None
        assert line.confidence is None
        assert line.geometry is None
        assert kv.entity_types == frozenset()

    def test_parsed_block_passes_through(self):
        from structuring.blocks import parse_block, WordBlock

        block = WordBlock(block_type="WORD", text="hi")

        assert parse_block(block) is block

    @pytest.mark.parametrize("raw", [
        "LINE",
        None,
        {"Text": "no type"},
        {"BlockType": ""},
        {"BlockType": "LINE", "Confidence": "high"},
        {"BlockType": "TABLE", "RowCount": "3"},
        {"BlockType": "LINE", "Text": 123},
        {"BlockType": "LINE", "Geometry": "box"},
        {"BlockType": "LINE", "Geometry": {"BoundingBox": [0.1, 0.2]}},
        {"BlockType": "WORD", "Geometry": {"BoundingBox": {"Left": "a"}}},
        {"BlockType": "KEY_VALUE_SET", "EntityTypes": 5},
        {"BlockType": "KEY_VALUE_SET", "EntityTypes": [1]},
    ])
    def test_invalid_blocks(self, raw):
        from structuring.blocks import parse_block, BlockValidationError

        with pytest.raises(BlockValidationError):
            parse_block(raw)

    def test_validation_error_is_value_error(self):
        from structuring.blocks import BlockValidationError

        assert issubclass(BlockValidationError, ValueError)
