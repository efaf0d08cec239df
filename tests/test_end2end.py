"""
End-to-end integration tests for the Document Structuring Pipeline.
"""

import pytest
import json
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


class TestEndToEnd:
    """End-to-end integration tests."""

    @pytest.fixture
    def provider_response(self, tmp_path):
        """Write a two-page provider response to disk."""
        def geometry(top):
            return {"BoundingBox": {"Left": 0.1, "Top": top, "Width": 0.6, "Height": 0.04}}

        pages = [
            {"Blocks": [
                {"BlockType": "PAGE", "Id": "p1"},
                {"BlockType": "LINE", "Id": "l1", "Text": "Quarterly Report", "Confidence": 99.2,
                 "Geometry": geometry(0.05)},
                {"BlockType": "LINE", "Id": "l2", "Text": "Revenue grew in every region.", "Confidence": 97.4,
                 "Geometry": geometry(0.1)},
                {"BlockType": "WORD", "Id": "w1", "Text": "2024", "Confidence": 99.9},
                {"BlockType": "WORD", "Id": "w2", "Text": "ir@example.com", "Confidence": 98.1},
            ]},
            {"Blocks": [
                {"BlockType": "PAGE", "Id": "p2"},
                {"BlockType": "LINE", "Id": "l3", "Text": "NEXT STEPS", "Confidence": 99.0},
                {"BlockType": "LINE", "Id": "l4", "Text": "1. hire engineers", "Confidence": 96.0},
                {"BlockType": "TABLE", "Id": "t1", "RowCount": 1, "ColumnCount": 2, "Confidence": 90.0},
                {"BlockType": "CELL", "Id": "c1", "RowIndex": 1, "ColumnIndex": 1, "Text": "Q1"},
                {"BlockType": "CELL", "Id": "c2", "RowIndex": 1, "ColumnIndex": 2, "Text": "Q2"},
            ]},
        ]
        path = tmp_path / "report.json"
        path.write_text(json.dumps(pages), encoding="utf-8")
        return path

    def test_cli_json_and_markdown(self, provider_response, tmp_path):
        import cli

        output_dir = tmp_path / "out"
        with pytest.raises(SystemExit) as exc:
            cli.main(["--input", str(provider_response), "--output", str(output_dir), "--quiet"])

        assert exc.value.code == 0

        data = json.loads((output_dir / "report.json").read_text(encoding="utf-8"))
        assert data["document"]["totalBlocks"] == 11
        assert data["document"]["fullText"] == (
            "Quarterly Report\nRevenue grew in every region.\nNEXT STEPS\n1. hire engineers\n"
        )
        assert [s["title"] for s in data["structure"]["sections"]] == ["Quarterly Report", "NEXT STEPS"]
        assert [h["text"] for h in data["content"]["headings"]] == ["Quarterly Report", "NEXT STEPS"]
        assert [w["text"] for w in data["entities"]["numbers"]] == ["2024"]
        assert [w["text"] for w in data["entities"]["emails"]] == ["ir@example.com"]
        assert data["metadata"]["blockTypes"]["PAGE"] == 2
        assert data["metadata"]["pageCount"] == 1
        assert data["content"]["lines"][0]["boundingBox"] == {
            "left": 0.1, "top": 0.05, "width": 0.6, "height": 0.04
        }

        markdown = (output_dir / "report.md").read_text(encoding="utf-8")
        assert "## Quarterly Report" in markdown
        assert "| Q1 | Q2 |" in markdown

    def test_cli_options(self, provider_response, tmp_path):
        import cli

        output_dir = tmp_path / "out"
        with pytest.raises(SystemExit) as exc:
            cli.main([
                "--input", str(provider_response), "--output", str(output_dir),
                "--format", "json", "--name", "custom", "--heading-max-length", "12", "--quiet",
            ])

        assert exc.value.code == 0
        assert not (output_dir / "custom.md").exists()
        data = json.loads((output_dir / "custom.json").read_text(encoding="utf-8"))
        # "Quarterly Report" is 16 characters long
        assert [h["text"] for h in data["content"]["headings"]] == ["NEXT STEPS"]
        assert data["structure"]["sections"][0]["title"] == "Introduction"

    def test_cli_missing_input(self, tmp_path):
        import cli

        with pytest.raises(SystemExit) as exc:
            cli.main(["--input", str(tmp_path / "nope.json"), "--output", str(tmp_path / "out"), "--quiet"])

        assert exc.value.code == 1

    def test_cli_invalid_block(self, tmp_path):
        import cli

        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"Blocks": [{"Text": "untyped"}]}), encoding="utf-8")

        with pytest.raises(SystemExit) as exc:
            cli.main(["--input", str(path), "--output", str(tmp_path / "out"), "--quiet"])

        assert exc.value.code == 1

    def test_cli_wrong_field_type(self, tmp_path):
        import cli

        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"Blocks": [{"BlockType": "LINE", "Text": 42}]}), encoding="utf-8")

        with pytest.raises(SystemExit) as exc:
            cli.main(["--input", str(path), "--output", str(tmp_path / "out"), "--quiet"])

        assert exc.value.code == 1
        assert not (tmp_path / "out" / "bad.json").exists()


class TestConfig:
    """Test configuration and environment overrides."""

    def test_defaults(self, monkeypatch):
        for name in ("DOC_STRUCTURE_HEADING_MAX_LENGTH", "DOC_STRUCTURE_BBOX_PRECISION",
                     "DOC_STRUCTURE_INTRO_TITLE", "DOC_STRUCTURE_DEBUG"):
            monkeypatch.delenv(name, raising=False)
        from config import get_config

        config = get_config()

        assert config.structuring_options() == {
            "heading_max_length": 50,
            "bbox_precision": 2,
            "confidence_precision": 2,
            "introduction_title": "Introduction",
            "placeholder_table_id": "table-1",
        }
        assert config.debug_mode is False

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("DOC_STRUCTURE_HEADING_MAX_LENGTH", "30")
        monkeypatch.setenv("DOC_STRUCTURE_BBOX_PRECISION", "not-a-number")
        monkeypatch.setenv("DOC_STRUCTURE_INTRO_TITLE", "Preface")
        monkeypatch.setenv("DOC_STRUCTURE_DEBUG", "true")
        from config import get_config

        config = get_config()

        assert config.classifier.heading_max_length == 30
        assert config.classifier.bbox_precision == 2
        assert config.sections.introduction_title == "Preface"
        assert config.debug_mode is True
