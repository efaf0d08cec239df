"""
Export module for the document structuring pipeline.

Provides:
- Markdown export of a StructuredDocument
- JSON export
- Multi-format dispatch
"""

import logging
import re
from pathlib import Path
from typing import Dict, List, Optional, Union

from .document import LineRecord, StructuredDocument, TableRecord
from .io import save_json

logger = logging.getLogger(__name__)

BULLET_PATTERN = re.compile(r"\s*[-•*]\s+")


# ============================================================================
# Markdown Exporter
# ============================================================================

class MarkdownExporter:
    """Export a structured document to Markdown."""

    def __init__(
        self,
        heading_level: int = 2,
        include_tables: bool = True,
        include_key_values: bool = True
    ):
        self.heading_level = heading_level
        self.include_tables = include_tables
        self.include_key_values = include_key_values

    def export(
        self,
        document: StructuredDocument,
        output_path: Union[str, Path]
    ) -> Path:
        """
        Export document to a Markdown file.

        Args:
            document: Structured document
            output_path: Output file path

        Returns:
            Path to the generated Markdown file
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(self.render(document))

        logger.info(f"Exported Markdown to: {output_path}")
        return output_path

    def render(self, document: StructuredDocument) -> str:
        """Generate Markdown from document structure."""
        lines: List[str] = []
        prefix = "#" * self.heading_level

        # Lines before the first heading belong to a titled introduction.
        if document.sections and document.lines and not document.lines[0].is_heading:
            lines.append(f"{prefix} {document.sections[0].title}")
            lines.append("")

        for line in document.lines:
            md = self._line_to_markdown(line, prefix)
            if md:
                lines.append(md)
                lines.append("")

        if self.include_tables:
            for index, table in enumerate(document.tables, 1):
                md = self._table_to_markdown(table)
                if md:
                    lines.append(f"{prefix}# Table {index}")
                    lines.append("")
                    lines.append(md)
                    lines.append("")

        if self.include_key_values and document.key_value_pairs:
            lines.append(f"{prefix}# Form Fields")
            lines.append("")
            for kv in document.key_value_pairs:
                role = "key" if kv.is_key else "value" if kv.is_value else "region"
                confidence = f" ({kv.confidence:.1f}%)" if kv.confidence is not None else ""
                lines.append(f"- `{kv.id}`: {role}{confidence}")
            lines.append("")

        return "\n".join(lines)

    def _line_to_markdown(self, line: LineRecord, prefix: str) -> str:
        text = line.text.strip()
        if not text:
            return ""
        if line.is_heading:
            return f"{prefix} {text}"
        if line.is_list_item:
            bullet = BULLET_PATTERN.match(text)
            if bullet:
                return f"- {text[bullet.end():]}"
            return text
        return text

    def _table_to_markdown(self, table: TableRecord) -> Optional[str]:
        """Build a pipe table from the table's cells (1-based indices)."""
        cells = [
            c for c in table.cells
            if c.row_index is not None and c.row_index > 0
            and c.column_index is not None and c.column_index > 0
        ]
        if not cells:
            return None

        n_rows = max(c.row_index for c in cells)
        n_cols = max(c.column_index for c in cells)
        grid = [["" for _ in range(n_cols)] for _ in range(n_rows)]
        for cell in cells:
            grid[cell.row_index - 1][cell.column_index - 1] = cell.text.replace("|", "\\|")

        rows = ["| " + " | ".join(grid[0]) + " |",
                "| " + " | ".join("---" for _ in range(n_cols)) + " |"]
        for row in grid[1:]:
            rows.append("| " + " | ".join(row) + " |")
        return "\n".join(rows)


# ============================================================================
# Multi-Format Exporter
# ============================================================================

class DocumentExporter:
    """Convenience class for exporting to multiple formats."""

    FORMATS = ("json", "markdown")

    def __init__(
        self,
        output_dir: Union[str, Path],
        base_name: str = "document",
        markdown_exporter: Optional[MarkdownExporter] = None
    ):
        self.output_dir = Path(output_dir)
        self.base_name = base_name
        self.markdown_exporter = markdown_exporter or MarkdownExporter()

    def export(
        self,
        document: StructuredDocument,
        formats: Optional[List[str]] = None
    ) -> Dict[str, Path]:
        """
        Export document to multiple formats.

        Args:
            document: Structured document
            formats: List of formats ('json', 'markdown', 'all')

        Returns:
            Dictionary mapping format to output path
        """
        if formats is None or "all" in formats:
            formats = list(self.FORMATS)

        self.output_dir.mkdir(parents=True, exist_ok=True)

        results = {}

        if "json" in formats:
            path = self.output_dir / f"{self.base_name}.json"
            results["json"] = save_json(document.to_dict(), path)

        if "markdown" in formats:
            path = self.output_dir / f"{self.base_name}.md"
            results["markdown"] = self.markdown_exporter.export(document, path)

        return results
