#!/usr/bin/env python
"""
Generate synthetic provider responses for trying the document structuring pipeline.

This script creates block lists with:
- Headings, paragraphs and list items
- Typed words (numbers, phones, emails, dates)
- Tables with cells
- Key-value regions

Usage:
    python examples/generate_samples.py
    python src/cli.py --input examples/sample_responses/sample_invoice.json --output ./output
"""

import json
from pathlib import Path

import numpy as np

rng = np.random.default_rng(seed=7)


def _confidence():
    return round(float(rng.uniform(85.0, 99.9)), 3)


def _geometry(top, left=0.08, width=0.6, height=0.03):
    return {"BoundingBox": {
        "Left": float(left), "Top": float(top), "Width": float(width), "Height": float(height)
    }}


class _BlockWriter:
    """Emits blocks with sequential ids and a running vertical position."""

    def __init__(self):
        self.blocks = []
        self.top = 0.04
        self._next_id = 1

    def add(self, block_type, **fields):
        block = {"BlockType": block_type, "Id": f"{block_type.lower()}-{self._next_id}"}
        block.update(fields)
        self.blocks.append(block)
        self._next_id += 1
        return block

    def line(self, text):
        self.add("LINE", Text=text, Confidence=_confidence(), Geometry=_geometry(self.top))
        left = 0.08
        for word in text.split():
            width = 0.012 * len(word)
            self.add("WORD", Text=word, Confidence=_confidence(),
                     Geometry=_geometry(self.top, left=left, width=width))
            left += width + 0.01
        self.top += 0.035

    def table(self, rows):
        n_cols = len(rows[0])
        self.add("TABLE", RowCount=len(rows), ColumnCount=n_cols, Confidence=_confidence(),
                 Geometry=_geometry(self.top, width=0.8, height=0.03 * len(rows)))
        for r, row in enumerate(rows, 1):
            for c, text in enumerate(row, 1):
                self.add("CELL", RowIndex=r, ColumnIndex=c, Text=text, Confidence=_confidence(),
                         Geometry=_geometry(self.top, left=0.08 + (c - 1) * 0.8 / n_cols,
                                            width=0.8 / n_cols))
            self.top += 0.03

    def key_value(self, key, value):
        self.add("KEY_VALUE_SET", EntityTypes=["KEY"], Confidence=_confidence(),
                 Geometry=_geometry(self.top, width=0.2))
        self.add("KEY_VALUE_SET", EntityTypes=["VALUE"], Confidence=_confidence(),
                 Geometry=_geometry(self.top, left=0.3, width=0.3))
        self.line(f"{key}: {value}")


def create_sample_invoice():
    """Invoice with contact details, line items and a totals table."""
    writer = _BlockWriter()
    writer.add("PAGE", Geometry=_geometry(0, 0, 1, 1))
    writer.line("INVOICE")
    writer.line("Issued 03/11/2024 to the customer listed below.")
    writer.line("Contact Details")
    writer.line("Phone 555-010-2030 or email billing@example.com")
    writer.line("Line Items")
    writer.line("- 12 bolts")
    writer.line("- 4 brackets")
    writer.table([["Item", "Qty", "Price"], ["Bolt", "12", "0.25"], ["Bracket", "4", "3.10"]])
    return {"Blocks": writer.blocks}


def create_sample_report():
    """Report whose first lines come before any heading."""
    writer = _BlockWriter()
    writer.add("PAGE", Geometry=_geometry(0, 0, 1, 1))
    writer.line("prepared for the board of directors")
    writer.line("EXECUTIVE SUMMARY")
    writer.line("Revenue grew 14 percent compared with last year.")
    writer.line("Next Steps")
    writer.line("1. expand the sales team")
    writer.line("2. open a second warehouse")
    return {"Blocks": writer.blocks}


def create_sample_form():
    """Form with key-value regions and orphan cells."""
    writer = _BlockWriter()
    writer.add("PAGE", Geometry=_geometry(0, 0, 1, 1))
    writer.line("Application Form")
    writer.key_value("Name", "Jane Doe")
    writer.key_value("Date", "07/04/2024")
    writer.add("CELL", RowIndex=1, ColumnIndex=1, Text="Signature", Confidence=_confidence())
    return {"Blocks": writer.blocks}


def main():
    samples_dir = Path(__file__).parent / "sample_responses"
    samples_dir.mkdir(exist_ok=True)

    samples = [
        ("sample_invoice", create_sample_invoice()),
        ("sample_report", create_sample_report()),
        ("sample_form", create_sample_form()),
    ]

    for name, response in samples:
        path = samples_dir / f"{name}.json"
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(response, f, indent=2)
        print(f"Created: {path} ({len(response['Blocks'])} blocks)")

    print("\nSample generation complete!")


if __name__ == "__main__":
    main()
