"""
Document Structuring Pipeline
=============================

Turns the flat block list of an OCR/document-analysis provider into a
structured document: full text, headings, paragraphs, list items, typed
word entities, tables, key-value regions and sections.

Main components:
- Block classification (bounding boxes, heading / list detection)
- Single-pass aggregation with confidence statistics
- Word entity typing
- Section organization
- JSON and Markdown export
"""

__version__ = "1.0.0"
__author__ = "Document Structuring Team"
