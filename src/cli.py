#!/usr/bin/env python
"""
Command-line interface for the Document Structuring Pipeline.

Usage:
    python src/cli.py --input <blocks.json> --output <output_dir> [options]

Examples:
    # Structure a provider response and export JSON + Markdown
    python src/cli.py --input response.json --output ./output

    # Only JSON, with a stricter heading length
    python src/cli.py --input response.json --output ./output --format json --heading-max-length 40
"""

import sys
from pathlib import Path

# Add src directory to path for imports when running as script
_src_dir = Path(__file__).parent
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

import argparse
import logging
import time
from typing import List, Optional

from config import LOG_FORMAT

logger = logging.getLogger("doc_structure")


def setup_argparser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        description="Document Structuring Pipeline - Convert OCR block lists to structured documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Structure a provider response and export all formats:
    python -m src.cli --input response.json --output ./output --format all

  Change the introduction section title:
    python -m src.cli --input response.json --output ./output --intro-title Preamble
        """
    )

    # Required arguments
    parser.add_argument(
        "--input", "-i",
        required=True,
        help="JSON file holding a provider response or a bare block list"
    )

    parser.add_argument(
        "--output", "-o",
        required=True,
        help="Output directory for generated files"
    )

    # Optional arguments
    parser.add_argument(
        "--format", "-f",
        nargs="+",
        default=None,
        choices=["json", "markdown", "all"],
        help="Output format(s) (default: json markdown)"
    )

    parser.add_argument(
        "--name",
        default=None,
        help="Base name of output files (default: input file stem)"
    )

    parser.add_argument(
        "--heading-max-length",
        type=int,
        default=None,
        help="Lines this long or longer are never headings (default: 50)"
    )

    parser.add_argument(
        "--intro-title",
        default=None,
        help="Title of the section holding lines before the first heading"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Re-raise errors with full tracebacks"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress non-error output"
    )

    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 1.0.0"
    )

    return parser


def run_pipeline(args) -> int:
    """Run the document structuring pipeline."""
    from structuring.io import load_blocks, ensure_dir
    from structuring.aggregator import structure_document
    from structuring.export import DocumentExporter, MarkdownExporter
    from config import get_config

    start_time = time.time()

    config = get_config()
    if args.heading_max_length is not None:
        config.classifier.heading_max_length = args.heading_max_length
    if args.intro_title:
        config.sections.introduction_title = args.intro_title
    formats = args.format or config.export.formats
    debug = args.debug or config.debug_mode

    input_path = Path(args.input)
    output_dir = ensure_dir(args.output)

    try:
        blocks = load_blocks(input_path)
        document = structure_document(blocks, **config.structuring_options())
    except (FileNotFoundError, ValueError) as e:
        # BlockValidationError and malformed JSON are both ValueErrors
        logger.error(f"Processing failed: {e}")
        if debug:
            raise
        return 1

    exporter = DocumentExporter(
        output_dir,
        args.name or input_path.stem,
        markdown_exporter=MarkdownExporter(
            heading_level=config.export.markdown_heading_level,
            include_tables=config.export.include_tables,
            include_key_values=config.export.include_key_values
        )
    )
    export_results = exporter.export(document, formats)

    for fmt, path in export_results.items():
        logger.info(f"Exported {fmt}: {path}")

    elapsed = time.time() - start_time

    if not args.quiet:
        print("\n" + "=" * 60)
        print("DOCUMENT STRUCTURING COMPLETE")
        print("=" * 60)
        print(f"Source: {input_path}")
        print(f"Output: {output_dir}")
        print(f"Processing time: {elapsed:.2f}s")
        print()
        print("Summary:")
        print(f"  Blocks: {document.total_blocks}")
        print(f"  Lines: {len(document.lines)} "
              f"(headings: {len(document.headings)}, "
              f"lists: {len(document.lists)}, "
              f"paragraphs: {len(document.paragraphs)})")
        print(f"  Words: {len(document.words)} "
              f"(numbers: {len(document.numbers)}, "
              f"emails: {len(document.emails)}, "
              f"phones: {len(document.phones)})")
        print(f"  Tables: {len(document.tables)}")
        print(f"  Key-value regions: {len(document.key_value_pairs)}")
        print(f"  Sections: {len(document.sections)}")
        print(f"  Average confidence: {document.confidence.average:.2f}")
        print("=" * 60)

    return 0


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    parser = setup_argparser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)

    # Configure logging level
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    elif args.quiet:
        logging.getLogger().setLevel(logging.ERROR)

    try:
        exit_code = run_pipeline(args)
        sys.exit(exit_code)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(130)


if __name__ == "__main__":
    main()
