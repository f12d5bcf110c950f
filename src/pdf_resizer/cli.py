# SPDX-License-Identifier: Apache-2.0
"""
PDF Resizer - CLI Tool

Rescales every page of a PDF to a smaller paper size (A4 -> A6 by default)
and optionally sends the result to a printer.

Usage:
    resize-pdf <input.pdf> [options]

Examples:
    resize-pdf invoice.pdf                       # -> invoice_a6.pdf
    resize-pdf invoice.pdf -o ./out/label.pdf
    resize-pdf invoice.pdf --target-size A5
    resize-pdf invoice.pdf --print Office_LaserJet
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import NoReturn

from pdf_resizer.core.engine import ResizeConfig
from pdf_resizer.core.models import PAPER_SIZES, PaperSize
from pdf_resizer.pipeline.resize_pipeline import ResizePipeline
from pdf_resizer.printing.base import PrintError, PrinterDispatcher
from pdf_resizer.printing.cups import CupsDispatcher

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed argument Namespace.
    """
    parser = argparse.ArgumentParser(
        prog="resize-pdf",
        description="PDF Resize Tool - Fits PDF pages onto a smaller paper size",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s invoice.pdf                          # A4 -> A6, writes invoice_a6.pdf
  %(prog)s invoice.pdf -o label.pdf             # Specify output file
  %(prog)s invoice.pdf --target-size A5         # A4 -> A5
  %(prog)s invoice.pdf --print Office_LaserJet  # Resize and print
  %(prog)s --list-printers                      # Show available printers
""",
    )

    parser.add_argument(
        "input",
        type=Path,
        nargs="?",
        help="Path to PDF file to resize",
    )

    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Output file path (default: <input>_<size>.pdf next to the input)",
    )

    size_choices = sorted(PAPER_SIZES)
    size_group = parser.add_argument_group("Paper size options")
    size_group.add_argument(
        "--source-size",
        default="A4",
        type=str.upper,
        choices=size_choices,
        help="Paper size the document was authored for (default: A4)",
    )
    size_group.add_argument(
        "--target-size",
        default="A6",
        type=str.upper,
        choices=size_choices,
        help="Output paper size (default: A6)",
    )

    print_group = parser.add_argument_group("Printing options")
    print_group.add_argument(
        "-p",
        "--print",
        dest="printer",
        metavar="PRINTER",
        help="Send the resized PDF to this printer",
    )
    print_group.add_argument(
        "--list-printers",
        action="store_true",
        help="List available printers and exit",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )

    args = parser.parse_args(argv)
    if args.input is None and not args.list_printers:
        parser.error("the following arguments are required: input")
    return args


def list_printers(dispatcher: PrinterDispatcher) -> int:
    try:
        printers = dispatcher.list_printers()
    except PrintError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    if not printers:
        print("No printers found.")
    for name in printers:
        print(name)
    return 0


def run(args: argparse.Namespace, dispatcher: PrinterDispatcher | None = None) -> int:
    """Run a resize from parsed arguments.

    Returns:
        Process exit code.
    """
    dispatcher = dispatcher or CupsDispatcher()
    if args.list_printers:
        return list_printers(dispatcher)

    input_path: Path = args.input
    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    config = ResizeConfig(
        source=PaperSize.from_name(args.source_size),
        target=PaperSize.from_name(args.target_size),
    )
    pipeline = ResizePipeline(config)
    output_path = args.output or pipeline.output_path_for(input_path)

    print(f"Input: {input_path}")
    print(f"Output: {output_path}")
    print(f"Size: {config.source.name} -> {config.target.name}")
    print()

    result = pipeline.resize_file(input_path, output_path)
    if not result.ok:
        print(f"Error: Resize failed ({result.status.value}): {result.message}", file=sys.stderr)
        return 1

    print(f"Complete: {output_path}")
    if result.stats:
        stats = result.stats
        print(f"  Scale: {stats.scale:.4f}")
        print(f"  Pages: {stats.pages}")
        print(f"  Content streams: {stats.streams_transformed}")

    if args.printer:
        job_name = f"{config.target.name} Print Job - {input_path.name}"
        try:
            job_id = dispatcher.submit(args.printer, output_path.read_bytes(), job_name)
        except (PrintError, OSError) as e:
            print(f"Error: Failed to send print job: {e}", file=sys.stderr)
            return 1
        print(f"  Printed: {args.printer} (job {job_id})")

    return 0


def main() -> NoReturn:
    """Main entry point."""
    args = parse_args()

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=log_level, format="%(levelname)s: %(message)s")

    sys.exit(run(args))


if __name__ == "__main__":
    main()
