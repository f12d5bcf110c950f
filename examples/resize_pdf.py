#!/usr/bin/env python3
# SPDX-License-Identifier: Apache-2.0
"""PDF resize sample script

Shows the basic use of pdf-resizer. Change the settings below to try
different paper sizes or to send the result to a printer.

Usage:
    cd examples
    python resize_pdf.py

Environment variables (loaded from .env automatically):
    PDF_RESIZER_PRINTER: Printer to send the result to (optional)
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

# Add the project to the path (for development)
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

load_dotenv(PROJECT_ROOT / ".env")


# =============================================================================
# Settings - change these to customize the run
# =============================================================================

# Paper sizes: "A3" | "A4" | "A5" | "A6" | "LETTER"
SOURCE_SIZE = "A4"
TARGET_SIZE = "A6"

# Printer name as shown by `lpstat -e`, or None to only write the file
PRINTER = os.environ.get("PDF_RESIZER_PRINTER")

# Input/output paths
INPUT_PDF = PROJECT_ROOT / "printable_files" / "invoice_original.pdf"
OUTPUT_DIR = Path(__file__).parent / "outputs"

VERBOSE = False

# =============================================================================
# Main (normally no need to change)
# =============================================================================


def print_progress(stage: str, current: int, total: int, message: str = "") -> None:
    print(f"  [{stage}] page {current}/{total}: {message}")


def main() -> None:
    from pdf_resizer.core.engine import ResizeConfig
    from pdf_resizer.core.models import PaperSize
    from pdf_resizer.pipeline import ResizePipeline
    from pdf_resizer.printing import CupsDispatcher, PrintError

    logging.basicConfig(level=logging.DEBUG if VERBOSE else logging.WARNING)

    if not INPUT_PDF.exists():
        print(f"Error: Input PDF not found: {INPUT_PDF}")
        sys.exit(1)

    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)

    config = ResizeConfig(
        source=PaperSize.from_name(SOURCE_SIZE),
        target=PaperSize.from_name(TARGET_SIZE),
    )
    pipeline = ResizePipeline(config, progress_callback=print_progress)
    output_pdf = OUTPUT_DIR / pipeline.output_path_for(INPUT_PDF).name

    print("=" * 60)
    print("PDF Resize Example")
    print("=" * 60)
    print(f"Input:   {INPUT_PDF}")
    print(f"Output:  {output_pdf}")
    print(f"Size:    {SOURCE_SIZE} -> {TARGET_SIZE}")
    print(f"Printer: {PRINTER or '(none)'}")
    print("=" * 60)

    result = pipeline.resize_file(INPUT_PDF, output_pdf)
    if not result.ok:
        print(f"Error: {result.message}")
        sys.exit(1)

    print(f"\n{result.message}")
    if result.stats:
        print(f"Scale:           {result.stats.scale:.4f}")
        print(f"Pages:           {result.stats.pages}")
        print(f"Streams scaled:  {result.stats.streams_transformed}")
        print(f"Streams reused:  {result.stats.streams_reused}")
    print(f"File size:       {output_pdf.stat().st_size / 1024:.1f} KB")

    if PRINTER:
        job_name = f"{TARGET_SIZE} Print Job - {INPUT_PDF.name}"
        try:
            job_id = CupsDispatcher().submit(PRINTER, output_pdf.read_bytes(), job_name)
        except PrintError as e:
            print(f"Error: Failed to send print job: {e}")
            sys.exit(1)
        print(f"Sent to {PRINTER} (job {job_id})")

    print("\nDone!")


if __name__ == "__main__":
    main()
