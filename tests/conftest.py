# SPDX-License-Identifier: Apache-2.0
"""Shared fixtures: small PDFs built in memory with pikepdf."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pikepdf
import pytest

A4_SIZE = (595.28, 841.89)

# Blue square from (100, 100) to (200, 200) in absolute page coordinates
SQUARE_CONTENT = b"0 0 1 rg\n100 100 100 100 re\nf\n"


def build_pdf(
    *contents: bytes | None,
    page_size: tuple[float, float] = A4_SIZE,
) -> pikepdf.Pdf:
    """Create a PDF with one page per entry in ``contents``.

    ``None`` creates a page without a /Contents entry.
    """
    pdf = pikepdf.new()
    for data in contents:
        page = pdf.add_blank_page(page_size=page_size)
        if data is None:
            if "/Contents" in page.obj:
                del page.obj["/Contents"]
        else:
            page.obj.Contents = pdf.make_stream(data)
    return pdf


def instructions(obj: Any) -> list[tuple[str, list[Any]]]:
    """Parse a page or stream into (operator, operands) pairs."""
    return [
        (str(inst.operator), list(inst.operands))
        for inst in pikepdf.parse_content_stream(obj)
    ]


@pytest.fixture
def make_pdf() -> Callable[..., pikepdf.Pdf]:
    """Factory for in-memory PDFs."""
    return build_pdf


@pytest.fixture
def parse_ops() -> Callable[[Any], list[tuple[str, list[Any]]]]:
    """Content stream parser returning (operator, operands) pairs."""
    return instructions


@pytest.fixture
def a4_pdf_path(tmp_path: Path) -> Path:
    """One-page A4 PDF with a square drawn at absolute coordinates."""
    path = tmp_path / "invoice.pdf"
    with build_pdf(SQUARE_CONTENT) as pdf:
        pdf.save(path)
    return path
