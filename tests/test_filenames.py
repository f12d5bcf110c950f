# SPDX-License-Identifier: Apache-2.0
"""Tests for output filename derivation."""

import pytest

from pdf_resizer.pipeline.filenames import DEFAULT_SUFFIX, derive_output_filename


@pytest.mark.parametrize(
    ("filename", "expected"),
    [
        ("invoice.pdf", "invoice_a6.pdf"),
        ("invoice_original.pdf", "invoice_original_a6.pdf"),
        ("README", "README_a6"),
        ("scan.v2.pdf", "scan.v2_a6.pdf"),
        ("Report.PDF", "Report_a6.PDF"),
        (".hidden", "_a6.hidden"),
    ],
)
def test_default_suffix(filename: str, expected: str) -> None:
    assert derive_output_filename(filename) == expected


def test_custom_suffix() -> None:
    assert derive_output_filename("label.pdf", "_a5") == "label_a5.pdf"


def test_default_suffix_constant() -> None:
    assert DEFAULT_SUFFIX == "_a6"
