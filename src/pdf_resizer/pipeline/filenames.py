# SPDX-License-Identifier: Apache-2.0
"""Output filename derivation."""

from __future__ import annotations

DEFAULT_SUFFIX = "_a6"


def derive_output_filename(filename: str, suffix: str = DEFAULT_SUFFIX) -> str:
    """Insert ``suffix`` before the final extension of ``filename``.

    Names without a "." get the suffix appended.

    Examples:
        >>> derive_output_filename("invoice.pdf")
        'invoice_a6.pdf'
        >>> derive_output_filename("README")
        'README_a6'
        >>> derive_output_filename("scan.v2.pdf", "_a5")
        'scan.v2_a5.pdf'
    """
    index = filename.rfind(".")
    if index == -1:
        return f"{filename}{suffix}"
    return f"{filename[:index]}{suffix}{filename[index:]}"
