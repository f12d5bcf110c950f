# SPDX-License-Identifier: Apache-2.0
"""Page boundary box rewriting."""

from __future__ import annotations

import logging

import pikepdf  # type: ignore[import-untyped]

from .errors import StructuralError
from .models import Rect

logger = logging.getLogger(__name__)

# Optional boxes that are clipped to the MediaBox by viewers and printers.
# Left untouched they would keep describing the old page size.
SECONDARY_BOXES = ("/CropBox", "/BleedBox", "/TrimBox", "/ArtBox")


def rewrite_page_geometry(
    page_obj: pikepdf.Object,
    target: Rect,
    page_index: int,
) -> None:
    """Replace the page's MediaBox with ``target``.

    This is a hard reset of the box, not a proportional shrink. Only
    drawing content is scaled, by the content stream transformer.
    Secondary boxes present on the page are reset to the same rectangle.

    Args:
        page_obj: Page dictionary, mutated in place.
        target: New page rectangle.
        page_index: 0-indexed page number, for error reporting.

    Raises:
        StructuralError: If the page node is not a dictionary.
    """
    if not isinstance(page_obj, pikepdf.Dictionary):
        raise StructuralError(
            f"Page {page_index} is not a dictionary "
            f"(got {type(page_obj).__name__})",
            page_index=page_index,
        )

    page_obj.MediaBox = pikepdf.Array(target.to_list())
    for key in SECONDARY_BOXES:
        if key in page_obj:
            page_obj[key] = pikepdf.Array(target.to_list())
            logger.debug("Page %d: reset %s", page_index, key)
