# SPDX-License-Identifier: Apache-2.0
"""Uniform scale factor between two paper sizes."""

from __future__ import annotations

from .errors import OversizeError
from .models import PaperSize


def compute_scale(source: PaperSize, target: PaperSize) -> float:
    """Compute the single scale factor that fits ``source`` into ``target``.

    The smaller of the two axis ratios is used so that content never
    exceeds the target on either axis and the aspect ratio is preserved.
    One axis may end up with a margin.

    Args:
        source: Size the document was authored for.
        target: Size of the output medium.

    Returns:
        Scale factor in (0, 1].

    Raises:
        OversizeError: If the factor would exceed 1, i.e. the target is
            larger than the source on both axes.
    """
    scale = min(target.width / source.width, target.height / source.height)
    if scale > 1.0:
        raise OversizeError(
            f"Scaling up is not handled, only scaling down "
            f"({source.name} -> {target.name} would scale by {scale:.4f})",
            scale=scale,
        )
    return scale
