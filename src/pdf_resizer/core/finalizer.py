# SPDX-License-Identifier: Apache-2.0
"""Reachability sweep over the document object graph."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import pikepdf  # type: ignore[import-untyped]

logger = logging.getLogger(__name__)


@dataclass
class FinalizeReport:
    """Outcome of the reachability sweep.

    Attributes:
        reachable: Indirect objects reachable from the trailer.
        orphaned: Indirect objects that will not be written on save.
    """

    reachable: int
    orphaned: int


def reachable_objects(pdf: pikepdf.Pdf) -> set[tuple[int, int]]:
    """Collect the identities of all indirect objects reachable from the trailer.

    The trailer holds /Root (and /Info when present), so this covers every
    object the document writer will emit.
    """
    seen: set[tuple[int, int]] = set()
    stack: list[Any] = [pdf.trailer]
    while stack:
        obj = stack.pop()
        # Scalars come back as Python values and hold no references
        if not isinstance(obj, pikepdf.Object):
            continue
        if obj.is_indirect:
            if obj.objgen in seen:
                continue
            seen.add(obj.objgen)

        if isinstance(obj, pikepdf.Stream):
            stack.extend(value for _, value in obj.stream_dict.items())
        elif isinstance(obj, pikepdf.Dictionary):
            stack.extend(value for _, value in obj.items())
        elif isinstance(obj, pikepdf.Array):
            stack.extend(obj)
    return seen


def finalize_document(pdf: pikepdf.Pdf) -> FinalizeReport:
    """Drop references to unused resources and sweep for orphaned objects.

    Must run once, after every page has been rewritten. Orphans left by
    content replacement are not written by ``Pdf.save``, which only emits
    objects reachable from the trailer.
    """
    pdf.remove_unreferenced_resources()
    reachable = reachable_objects(pdf)
    orphaned = sum(
        1
        for obj in pdf.objects
        if isinstance(obj, pikepdf.Object)
        and obj.is_indirect
        and obj.objgen not in reachable
    )
    if orphaned:
        logger.debug("%d unreachable objects will be dropped on save", orphaned)
    return FinalizeReport(reachable=len(reachable), orphaned=orphaned)
