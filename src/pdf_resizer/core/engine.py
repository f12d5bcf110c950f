# SPDX-License-Identifier: Apache-2.0
"""Resize engine: rewrites an open document for a smaller paper size."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import pikepdf  # type: ignore[import-untyped]

from .content_stream import ContentStreamTransformer
from .errors import StructuralError
from .finalizer import finalize_document
from .geometry import rewrite_page_geometry
from .models import A4, A6, PaperSize
from .scale_policy import compute_scale

if TYPE_CHECKING:
    from ..pipeline.progress import ProgressCallback

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResizeConfig:
    """Resize configuration.

    The engine assumes every page was authored for ``source`` and fits it
    into ``target`` with one uniform factor.
    """

    source: PaperSize = A4
    target: PaperSize = A6

    # Inserted before the extension of derived output filenames.
    # None => "_" + lowercased target name (e.g. "_a6")
    output_suffix: str | None = None

    @property
    def suffix(self) -> str:
        if self.output_suffix is not None:
            return self.output_suffix
        return f"_{self.target.name.lower()}"


@dataclass
class ResizeStats:
    """Statistics from one engine run."""

    scale: float
    pages: int = 0
    streams_transformed: int = 0
    streams_reused: int = 0
    orphaned_objects: int = 0
    empty_pages: list[int] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "scale": self.scale,
            "pages": self.pages,
            "streams_transformed": self.streams_transformed,
            "streams_reused": self.streams_reused,
            "orphaned_objects": self.orphaned_objects,
            "empty_pages": list(self.empty_pages),
        }


class ResizeEngine:
    """Rescale every page of a document to the configured target size."""

    def __init__(self, config: ResizeConfig | None = None) -> None:
        self._config = config or ResizeConfig()

    @property
    def config(self) -> ResizeConfig:
        return self._config

    def resize(
        self,
        pdf: pikepdf.Pdf,
        progress_callback: ProgressCallback | None = None,
    ) -> ResizeStats:
        """Rewrite ``pdf`` in place.

        The scale factor is computed before any page is touched, so an
        oversize configuration leaves the document unmodified. Pages are
        processed in document order; the reachability sweep runs once at
        the end.

        Raises:
            OversizeError: If the target is larger than the source.
            StructuralError: If any page cannot be rewritten. The document
                may be partially modified and must be discarded.
        """
        scale = compute_scale(self._config.source, self._config.target)
        target_rect = self._config.target.rect
        transformer = ContentStreamTransformer(pdf, scale)
        stats = ResizeStats(scale=scale)

        try:
            pages = list(pdf.pages)
        except pikepdf.PdfError as exc:
            raise StructuralError("Failed to read the page tree", cause=exc) from exc
        total = len(pages)
        logger.info(
            "Resizing %d pages %s -> %s (scale %.4f)",
            total,
            self._config.source.name,
            self._config.target.name,
            scale,
        )

        for index, page in enumerate(pages):
            reused = transformer.reused_count
            try:
                rewrite_page_geometry(page.obj, target_rect, index)
                rewritten = transformer.transform_page(page.obj, index)
                has_contents = "/Contents" in page.obj
            except pikepdf.PdfError as exc:
                raise StructuralError(
                    f"Page {index}: failed to rewrite page", cause=exc, page_index=index
                ) from exc

            if rewritten:
                message = "content scaled"
            elif transformer.reused_count > reused:
                message = "content already scaled"
            elif has_contents:
                message = "empty content"
            else:
                message = "no content"
                stats.empty_pages.append(index)
            stats.pages += 1
            if progress_callback is not None:
                progress_callback("resize", index + 1, total, message)

        try:
            report = finalize_document(pdf)
        except pikepdf.PdfError as exc:
            raise StructuralError("Failed to sweep the object graph", cause=exc) from exc
        stats.streams_transformed = transformer.transformed_count
        stats.streams_reused = transformer.reused_count
        stats.orphaned_objects = report.orphaned
        return stats
