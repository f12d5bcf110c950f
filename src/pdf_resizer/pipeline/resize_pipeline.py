# SPDX-License-Identifier: Apache-2.0
"""Resize pipeline implementation: load, rewrite, save."""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass
from enum import Enum
from io import BytesIO
from pathlib import Path

import pikepdf  # type: ignore[import-untyped]

from pdf_resizer.core.engine import ResizeConfig, ResizeEngine, ResizeStats
from pdf_resizer.core.errors import (
    LoadError,
    OversizeError,
    ResizeError,
    SaveError,
    StructuralError,
)
from pdf_resizer.pipeline.filenames import derive_output_filename
from pdf_resizer.pipeline.progress import ProgressCallback

logger = logging.getLogger(__name__)


class ResizeStatus(str, Enum):
    """Outcome of a resize run."""

    OK = "ok"
    LOAD_FAILED = "load_failed"
    OVERSIZE = "oversize"
    STRUCTURAL_FAILED = "structural_failed"
    SAVE_FAILED = "save_failed"


# Most specific first
_ERROR_STATUS: tuple[tuple[type[ResizeError], ResizeStatus], ...] = (
    (LoadError, ResizeStatus.LOAD_FAILED),
    (OversizeError, ResizeStatus.OVERSIZE),
    (StructuralError, ResizeStatus.STRUCTURAL_FAILED),
    (SaveError, ResizeStatus.SAVE_FAILED),
)


@dataclass
class ResizeResult:
    """Tagged resize result."""

    status: ResizeStatus
    message: str
    output_path: Path | None = None
    stats: ResizeStats | None = None

    @property
    def ok(self) -> bool:
        return self.status is ResizeStatus.OK

    @classmethod
    def from_error(cls, error: ResizeError) -> ResizeResult:
        for error_type, status in _ERROR_STATUS:
            if isinstance(error, error_type):
                return cls(status=status, message=str(error))
        raise TypeError(f"Unhandled resize error type: {type(error).__name__}")


class ResizePipeline:
    """PDF resize pipeline.

    Each run opens its own document, so one pipeline instance can serve
    many runs. Runs over the same output path are not coordinated here.
    """

    def __init__(
        self,
        config: ResizeConfig | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> None:
        """Initialize ResizePipeline."""
        self._config = config or ResizeConfig()
        self._engine = ResizeEngine(self._config)
        self._progress_callback = progress_callback

    @property
    def config(self) -> ResizeConfig:
        return self._config

    def output_path_for(self, input_path: Path) -> Path:
        """Default output path: next to the input, with the size suffix."""
        return input_path.with_name(
            derive_output_filename(input_path.name, self._config.suffix)
        )

    def run(self, input_path: Path, output_path: Path | None = None) -> ResizeStats:
        """Resize ``input_path`` and write the result.

        The output file appears only if every stage succeeds.

        Args:
            input_path: Source PDF.
            output_path: Destination (default: ``output_path_for(input_path)``).

        Returns:
            Engine statistics.

        Raises:
            LoadError, OversizeError, StructuralError, SaveError.
        """
        if output_path is None:
            output_path = self.output_path_for(input_path)

        with self._stage_load(input_path) as pdf:
            stats = self._engine.resize(pdf, self._progress_callback)
            self._stage_save(pdf, output_path)

        logger.info(
            "Resized %s -> %s (%d pages, %d streams)",
            input_path,
            output_path,
            stats.pages,
            stats.streams_transformed,
        )
        return stats

    def resize_file(self, input_path: Path, output_path: Path | None = None) -> ResizeResult:
        """Like :meth:`run`, but report failures as a tagged result."""
        if output_path is None:
            output_path = self.output_path_for(input_path)
        try:
            stats = self.run(input_path, output_path)
        except ResizeError as exc:
            logger.warning("Resize failed: %s", exc)
            return ResizeResult.from_error(exc)
        return ResizeResult(
            status=ResizeStatus.OK,
            message=f"Resized to {self._config.target.name}, saved as {output_path.name}",
            output_path=output_path,
            stats=stats,
        )

    def resize_bytes(self, pdf_bytes: bytes) -> bytes:
        """Resize an in-memory PDF and return the new bytes."""
        try:
            pdf = pikepdf.open(BytesIO(pdf_bytes))
        except pikepdf.PdfError as exc:
            raise LoadError("Failed to load PDF bytes", cause=exc) from exc

        with pdf:
            self._engine.resize(pdf, self._progress_callback)
            output = BytesIO()
            try:
                pdf.save(output)
            except pikepdf.PdfError as exc:
                raise SaveError("Failed to serialize resized PDF", cause=exc) from exc
        return output.getvalue()

    def _stage_load(self, input_path: Path) -> pikepdf.Pdf:
        try:
            return pikepdf.open(input_path)
        except (pikepdf.PdfError, OSError) as exc:
            raise LoadError("Failed to load PDF file", cause=exc, path=input_path) from exc

    def _stage_save(self, pdf: pikepdf.Pdf, output_path: Path) -> None:
        tmp_path: Path | None = None
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{output_path.name}.", suffix=".tmp", dir=output_path.parent
            )
            os.close(fd)
            tmp_path = Path(tmp_name)
            pdf.save(tmp_path)
            os.replace(tmp_path, output_path)
        except (pikepdf.PdfError, OSError) as exc:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            raise SaveError(
                "Failed to save resized PDF file", cause=exc, path=output_path
            ) from exc
