# SPDX-License-Identifier: Apache-2.0
"""Resize error definitions."""

from __future__ import annotations

from pathlib import Path


class ResizeError(Exception):
    """Base exception for resize runs.

    Attributes:
        stage: Pipeline stage that failed ("load", "scale", "rewrite", "save").
        cause: Underlying exception, if any.
        path: File the failure relates to, if any.
    """

    def __init__(
        self,
        message: str,
        stage: str,
        cause: Exception | None = None,
        path: Path | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.stage = stage
        self.cause = cause
        self.path = path

    def __str__(self) -> str:
        text = f"[{self.stage}] {self.message}"
        if self.path is not None:
            text += f": {self.path}"
        if self.cause is not None:
            text += f" (caused by: {self.cause})"
        return text


class LoadError(ResizeError):
    """Source file could not be parsed into a PDF object graph."""

    def __init__(
        self,
        message: str,
        cause: Exception | None = None,
        path: Path | None = None,
    ) -> None:
        super().__init__(message, stage="load", cause=cause, path=path)


class OversizeError(ResizeError):
    """Target size is larger than the source; upscaling is refused."""

    def __init__(self, message: str, scale: float) -> None:
        super().__init__(message, stage="scale")
        self.scale = scale


class StructuralError(ResizeError):
    """A page, content reference or stream could not be resolved or re-encoded."""

    def __init__(
        self,
        message: str,
        cause: Exception | None = None,
        page_index: int | None = None,
    ) -> None:
        super().__init__(message, stage="rewrite", cause=cause)
        self.page_index = page_index


class SaveError(ResizeError):
    """Finalized document could not be written to its destination."""

    def __init__(
        self,
        message: str,
        cause: Exception | None = None,
        path: Path | None = None,
    ) -> None:
        super().__init__(message, stage="save", cause=cause, path=path)
