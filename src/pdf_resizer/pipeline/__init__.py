# SPDX-License-Identifier: Apache-2.0
"""Resize pipeline package."""

from pdf_resizer.core.engine import ResizeConfig, ResizeStats
from pdf_resizer.core.errors import (
    LoadError,
    OversizeError,
    ResizeError,
    SaveError,
    StructuralError,
)

from .filenames import derive_output_filename
from .progress import ProgressCallback
from .resize_pipeline import ResizePipeline, ResizeResult, ResizeStatus

__all__ = [
    "LoadError",
    "OversizeError",
    "ProgressCallback",
    "ResizeConfig",
    "ResizeError",
    "ResizePipeline",
    "ResizeResult",
    "ResizeStats",
    "ResizeStatus",
    "SaveError",
    "StructuralError",
    "derive_output_filename",
]
