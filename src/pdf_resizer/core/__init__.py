# SPDX-License-Identifier: Apache-2.0
"""Core page resizing modules."""

from .content_stream import ContentStreamTransformer
from .engine import ResizeConfig, ResizeEngine, ResizeStats
from .errors import LoadError, OversizeError, ResizeError, SaveError, StructuralError
from .finalizer import FinalizeReport, finalize_document, reachable_objects
from .geometry import rewrite_page_geometry
from .models import A3, A4, A5, A6, LETTER, PAPER_SIZES, PaperSize, Rect, Transform
from .scale_policy import compute_scale

__all__ = [
    "A3",
    "A4",
    "A5",
    "A6",
    "ContentStreamTransformer",
    "FinalizeReport",
    "LETTER",
    "LoadError",
    "OversizeError",
    "PAPER_SIZES",
    "PaperSize",
    "Rect",
    "ResizeConfig",
    "ResizeEngine",
    "ResizeError",
    "ResizeStats",
    "SaveError",
    "StructuralError",
    "Transform",
    "compute_scale",
    "finalize_document",
    "reachable_objects",
    "rewrite_page_geometry",
]
