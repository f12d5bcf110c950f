# SPDX-License-Identifier: Apache-2.0
"""Progress callback protocol for the resize pipeline."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ProgressCallback(Protocol):
    """Called by the engine after each page.

    Args:
        stage: Stage name ("resize").
        current: 1-indexed number of the page just finished.
        total: Page count of the document.
        message: What happened to the page's content: "content scaled",
            "content already scaled" (shared with an earlier page),
            "empty content" or "no content".
    """

    def __call__(
        self,
        stage: str,
        current: int,
        total: int,
        message: str = "",
    ) -> None: ...
