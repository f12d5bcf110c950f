# SPDX-License-Identifier: Apache-2.0
"""Printer dispatch backends."""

from .base import PrintError, PrinterDispatcher, PrinterNotFoundError, PrintJobError
from .cups import CupsDispatcher

__all__ = [
    "CupsDispatcher",
    "PrintError",
    "PrintJobError",
    "PrinterDispatcher",
    "PrinterNotFoundError",
]
