# SPDX-License-Identifier: Apache-2.0
"""Base classes and protocols for printer dispatch."""

from typing import Protocol, runtime_checkable


class PrintError(Exception):
    """Base exception for printing module."""

    pass


class PrinterNotFoundError(PrintError):
    """The named destination is not known to the print system."""

    def __init__(self, printer_name: str) -> None:
        super().__init__(f"Printer not found: {printer_name}")
        self.printer_name = printer_name


class PrintJobError(PrintError):
    """Print system unavailable or job submission failed."""

    pass


@runtime_checkable
class PrinterDispatcher(Protocol):
    """Protocol definition for printer backends."""

    def list_printers(self) -> list[str]:
        """Return destination names known to the print system.

        Raises:
            PrintJobError: If the print system cannot be queried.
        """
        ...

    def has_printer(self, name: str) -> bool:
        """Whether ``name`` is a known destination."""
        ...

    def submit(self, printer_name: str, data: bytes, job_name: str) -> str:
        """Send a PDF to a destination.

        Args:
            printer_name: Destination name.
            data: Finished PDF bytes.
            job_name: Title shown in the print queue.

        Returns:
            Job identifier reported by the print system.

        Raises:
            PrinterNotFoundError: If the destination does not exist.
            PrintJobError: On submission failure.
        """
        ...
