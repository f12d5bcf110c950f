# SPDX-License-Identifier: Apache-2.0
"""CUPS printer backend using the ``lpstat`` and ``lp`` command line tools."""

from __future__ import annotations

import logging
import re
import subprocess

from pdf_resizer.printing.base import PrinterNotFoundError, PrintJobError

logger = logging.getLogger(__name__)

# "request id is Office_LaserJet-42 (1 file(s))"
_JOB_ID_RE = re.compile(r"request id is (\S+)")


class CupsDispatcher:
    """Submit print jobs through the local CUPS client tools.

    Attributes:
        timeout_s: Timeout for each command invocation.
    """

    def __init__(self, timeout_s: float = 30.0) -> None:
        self.timeout_s = timeout_s

    def list_printers(self) -> list[str]:
        proc = self._run(["lpstat", "-e"])
        return [line.strip() for line in proc.stdout.decode().splitlines() if line.strip()]

    def has_printer(self, name: str) -> bool:
        return name in self.list_printers()

    def submit(self, printer_name: str, data: bytes, job_name: str) -> str:
        if not self.has_printer(printer_name):
            raise PrinterNotFoundError(printer_name)

        proc = self._run(["lp", "-d", printer_name, "-t", job_name, "-"], stdin=data)
        output = proc.stdout.decode().strip()
        match = _JOB_ID_RE.search(output)
        job_id = match.group(1) if match else output
        logger.info("Print job %s sent to %s", job_id, printer_name)
        return job_id

    def _run(self, cmd: list[str], stdin: bytes | None = None) -> subprocess.CompletedProcess[bytes]:
        try:
            proc = subprocess.run(
                cmd,
                input=stdin,
                check=False,
                capture_output=True,
                timeout=self.timeout_s,
            )
        except FileNotFoundError as exc:
            raise PrintJobError(f"{cmd[0]} binary not found on PATH") from exc
        except subprocess.TimeoutExpired as exc:
            raise PrintJobError(f"{cmd[0]} timed out after {self.timeout_s}s") from exc

        if proc.returncode != 0:
            stderr = proc.stderr.decode(errors="replace").strip()
            raise PrintJobError(f"{cmd[0]} exited with {proc.returncode}: {stderr}")
        return proc
