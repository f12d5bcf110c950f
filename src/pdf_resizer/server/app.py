# SPDX-License-Identifier: Apache-2.0
"""
PDF Resizer - Print API server

Accepts print requests for files in a local directory, resizes them to the
target paper size and submits them to a printer.

Usage:
    resize-pdf-server [--host HOST] [--port PORT] [--files-dir DIR]
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
from collections import defaultdict
from dataclasses import dataclass, field
from pathlib import Path

from aiohttp import web
from dotenv import load_dotenv
from pydantic import ValidationError

from pdf_resizer.core.engine import ResizeConfig
from pdf_resizer.pipeline.filenames import derive_output_filename
from pdf_resizer.pipeline.resize_pipeline import ResizePipeline
from pdf_resizer.printing.base import PrintError, PrinterDispatcher, PrinterNotFoundError
from pdf_resizer.printing.cups import CupsDispatcher
from pdf_resizer.server.openapi import OPENAPI_PATH, SWAGGER_UI_HTML, build_openapi
from pdf_resizer.server.schemas import PrintRequest, ResponseMessage

logger = logging.getLogger(__name__)

DEFAULT_FILES_DIR = "./printable_files"


@dataclass
class ServerConfig:
    """Print API server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080
    files_dir: Path = Path(DEFAULT_FILES_DIR)
    resize: ResizeConfig = field(default_factory=ResizeConfig)


class ServerState:
    """Per-application objects shared by the handlers."""

    def __init__(self, config: ServerConfig, dispatcher: PrinterDispatcher) -> None:
        self.config = config
        self.dispatcher = dispatcher
        self.pipeline = ResizePipeline(config.resize)
        # One resize at a time per source file
        self._locks: defaultdict[Path, asyncio.Lock] = defaultdict(asyncio.Lock)

    def lock_for(self, path: Path) -> asyncio.Lock:
        return self._locks[path.resolve()]


STATE_KEY = web.AppKey("state", ServerState)


def _reply(status: str, message: str, http_status: int = 200) -> web.Response:
    body = ResponseMessage(status=status, message=message)
    return web.json_response(body.model_dump(), status=http_status)


def _error(message: str, http_status: int) -> web.Response:
    return _reply("error", message, http_status)


async def index(request: web.Request) -> web.Response:
    return _reply("success", "Service is running!")


async def print_file(request: web.Request) -> web.Response:
    state = request.app[STATE_KEY]
    target_name = state.config.resize.target.name

    try:
        payload = await request.json()
    except ValueError:
        return _error("Request body must be JSON", 400)
    try:
        req = PrintRequest.model_validate(payload)
    except ValidationError as exc:
        return _error(f"Invalid request: {exc.errors()[0]['msg']}", 400)

    files_dir = state.config.files_dir
    source_path = files_dir / req.filename
    output_name = derive_output_filename(req.filename, state.pipeline.config.suffix)
    output_path = files_dir / output_name

    if not source_path.is_file():
        return _error(f"File not found: {req.filename}", 400)

    async with state.lock_for(source_path):
        result = await asyncio.to_thread(state.pipeline.resize_file, source_path, output_path)
    if not result.ok:
        logger.error("Error resizing PDF %s: %s", req.filename, result.message)
        return _error(f"Failed to resize PDF to {target_name}: {result.message}", 500)
    logger.info("PDF successfully resized and saved as %s", output_name)

    try:
        data = await asyncio.to_thread(output_path.read_bytes)
    except OSError as exc:
        logger.error("Error reading %s file %s: %s", target_name, output_name, exc)
        return _error(f"Failed to read {target_name} file {output_name}. Error: {exc}", 500)

    dispatcher = state.dispatcher
    job_name = f"{target_name} Print Job - {req.filename}"
    try:
        if not await asyncio.to_thread(dispatcher.has_printer, req.printer_name):
            return _error(f"Printer not found: {req.printer_name}", 400)
        await asyncio.to_thread(dispatcher.submit, req.printer_name, data, job_name)
    except PrinterNotFoundError as exc:
        return _error(str(exc), 400)
    except PrintError as exc:
        logger.error("Error sending print job: %s", exc)
        return _error(f"Failed to send print job: {exc}", 500)

    logger.info("Print job sent successfully to %s", req.printer_name)
    return _reply(
        "success",
        f"Resized to {target_name}, saved as {output_name}, "
        f"and sent to printer {req.printer_name}",
    )


async def openapi_document(request: web.Request) -> web.Response:
    state = request.app[STATE_KEY]
    return web.json_response(build_openapi(state.config.resize.target.name))


async def swagger_ui(request: web.Request) -> web.Response:
    return web.Response(text=SWAGGER_UI_HTML, content_type="text/html")


async def _ensure_files_dir(app: web.Application) -> None:
    files_dir = app[STATE_KEY].config.files_dir
    if not files_dir.exists():
        files_dir.mkdir(parents=True)
        logger.info("Created directory: %s", files_dir)


def create_app(
    config: ServerConfig | None = None,
    dispatcher: PrinterDispatcher | None = None,
) -> web.Application:
    """Build the print API application.

    Args:
        config: Server configuration (default: ServerConfig()).
        dispatcher: Printer backend (default: CupsDispatcher()).
    """
    config = config or ServerConfig()
    app = web.Application()
    app[STATE_KEY] = ServerState(config, dispatcher or CupsDispatcher())
    app.on_startup.append(_ensure_files_dir)
    app.router.add_get("/", index)
    app.router.add_post("/api/print", print_file)
    app.router.add_get(OPENAPI_PATH, openapi_document)
    app.router.add_get("/swagger-ui/", swagger_ui)
    return app


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Defaults come from PDF_RESIZER_HOST, PDF_RESIZER_PORT and
    PDF_RESIZER_FILES_DIR when set (a .env file is loaded by main()).
    """
    parser = argparse.ArgumentParser(
        prog="resize-pdf-server",
        description="Print API - resizes PDFs to a small paper size and prints them",
    )
    parser.add_argument(
        "--host",
        default=os.environ.get("PDF_RESIZER_HOST", "127.0.0.1"),
        help="Bind address (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.environ.get("PDF_RESIZER_PORT", "8080")),
        help="Bind port (default: 8080)",
    )
    parser.add_argument(
        "--files-dir",
        type=Path,
        default=Path(os.environ.get("PDF_RESIZER_FILES_DIR", DEFAULT_FILES_DIR)),
        help=f"Directory holding printable files (default: {DEFAULT_FILES_DIR})",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )
    return parser.parse_args(argv)


def main() -> None:
    """Main entry point."""
    load_dotenv()
    args = parse_args()

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=log_level, format="%(levelname)s: %(message)s")

    config = ServerConfig(host=args.host, port=args.port, files_dir=args.files_dir)
    logger.info("Starting server at http://%s:%d", config.host, config.port)
    logger.info("Swagger UI available at: http://%s:%d/swagger-ui/", config.host, config.port)
    web.run_app(create_app(config), host=config.host, port=config.port, print=None)


if __name__ == "__main__":
    main()
