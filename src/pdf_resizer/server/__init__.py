# SPDX-License-Identifier: Apache-2.0
"""HTTP front end for resize-and-print requests."""

from .app import ServerConfig, create_app
from .schemas import PrintRequest, ResponseMessage

__all__ = [
    "PrintRequest",
    "ResponseMessage",
    "ServerConfig",
    "create_app",
]
