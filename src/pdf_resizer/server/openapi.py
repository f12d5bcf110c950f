# SPDX-License-Identifier: Apache-2.0
"""OpenAPI document and explorer page for the print API."""

from __future__ import annotations

from typing import Any

from pdf_resizer import __version__
from pdf_resizer.server.schemas import PrintRequest, ResponseMessage

OPENAPI_PATH = "/api-docs/openapi.json"

_RESPONSE_REF = {"application/json": {"schema": {"$ref": "#/components/schemas/ResponseMessage"}}}


def build_openapi(target_name: str = "A6") -> dict[str, Any]:
    """Build the OpenAPI 3 document with schemas taken from the pydantic models."""
    return {
        "openapi": "3.0.3",
        "info": {"title": "pdf-resizer print API", "version": __version__},
        "tags": [
            {
                "name": "Printing",
                "description": f"Resize files to {target_name} and send them to a printer",
            }
        ],
        "paths": {
            "/": {
                "get": {
                    "summary": "Service status",
                    "responses": {"200": {"description": "Service status", "content": _RESPONSE_REF}},
                }
            },
            "/api/print": {
                "post": {
                    "tags": ["Printing"],
                    "summary": f"Resize a PDF to {target_name} and print it",
                    "requestBody": {
                        "required": True,
                        "content": {
                            "application/json": {
                                "schema": {"$ref": "#/components/schemas/PrintRequest"}
                            }
                        },
                    },
                    "responses": {
                        "200": {"description": "Resized and sent to the printer", "content": _RESPONSE_REF},
                        "400": {"description": "Invalid request, unknown file or printer", "content": _RESPONSE_REF},
                        "500": {"description": "Resize or print failure", "content": _RESPONSE_REF},
                    },
                }
            },
        },
        "components": {
            "schemas": {
                "PrintRequest": PrintRequest.model_json_schema(),
                "ResponseMessage": ResponseMessage.model_json_schema(),
            }
        },
    }


SWAGGER_UI_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>pdf-resizer API</title>
  <link rel="stylesheet" href="https://unpkg.com/swagger-ui-dist@5/swagger-ui.css">
</head>
<body>
  <div id="swagger-ui"></div>
  <script src="https://unpkg.com/swagger-ui-dist@5/swagger-ui-bundle.js"></script>
  <script>
    window.ui = SwaggerUIBundle({url: "%s", dom_id: "#swagger-ui"});
  </script>
</body>
</html>
""" % OPENAPI_PATH
