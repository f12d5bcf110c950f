# SPDX-License-Identifier: Apache-2.0
"""Request and response schemas for the print API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PrintRequest(BaseModel):
    """Resize a file from the files directory and send it to a printer."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"filename": "invoice_original.pdf", "printer_name": "Office_LaserJet"}
        }
    )

    filename: str = Field(
        min_length=1,
        description="Name of the source PDF inside the files directory",
    )
    printer_name: str = Field(
        min_length=1,
        description="Destination printer name as known to the print system",
    )

    @field_validator("filename")
    @classmethod
    def _plain_filename(cls, value: str) -> str:
        if "/" in value or "\\" in value or value in {".", ".."}:
            raise ValueError("filename must be a plain file name without directories")
        return value


class ResponseMessage(BaseModel):
    """Status envelope returned by every endpoint."""

    status: str
    message: str
