"""
app/schemas/business_upload.py

Response schemas for the bulk business upload endpoint.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class UploadRowErrorResponse(BaseModel):
    """
    One failed row, numbered against the file including its header line.
    """

    row: int = Field(..., ge=1)
    message: str


class BusinessUploadResponse(BaseModel):
    """
    API response model for one bulk upload.
    """

    success: int = Field(..., ge=0)
    failed: int = Field(..., ge=0)
    errors: list[UploadRowErrorResponse] = Field(default_factory=list)
    message: str
