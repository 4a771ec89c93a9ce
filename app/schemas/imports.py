"""
app/schemas/imports.py

Response schemas for bulk and spreadsheet import endpoints.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class BatchRowErrorResponse(BaseModel):
    """
    One skipped input row. ``index`` is the zero-based row position.
    """

    index: int = Field(..., ge=0)
    message: str

    model_config = {"from_attributes": True}


class BatchResultResponse(BaseModel):
    """
    Tally of one bulk import call.
    """

    inserted: int = Field(..., ge=0)
    updated: int = Field(..., ge=0)
    skipped: int = Field(..., ge=0)
    errors: list[BatchRowErrorResponse] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class ImportRowResponse(BaseModel):
    index: int = Field(..., ge=0)
    raw: dict[str, Any]
    mapped: dict[str, Any]
    price_usd: float | None = None
    price_krw: float | None = None
    category_name: str | None = None
    valid: bool
    errors: list[str] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class ImportPreviewResponse(BaseModel):
    """
    Suggested column mapping plus per-row validation for an uploaded sheet.
    """

    headers: list[str]
    mapping: dict[str, str]
    match_strategies: dict[str, str]
    missing_fields: list[str] = Field(default_factory=list)
    rows: list[ImportRowResponse] = Field(default_factory=list)
    total_rows: int = Field(..., ge=0)
    valid_rows: int = Field(..., ge=0)
    invalid_rows: int = Field(..., ge=0)

    model_config = {"from_attributes": True}
