"""
app/schemas/parts.py

Request and response schemas for part, category and history endpoints.
"""

from __future__ import annotations

import math
import uuid
from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class PartWriteRequest(BaseModel):
    """
    Body for creating or updating a part.
    """

    partname: str = Field(..., min_length=1)
    vendor: str = Field(..., min_length=1)
    price: float
    price_usd: float | None = None
    price_krw: float | None = None
    sap_code: str | None = None

    @field_validator("price")
    @classmethod
    def _finite_price(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("price must be a finite number")
        return value


class PartCreateRequest(PartWriteRequest):
    category_id: uuid.UUID | None = None


class PartCategoryRequest(BaseModel):
    category_id: uuid.UUID | None = None


class PartResponse(BaseModel):
    id: uuid.UUID
    partname: str
    vendor: str
    price: float
    price_usd: float | None
    price_krw: float | None
    sap_code: str | None
    category_id: uuid.UUID | None
    category_name: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


class HistoryEntryResponse(BaseModel):
    id: uuid.UUID
    part_id: uuid.UUID
    action: str
    price_before: float | None
    price_after: float | None
    changed_at: datetime

    model_config = {"from_attributes": True}


class CategoryCreateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    description: str | None = None
    color: str | None = None


class CategoryResponse(BaseModel):
    id: uuid.UUID
    name: str
    description: str | None
    color: str
    created_at: datetime

    model_config = {"from_attributes": True}
