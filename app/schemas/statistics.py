"""
app/schemas/statistics.py

Response schemas for the dashboard statistics endpoint.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel


class PriceStatsResponse(BaseModel):
    min: float | None
    max: float | None
    avg: float | None

    model_config = {"from_attributes": True}


class VendorCountResponse(BaseModel):
    vendor: str
    count: int

    model_config = {"from_attributes": True}


class CategoryCountResponse(BaseModel):
    id: uuid.UUID
    name: str
    color: str
    count: int

    model_config = {"from_attributes": True}


class PriceChangeResponse(BaseModel):
    partname: str
    price_before: float | None
    price_after: float | None
    changed_at: datetime

    model_config = {"from_attributes": True}


class StatisticsResponse(BaseModel):
    total_parts: int
    price_stats: PriceStatsResponse
    vendor_stats: list[VendorCountResponse]
    category_stats: list[CategoryCountResponse]
    recent_price_changes: list[PriceChangeResponse]

    model_config = {"from_attributes": True}
