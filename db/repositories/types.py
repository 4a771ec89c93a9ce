"""
Typed DTOs used by catalog repositories.
"""

from __future__ import annotations

import math
import uuid
from dataclasses import dataclass
from datetime import datetime

from db.repositories.errors import InvalidPartError


@dataclass(frozen=True)
class PartFields:
    """
    Writable part columns, already normalized.
    """

    partname: str
    vendor: str
    price: float
    price_usd: float | None = None
    price_krw: float | None = None
    sap_code: str | None = None
    category_id: uuid.UUID | None = None
    category_name_raw: str | None = None

    def validate(self) -> None:
        problems: list[str] = []
        if not self.partname.strip():
            problems.append("partname is required")
        if not self.vendor.strip():
            problems.append("vendor is required")
        if isinstance(self.price, bool) or not isinstance(self.price, (int, float)) or not math.isfinite(self.price):
            problems.append("price must be a finite number")
        if problems:
            raise InvalidPartError("Invalid part fields.", details={"errors": problems})


@dataclass(frozen=True)
class VendorCount:
    vendor: str
    count: int


@dataclass(frozen=True)
class CategoryCount:
    id: uuid.UUID
    name: str
    color: str
    count: int


@dataclass(frozen=True)
class PriceChange:
    partname: str
    price_before: float | None
    price_after: float | None
    changed_at: datetime
