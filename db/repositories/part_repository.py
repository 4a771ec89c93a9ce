"""
Repository for part lookups, writes and catalog listings.
"""

from __future__ import annotations

import uuid

from sqlalchemy import Select, func, or_, select
from sqlalchemy.orm import Session

from db.models.category import Category
from db.models.part import Part
from db.repositories.errors import NotFoundError
from db.repositories.types import PartFields, VendorCount


class PartRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, part_id: uuid.UUID) -> Part | None:
        return self._session.get(Part, part_id)

    def get_or_raise(self, part_id: uuid.UUID) -> Part:
        part = self.get(part_id)
        if part is None:
            raise NotFoundError("Part", part_id)
        return part

    def find_by_name_and_code(self, name: str, code: str | None) -> Part | None:
        """
        Exact match on (partname, sap_code).

        A null code only matches parts whose sap_code is also null.
        """

        stmt = select(Part).where(Part.partname == name)
        if code is None:
            stmt = stmt.where(Part.sap_code.is_(None))
        else:
            stmt = stmt.where(Part.sap_code == code)
        return self._session.scalars(stmt.limit(1)).first()

    def insert_part(self, fields: PartFields, *, part_id: uuid.UUID | None = None) -> uuid.UUID:
        fields.validate()
        part = Part(
            id=part_id or uuid.uuid4(),
            partname=fields.partname,
            vendor=fields.vendor,
            price=float(fields.price),
            price_usd=fields.price_usd,
            price_krw=fields.price_krw,
            sap_code=fields.sap_code,
            category_id=fields.category_id,
            category_name_raw=fields.category_name_raw,
        )
        self._session.add(part)
        self._session.flush()
        return part.id

    def update_part(self, part: Part, fields: PartFields) -> None:
        """
        Overwrite every writable column of ``part``; the id never changes.
        """

        fields.validate()
        part.partname = fields.partname
        part.vendor = fields.vendor
        part.price = float(fields.price)
        part.price_usd = fields.price_usd
        part.price_krw = fields.price_krw
        part.sap_code = fields.sap_code
        part.category_id = fields.category_id
        part.category_name_raw = fields.category_name_raw
        self._session.flush()

    def set_category(self, part: Part, category_id: uuid.UUID | None) -> None:
        part.category_id = category_id
        self._session.flush()

    def delete(self, part: Part) -> None:
        self._session.delete(part)
        self._session.flush()

    def list_parts(self) -> list[Part]:
        stmt = self._listing_query()
        return list(self._session.scalars(stmt).unique().all())

    def search(self, keyword: str) -> list[Part]:
        """
        Substring search across name, vendor, SAP code and category label.
        """

        term = keyword.strip()
        if not term:
            return self.list_parts()

        stmt = self._listing_query().where(
            or_(
                Part.partname.contains(term, autoescape=True),
                Part.vendor.contains(term, autoescape=True),
                Part.sap_code.contains(term, autoescape=True),
                Category.name.contains(term, autoescape=True),
                Part.category_name_raw.contains(term, autoescape=True),
            )
        )
        return list(self._session.scalars(stmt).unique().all())

    def count(self) -> int:
        return int(self._session.scalar(select(func.count(Part.id))) or 0)

    def price_summary(self) -> tuple[float | None, float | None, float | None]:
        row = self._session.execute(
            select(func.min(Part.price), func.max(Part.price), func.avg(Part.price))
        ).one()
        return row[0], row[1], row[2]

    def vendor_counts(self) -> list[VendorCount]:
        count_col = func.count(Part.id).label("count")
        stmt = (
            select(Part.vendor, count_col)
            .group_by(Part.vendor)
            .order_by(count_col.desc(), Part.vendor)
        )
        return [VendorCount(vendor=vendor, count=count) for vendor, count in self._session.execute(stmt)]

    @staticmethod
    def _listing_query() -> Select[tuple[Part]]:
        return (
            select(Part)
            .outerjoin(Category, Part.category_id == Category.id)
            .order_by(Part.created_at.desc())
        )
