"""
db/models/part.py

Catalog part: name, vendor, price in one canonical and two typed currencies,
optional SAP code and category linkage.
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Float, ForeignKey, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base, CreatedAtMixin

if TYPE_CHECKING:
    from db.models.category import Category
    from db.models.history import HistoryEntry
    from db.models.notification import Notification


class Part(Base, CreatedAtMixin):
    """
    One catalog item.

    ``price`` is currency-agnostic; ``price_usd`` / ``price_krw`` hold the
    classified amount when the import could tell which currency it was.
    ``category_name_raw`` keeps the label supplied by an import when no
    category entity matched it.
    """

    __tablename__ = "parts"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    partname: Mapped[str] = mapped_column(String(255), nullable=False)
    vendor: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    price_usd: Mapped[float | None] = mapped_column(Float, nullable=True)
    price_krw: Mapped[float | None] = mapped_column(Float, nullable=True)
    sap_code: Mapped[str | None] = mapped_column(String(120), nullable=True)
    category_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
    )
    category_name_raw: Mapped[str | None] = mapped_column(String(120), nullable=True)

    # ── Relationships ──────────────────────────────────────────────────────────

    category: Mapped["Category | None"] = relationship("Category", lazy="joined")
    history: Mapped[list["HistoryEntry"]] = relationship(
        "HistoryEntry",
        back_populates="part",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    notifications: Mapped[list["Notification"]] = relationship(
        "Notification",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        Index("ix_parts_partname_sap_code", "partname", "sap_code"),
        Index("ix_parts_vendor", "vendor"),
        Index("ix_parts_created_at", "created_at"),
    )

    @property
    def category_name(self) -> str | None:
        if self.category is not None:
            return self.category.name
        return self.category_name_raw

    def __repr__(self) -> str:
        return f"<Part id={self.id} partname={self.partname!r} sap_code={self.sap_code!r}>"
