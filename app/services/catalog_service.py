"""
app/services/catalog_service.py

Part and category maintenance over the catalog store.

Every call opens its own session and transaction; nothing is cached between
calls, so reads always reflect the current database.
"""

from __future__ import annotations

import logging
import uuid

from app.logging_utils import log_event
from app.validators.row_validator import normalize_sap_code
from db.models.category import Category
from db.models.history import HistoryEntry
from db.models.part import Part
from db.repositories import (
    CategoryRepository,
    HistoryRepository,
    PartFields,
    PartRepository,
)
from db.session import CatalogStore

logger = logging.getLogger(__name__)


class CatalogService:
    """
    Single-record part and category operations.
    """

    def __init__(self, store: CatalogStore) -> None:
        self._store = store

    # ------------------------------------------------------------------
    # Parts
    # ------------------------------------------------------------------

    def list_parts(self) -> list[Part]:
        with self._store.session() as session:
            return PartRepository(session).list_parts()

    def search_parts(self, keyword: str) -> list[Part]:
        with self._store.session() as session:
            return PartRepository(session).search(keyword)

    def get_part(self, part_id: uuid.UUID) -> Part:
        with self._store.session() as session:
            return PartRepository(session).get_or_raise(part_id)

    def add_part(
        self,
        *,
        partname: str,
        vendor: str,
        price: float,
        price_usd: float | None = None,
        price_krw: float | None = None,
        sap_code: str | None = None,
        category_id: uuid.UUID | None = None,
    ) -> Part:
        """
        Insert one part. Raises ``InvalidPartError`` for an empty name or
        vendor or a non-finite price, ``NotFoundError`` for an unknown category.
        """

        with self._store.session() as session, session.begin():
            category_name = None
            if category_id is not None:
                category_name = CategoryRepository(session).get_or_raise(category_id).name

            parts = PartRepository(session)
            part_id = parts.insert_part(
                PartFields(
                    partname=partname.strip(),
                    vendor=vendor.strip(),
                    price=price,
                    price_usd=price_usd,
                    price_krw=price_krw,
                    sap_code=normalize_sap_code(sap_code),
                    category_id=category_id,
                    category_name_raw=category_name,
                )
            )
            part = parts.get_or_raise(part_id)
            session.refresh(part)

        log_event(logger, logging.INFO, "part_added", part_id=part_id, partname=part.partname)
        return part

    def update_part(
        self,
        part_id: uuid.UUID,
        *,
        partname: str,
        vendor: str,
        price: float,
        price_usd: float | None = None,
        price_krw: float | None = None,
        sap_code: str | None = None,
    ) -> Part:
        """
        Overwrite a part's core fields; its category link is left alone.

        A price change appends one history entry.
        """

        with self._store.session() as session, session.begin():
            parts = PartRepository(session)
            part = parts.get_or_raise(part_id)
            price_before = part.price
            parts.update_part(
                part,
                PartFields(
                    partname=partname.strip(),
                    vendor=vendor.strip(),
                    price=price,
                    price_usd=price_usd,
                    price_krw=price_krw,
                    sap_code=normalize_sap_code(sap_code),
                    category_id=part.category_id,
                    category_name_raw=part.category_name_raw,
                ),
            )
            price_changed = price_before != part.price
            if price_changed:
                HistoryRepository(session).append(part.id, price_before, part.price)

        log_event(
            logger,
            logging.INFO,
            "part_updated",
            part_id=part_id,
            price_before=price_before,
            price_after=part.price,
            history=price_changed,
        )
        return part

    def delete_part(self, part_id: uuid.UUID) -> None:
        """
        Remove a part together with its history and notifications.
        """

        with self._store.session() as session, session.begin():
            parts = PartRepository(session)
            parts.delete(parts.get_or_raise(part_id))
        log_event(logger, logging.INFO, "part_deleted", part_id=part_id)

    def get_history(self, part_id: uuid.UUID) -> list[HistoryEntry]:
        with self._store.session() as session:
            PartRepository(session).get_or_raise(part_id)
            return HistoryRepository(session).for_part(part_id)

    def update_part_category(self, part_id: uuid.UUID, category_id: uuid.UUID | None) -> Part:
        """
        Link a part to a category, or unlink it with ``None``.
        """

        with self._store.session() as session, session.begin():
            part = PartRepository(session).get_or_raise(part_id)
            if category_id is not None:
                category = CategoryRepository(session).get_or_raise(category_id)
                part.category_name_raw = category.name
            PartRepository(session).set_category(part, category_id)
            session.refresh(part)
        return part

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    def list_categories(self) -> list[Category]:
        with self._store.session() as session:
            return CategoryRepository(session).list_categories()

    def add_category(
        self,
        *,
        name: str,
        description: str | None = None,
        color: str | None = None,
    ) -> Category:
        with self._store.session() as session, session.begin():
            category = CategoryRepository(session).add(
                name=name,
                description=description,
                color=color,
            )
        log_event(logger, logging.INFO, "category_added", category_id=category.id, name=category.name)
        return category

    def delete_category(self, category_id: uuid.UUID) -> None:
        """
        Delete a category. Linked parts keep their raw category name.
        """

        with self._store.session() as session, session.begin():
            categories = CategoryRepository(session)
            categories.delete(categories.get_or_raise(category_id))
        log_event(logger, logging.INFO, "category_deleted", category_id=category_id)
