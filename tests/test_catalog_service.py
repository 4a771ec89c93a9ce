"""
tests/test_catalog_service.py

Pytest tests for single-record part and category operations.
"""

from __future__ import annotations

import math
import uuid

import pytest

from app.services.catalog_service import CatalogService
from app.services.notification_service import NotificationService
from db.repositories.errors import ConflictError, InvalidPartError, NotFoundError
from db.session import CatalogStore


@pytest.fixture()
def catalog(store: CatalogStore) -> CatalogService:
    return CatalogService(store)


# ---------------------------------------------------------------------------
# Parts
# ---------------------------------------------------------------------------


class TestParts:
    def test_add_and_list(self, catalog: CatalogService) -> None:
        first = catalog.add_part(partname="Bolt", vendor="Acme", price=1.5, sap_code="S-1")
        second = catalog.add_part(partname="Nut", vendor="Beta", price=300)

        listed = catalog.list_parts()

        assert [part.id for part in listed] == [second.id, first.id]
        assert listed[1].sap_code == "S-1"
        assert listed[0].sap_code is None

    @pytest.mark.parametrize(
        "partname, vendor, price",
        [("", "Acme", 1.0), ("Bolt", "  ", 1.0), ("Bolt", "Acme", math.inf), ("Bolt", "Acme", math.nan)],
    )
    def test_add_rejects_invalid_fields(
        self, catalog: CatalogService, partname: str, vendor: str, price: float
    ) -> None:
        with pytest.raises(InvalidPartError):
            catalog.add_part(partname=partname, vendor=vendor, price=price)
        assert catalog.list_parts() == []

    def test_add_with_unknown_category_is_not_found(self, catalog: CatalogService) -> None:
        with pytest.raises(NotFoundError):
            catalog.add_part(partname="Bolt", vendor="Acme", price=1.0, category_id=uuid.uuid4())

    def test_update_records_history_on_price_change(self, catalog: CatalogService) -> None:
        part = catalog.add_part(partname="Bolt", vendor="Acme", price=10)

        catalog.update_part(part.id, partname="Bolt", vendor="Acme", price=10)
        assert catalog.get_history(part.id) == []

        updated = catalog.update_part(part.id, partname="Bolt M8", vendor="Acme", price=12)
        history = catalog.get_history(part.id)

        assert updated.partname == "Bolt M8"
        assert len(history) == 1
        assert (history[0].price_before, history[0].price_after) == (10.0, 12.0)

    def test_update_missing_part(self, catalog: CatalogService) -> None:
        with pytest.raises(NotFoundError):
            catalog.update_part(uuid.uuid4(), partname="x", vendor="y", price=1)

    def test_delete_removes_history_and_notifications(self, store: CatalogStore, catalog: CatalogService) -> None:
        part = catalog.add_part(partname="Bolt", vendor="Acme", price=10)
        catalog.update_part(part.id, partname="Bolt", vendor="Acme", price=11)
        NotificationService(store).add_notification(part_id=part.id, type="price_change", message="up")

        catalog.delete_part(part.id)

        assert catalog.list_parts() == []
        assert NotificationService(store).list_unread() == []
        with pytest.raises(NotFoundError):
            catalog.get_history(part.id)

    def test_search_matches_every_text_column(self, catalog: CatalogService) -> None:
        category = catalog.add_category(name="Fasteners")
        bolt = catalog.add_part(partname="Hex bolt", vendor="Acme", price=1, sap_code="SAP-100")
        catalog.add_part(partname="Washer", vendor="Beta", price=1, category_id=category.id)

        assert [part.partname for part in catalog.search_parts("hex")] == ["Hex bolt"]
        assert [part.partname for part in catalog.search_parts("beta")] == ["Washer"]
        assert [part.id for part in catalog.search_parts("SAP-1")] == [bolt.id]
        assert [part.partname for part in catalog.search_parts("Fasten")] == ["Washer"]
        assert len(catalog.search_parts("  ")) == 2

    def test_search_escapes_like_wildcards(self, catalog: CatalogService) -> None:
        catalog.add_part(partname="Bolt", vendor="Acme", price=1)
        catalog.add_part(partname="50% off", vendor="Acme", price=1)

        assert [part.partname for part in catalog.search_parts("%")] == ["50% off"]
        assert catalog.search_parts("_") == []


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------


class TestCategories:
    def test_duplicate_name_conflicts(self, catalog: CatalogService) -> None:
        catalog.add_category(name="Fasteners")
        with pytest.raises(ConflictError):
            catalog.add_category(name="Fasteners")
        assert len(catalog.list_categories()) == 1

    def test_default_color(self, catalog: CatalogService) -> None:
        assert catalog.add_category(name="Misc").color == "#3498db"

    def test_link_and_unlink(self, catalog: CatalogService) -> None:
        category = catalog.add_category(name="Fasteners")
        part = catalog.add_part(partname="Bolt", vendor="Acme", price=1)

        linked = catalog.update_part_category(part.id, category.id)
        assert linked.category_id == category.id
        assert linked.category_name == "Fasteners"

        unlinked = catalog.update_part_category(part.id, None)
        assert unlinked.category_id is None
        assert unlinked.category_name == "Fasteners"

    def test_delete_category_keeps_raw_name(self, catalog: CatalogService) -> None:
        category = catalog.add_category(name="Fasteners")
        catalog.add_part(partname="Bolt", vendor="Acme", price=1, category_id=category.id)

        catalog.delete_category(category.id)

        part = catalog.list_parts()[0]
        assert part.category_id is None
        assert part.category_name == "Fasteners"
        assert catalog.list_categories() == []

    def test_delete_missing_category(self, catalog: CatalogService) -> None:
        with pytest.raises(NotFoundError):
            catalog.delete_category(uuid.uuid4())
