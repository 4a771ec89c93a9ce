"""
app/services/statistics_service.py

Dashboard aggregates over the catalog.
"""

from __future__ import annotations

from app.domain.catalog import CatalogStatistics, PriceStatistics
from db.repositories import CategoryRepository, HistoryRepository, PartRepository
from db.session import CatalogStore

RECENT_PRICE_CHANGES_LIMIT = 10


class StatisticsService:
    def __init__(self, store: CatalogStore) -> None:
        self._store = store

    def get_statistics(self) -> CatalogStatistics:
        """
        Totals, price range, per-vendor and per-category counts and the most
        recent price changes, all read in one session.
        """

        with self._store.session() as session:
            parts = PartRepository(session)
            min_price, max_price, avg_price = parts.price_summary()
            return CatalogStatistics(
                total_parts=parts.count(),
                price_stats=PriceStatistics(min=min_price, max=max_price, avg=avg_price),
                vendor_stats=parts.vendor_counts(),
                category_stats=CategoryRepository(session).part_counts(),
                recent_price_changes=HistoryRepository(session).recent_price_changes(
                    limit=RECENT_PRICE_CHANGES_LIMIT
                ),
            )
