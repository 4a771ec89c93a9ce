"""
Repository for append-only part price history.
"""

from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from db.models.history import HistoryAction, HistoryEntry
from db.models.part import Part
from db.repositories.types import PriceChange


class HistoryRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def append(
        self,
        part_id: uuid.UUID,
        before: float | None,
        after: float | None,
        *,
        action: str = HistoryAction.UPDATE,
    ) -> HistoryEntry:
        entry = HistoryEntry(
            part_id=part_id,
            action=action,
            price_before=before,
            price_after=after,
        )
        self._session.add(entry)
        self._session.flush()
        return entry

    def for_part(self, part_id: uuid.UUID) -> list[HistoryEntry]:
        stmt = (
            select(HistoryEntry)
            .where(HistoryEntry.part_id == part_id)
            .order_by(HistoryEntry.changed_at.desc())
        )
        return list(self._session.scalars(stmt).all())

    def recent_price_changes(self, *, limit: int = 10) -> list[PriceChange]:
        stmt = (
            select(Part.partname, HistoryEntry.price_before, HistoryEntry.price_after, HistoryEntry.changed_at)
            .join(Part, HistoryEntry.part_id == Part.id)
            .where(HistoryEntry.action == HistoryAction.UPDATE)
            .order_by(HistoryEntry.changed_at.desc())
            .limit(max(1, limit))
        )
        return [
            PriceChange(
                partname=partname,
                price_before=price_before,
                price_after=price_after,
                changed_at=changed_at,
            )
            for partname, price_before, price_after, changed_at in self._session.execute(stmt)
        ]
