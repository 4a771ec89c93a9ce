"""
Repository for category lookups and maintenance.
"""

from __future__ import annotations

import uuid

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from db.models.category import DEFAULT_CATEGORY_COLOR, Category
from db.models.part import Part
from db.repositories.errors import ConflictError, NotFoundError
from db.repositories.types import CategoryCount


class CategoryRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def find_id_by_name(self, name: str) -> uuid.UUID | None:
        """Exact-name lookup; categories are never created implicitly."""
        stmt = select(Category.id).where(Category.name == name).limit(1)
        return self._session.scalars(stmt).first()

    def get_or_raise(self, category_id: uuid.UUID) -> Category:
        category = self._session.get(Category, category_id)
        if category is None:
            raise NotFoundError("Category", category_id)
        return category

    def list_categories(self) -> list[Category]:
        stmt = select(Category).order_by(Category.created_at.desc())
        return list(self._session.scalars(stmt).all())

    def add(
        self,
        *,
        name: str,
        description: str | None = None,
        color: str | None = None,
    ) -> Category:
        normalized = name.strip()
        if self.find_id_by_name(normalized) is not None:
            raise ConflictError("Category name already exists.", details={"name": normalized})

        category = Category(
            name=normalized,
            description=description or "",
            color=color or DEFAULT_CATEGORY_COLOR,
        )
        try:
            with self._session.begin_nested():
                self._session.add(category)
                self._session.flush()
        except IntegrityError as exc:
            raise ConflictError("Category name already exists.", details={"name": normalized}) from exc
        return category

    def delete(self, category: Category) -> None:
        self._session.delete(category)
        self._session.flush()

    def part_counts(self) -> list[CategoryCount]:
        """Per-category part counts, including categories with no parts."""
        count_col = func.count(Part.id).label("count")
        stmt = (
            select(Category.id, Category.name, Category.color, count_col)
            .outerjoin(Part, Part.category_id == Category.id)
            .group_by(Category.id, Category.name, Category.color)
            .order_by(count_col.desc(), Category.name)
        )
        return [
            CategoryCount(id=category_id, name=name, color=color, count=count)
            for category_id, name, color, count in self._session.execute(stmt)
        ]
