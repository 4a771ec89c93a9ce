"""
Repository for application users.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from db.models.user import User, UserRole
from db.repositories.errors import ConflictError


class UserRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_username(self, username: str) -> User | None:
        stmt = select(User).where(User.username == username.strip()).limit(1)
        return self._session.scalars(stmt).first()

    def create(
        self,
        *,
        username: str,
        password_hash: str,
        email: str | None = None,
        role: str = UserRole.VIEWER,
    ) -> User:
        normalized = username.strip()
        if self.get_by_username(normalized) is not None:
            raise ConflictError("Username already exists.", details={"username": normalized})

        user = User(username=normalized, password_hash=password_hash, email=email or None, role=role)
        try:
            with self._session.begin_nested():
                self._session.add(user)
                self._session.flush()
        except IntegrityError as exc:
            raise ConflictError("Username already exists.", details={"username": normalized}) from exc
        return user
