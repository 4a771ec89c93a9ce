"""
app/services/auth_service.py

User registration, login and admin checks.

Passwords are stored as salted PBKDF2-SHA256 hashes in the form
``pbkdf2_sha256$<iterations>$<salt hex>$<digest hex>``.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
import secrets
from dataclasses import dataclass

from app.config import AdminSettings
from app.logging_utils import log_event
from db.models.user import User, UserRole
from db.repositories import UserRepository
from db.session import CatalogStore

logger = logging.getLogger(__name__)

PBKDF2_ALGORITHM = "pbkdf2_sha256"
PBKDF2_ITERATIONS = 390_000
MIN_PASSWORD_LENGTH = 8


class AuthenticationError(Exception):
    """
    Raised when a username/password pair does not match a stored user.
    """


class InvalidCredentialsInputError(ValueError):
    """
    Raised when a registration payload breaks username/password rules.
    """


@dataclass(frozen=True)
class AuthenticatedUser:
    id: str
    username: str
    email: str | None
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


def hash_password(password: str, *, iterations: int = PBKDF2_ITERATIONS) -> str:
    salt = secrets.token_bytes(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return f"{PBKDF2_ALGORITHM}${iterations}${salt.hex()}${digest.hex()}"


def verify_password(password: str, encoded: str) -> bool:
    try:
        algorithm, iterations, salt_hex, digest_hex = encoded.split("$")
        rounds = int(iterations)
        salt = bytes.fromhex(salt_hex)
        expected = bytes.fromhex(digest_hex)
    except ValueError:
        return False
    if algorithm != PBKDF2_ALGORITHM:
        return False
    actual = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, rounds)
    return hmac.compare_digest(actual, expected)


def _to_authenticated(user: User) -> AuthenticatedUser:
    return AuthenticatedUser(id=str(user.id), username=user.username, email=user.email, role=user.role)


class AuthService:
    def __init__(self, store: CatalogStore) -> None:
        self._store = store

    def register_user(
        self,
        *,
        username: str,
        password: str,
        email: str | None = None,
        role: str = UserRole.VIEWER,
    ) -> AuthenticatedUser:
        """
        Create a user. Raises ``ConflictError`` when the username is taken.
        """

        if not username.strip():
            raise InvalidCredentialsInputError("Username is required.")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise InvalidCredentialsInputError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters."
            )

        with self._store.session() as session, session.begin():
            user = UserRepository(session).create(
                username=username,
                password_hash=hash_password(password),
                email=email,
                role=role,
            )
            registered = _to_authenticated(user)

        log_event(logger, logging.INFO, "user_registered", username=registered.username, role=registered.role)
        return registered

    def login(self, *, username: str, password: str) -> AuthenticatedUser:
        with self._store.session() as session:
            user = UserRepository(session).get_by_username(username)
            if user is None or not verify_password(password, user.password_hash):
                log_event(logger, logging.WARNING, "login_failed", username=username.strip())
                raise AuthenticationError("Invalid username or password.")
            return _to_authenticated(user)

    def verify_admin(self, *, username: str, password: str) -> AuthenticatedUser:
        """
        Authenticate and require the admin role.
        """

        user = self.login(username=username, password=password)
        if not user.is_admin:
            raise AuthenticationError("Admin role required.")
        return user

    def bootstrap_admin(self, settings: AdminSettings) -> bool:
        """
        Create the configured admin account when it does not exist yet.

        Returns True when a user was created.
        """

        if not settings.bootstrap_enabled:
            return False

        with self._store.session() as session:
            exists = UserRepository(session).get_by_username(settings.username or "") is not None
        if exists:
            return False

        self.register_user(
            username=settings.username or "",
            password=settings.password or "",
            role=UserRole.ADMIN,
        )
        log_event(logger, logging.INFO, "admin_bootstrapped", username=settings.username)
        return True
