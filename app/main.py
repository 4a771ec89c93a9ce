from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI

from app.config import (
    get_admin_settings,
    get_database_settings,
    get_logging_settings,
)
from app.logging_utils import configure_logging
from db.session import CatalogStore

logger = logging.getLogger(__name__)


def _validate_env() -> None:
    """
    Validate configuration at startup.

    Raises RuntimeError listing every invalid setting so the operator can fix
    all problems in one restart cycle.
    """

    errors: list[str] = []

    # --- Database URL ---------------------------------------------------
    database_url = get_database_settings().url
    if "://" not in database_url:
        errors.append(
            f"Database URL {database_url!r} is not a SQLAlchemy URL. "
            "Set PARTS_DATABASE_URL, e.g. sqlite:///data/parts.db."
        )

    # --- Bootstrap admin ------------------------------------------------
    admin = get_admin_settings()
    if bool(admin.username) != bool(admin.password):
        errors.append(
            "PARTS_ADMIN_USERNAME and PARTS_ADMIN_PASSWORD must be set together."
        )
    elif admin.password is not None and len(admin.password) < 8:
        errors.append("PARTS_ADMIN_PASSWORD must be at least 8 characters.")

    if errors:
        raise RuntimeError(
            "Startup validation failed, invalid configuration:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )


def _configure_logging() -> None:
    """
    Configure root logging once for the API process.
    """

    settings = get_logging_settings()
    configure_logging(settings.level, settings.log_file)


def _check_db(store: CatalogStore) -> None:
    """Open a session and run SELECT 1. Raises RuntimeError if the DB is unreachable."""
    from sqlalchemy import text

    try:
        with store.session() as db:
            db.execute(text("SELECT 1"))
    except Exception as exc:
        raise RuntimeError("Database unavailable.") from exc


def _check_schema(store: CatalogStore) -> None:
    """
    Every table registered on Base.metadata must exist in the database.

    If any are missing, log a critical error and abort startup so that
    the operator is forced to run migrations before serving traffic.
    """

    missing = store.missing_tables()
    if missing:
        logger.critical(
            "Schema mismatch: %d table(s) defined in ORM metadata are absent from "
            "the database: %s. Run 'alembic upgrade head' and restart.",
            len(missing),
            ", ".join(sorted(missing)),
        )
        raise RuntimeError(
            f"Schema mismatch: {len(missing)} table(s) missing from the database "
            f"({', '.join(sorted(missing))}). Run migrations and restart."
        )


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Open the catalog store, prepare the schema and bootstrap the admin; close the store on exit."""
    from app.services.auth_service import AuthService

    store: CatalogStore = application.state.store
    store.open()
    try:
        _check_db(store)
        logger.info("Database connectivity confirmed")
        if get_database_settings().auto_create_schema:
            store.create_schema()
            logger.info("Database schema created or already present")
        else:
            _check_schema(store)
            logger.info("Database schema validated")

        if AuthService(store).bootstrap_admin(get_admin_settings()):
            logger.info("Bootstrap admin account created")
        yield
    finally:
        store.close()
        logger.info("Catalog store closed")


def create_app(*, store: CatalogStore | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    ``store`` defaults to one built from the database settings; it is opened
    by the lifespan and disposed on shutdown.
    """

    _validate_env()
    _configure_logging()

    application = FastAPI(
        title="Parts Catalog API",
        version="1.0.0",
        lifespan=_lifespan,
    )
    if store is None:
        settings = get_database_settings()
        store = CatalogStore(settings.url, echo=settings.echo)
    application.state.store = store

    from app.api.routers import (
        categories_router,
        export_router,
        imports_router,
        notifications_router,
        parts_router,
        statistics_router,
        users_router,
    )

    application.include_router(parts_router)
    application.include_router(categories_router)
    application.include_router(imports_router)
    application.include_router(export_router)
    application.include_router(statistics_router)
    application.include_router(notifications_router)
    application.include_router(users_router)

    @application.get("/health")
    def healthcheck() -> dict[str, str]:
        _check_db(application.state.store)
        return {"status": "ok", "database": "ok"}

    return application


app = create_app()
