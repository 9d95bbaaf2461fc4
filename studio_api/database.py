"""Database configuration and session management."""

import logging
from collections.abc import Generator
from typing import Any

from fastapi import Request
from sqlalchemy import create_engine, delete, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from studio_api.config import Settings

logger = logging.getLogger(__name__)

Base: Any = declarative_base()


def engine_options(settings: Settings) -> dict[str, Any]:
    """Build create_engine keyword arguments for the configured backend."""
    if settings.database_url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}

    return {
        "pool_pre_ping": True,
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_timeout": settings.db_pool_timeout_seconds,
        "connect_args": {
            "connect_timeout": settings.db_connect_timeout_seconds,
            "options": f"-c statement_timeout={settings.db_statement_timeout_ms}",
        },
    }


def enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    """SQLite ignores ON DELETE clauses unless asked per connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Owns the engine and session factory for one running application."""

    def __init__(self, settings: Settings, engine: Engine | None = None):
        self.settings = settings
        self.engine = engine or create_engine(settings.database_url, **engine_options(settings))
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine, "connect", enable_sqlite_foreign_keys)
        self.session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def session(self) -> Session:
        """Open a new ORM session."""
        return self.session_factory()

    def check_connection(self) -> None:
        """Run a trivial query so startup fails fast when the database is unreachable."""
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("Database connection established")

    def run_migrations(self) -> None:
        """Upgrade the schema to the latest Alembic revision."""
        from alembic import command
        from alembic.config import Config

        config = Config("alembic.ini")
        config.set_main_option("sqlalchemy.url", self.settings.database_url.replace("%", "%%"))
        # Keep the application's logging configuration
        config.attributes["configure_logger"] = False
        command.upgrade(config, "head")
        logger.info("Database migrations applied")

    def create_all(self) -> None:
        """Create all tables directly from the model metadata."""
        # Import all models here so they are registered with Base.metadata
        from studio_api import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def prune_expired_sessions(self) -> int:
        """Delete expired session rows and return how many were removed."""
        from studio_api.models.session_record import SessionRecord
        from studio_api.services.sessions import utcnow

        with self.session() as db:
            result = db.execute(delete(SessionRecord).where(SessionRecord.expire <= utcnow()))
            db.commit()
        if result.rowcount:
            logger.info(f"Pruned {result.rowcount} expired sessions")
        return result.rowcount

    def dispose(self) -> None:
        """Release pooled connections."""
        self.engine.dispose()


def get_db(request: Request) -> Generator[Session, None, None]:
    """Dependency that provides a database session."""
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
