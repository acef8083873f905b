"""Database connection and configuration management."""

import logging
from contextlib import contextmanager
from typing import Any, Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from contentomatic.config import get_settings
from contentomatic.models import Base

logger = logging.getLogger(__name__)


@event.listens_for(Engine, "connect")
def _set_sqlite_pragma(dbapi_conn, connection_record):
    # Enable foreign keys for SQLite so ON DELETE actions apply
    if type(dbapi_conn).__module__.startswith("sqlite3"):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


class Database:
    """Database connection manager with connection pooling and transaction handling."""

    def __init__(self, database_url: str | None = None, pool_size: int | None = None, max_overflow: int | None = None):
        """
        Initialize database connection.

        Args:
            database_url: Database connection URL. If None, reads from settings.
                         Supports PostgreSQL and SQLite (file or in-memory).
            pool_size: Number of connections to maintain in the pool. If None, uses settings.
            max_overflow: Maximum number of connections to allow beyond pool_size. If None, uses settings.
        """
        settings = get_settings()

        if database_url is None:
            database_url = settings.get_database_url()

        engine_args: dict[str, Any] = {"echo": settings.sql_echo}
        if database_url.startswith("sqlite"):
            engine_args["connect_args"] = {"check_same_thread": False}

        if database_url in ("sqlite://", "sqlite:///:memory:"):
            # One shared connection, or every session would see an empty database
            engine_args["poolclass"] = StaticPool
        else:
            engine_args.update(
                pool_size=pool_size if pool_size is not None else settings.db_pool_size,
                max_overflow=max_overflow if max_overflow is not None else settings.db_max_overflow,
                pool_timeout=settings.db_pool_timeout,
                pool_pre_ping=True,  # Verify connections before using
            )

        self.engine = create_engine(database_url, **engine_args)
        self.SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, bind=self.engine
        )
        logger.debug(f"Database engine created for {self.engine.url.render_as_string(hide_password=True)}")

    def create_tables(self) -> None:
        """Create all database tables."""
        Base.metadata.create_all(bind=self.engine)

    def drop_tables(self) -> None:
        """Drop all database tables."""
        Base.metadata.drop_all(bind=self.engine)

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """
        Context manager for database sessions with automatic transaction handling.

        Usage:
            with db.session() as session:
                # Use session here
                session.commit()
        """
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()


# Global database instance
_db: Database | None = None


def get_db(database_url: str | None = None) -> Database:
    """
    Get or create the global database instance.

    Args:
        database_url: Database connection URL. Only used on first call.

    Returns:
        Database instance
    """
    global _db
    if _db is None:
        _db = Database(database_url)
    return _db


def reset_db() -> None:
    """Reset the global database instance (useful for testing)."""
    global _db
    _db = None
