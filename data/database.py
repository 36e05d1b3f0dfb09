"""
Database engine and session handling for the sample store.

One DatabaseManager per process owns the engine; request handlers borrow
sessions from its factory.
"""
import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from config.settings import settings
from .db_models import Base

logger = logging.getLogger(__name__)


def normalize_database_url(database_url: str) -> str:
    """Rewrite the legacy postgres:// scheme that SQLAlchemy no longer accepts."""
    if database_url.startswith('postgres://'):
        return 'postgresql://' + database_url[len('postgres://'):]
    return database_url


def build_engine(database_url: str) -> Engine:
    """
    Create an engine suited to the URL's backend.

    SQLite connections are shared across the server's worker threads, and an
    in-memory SQLite database is pinned to a single connection.
    """
    if not database_url.startswith('sqlite'):
        return create_engine(database_url, pool_pre_ping=True)

    kwargs = {'connect_args': {'check_same_thread': False}}
    if database_url in ('sqlite://', 'sqlite:///:memory:'):
        kwargs['poolclass'] = StaticPool
    return create_engine(database_url, **kwargs)


class DatabaseManager:
    """Owns the engine and session factory for the sample store."""

    def __init__(self, database_url: Optional[str] = None):
        """
        Args:
            database_url: SQLAlchemy URL; defaults to the DATABASE_URL setting
        """
        self.database_url = normalize_database_url(database_url or settings.database_url)
        self.engine = build_engine(self.database_url)
        self.SessionLocal = sessionmaker(bind=self.engine, autoflush=False)

    def create_tables(self):
        """Create missing tables; existing tables are left alone."""
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database tables ready at %s", self.engine.url.render_as_string(hide_password=True))

    def drop_tables(self):
        """Drop every table, deleting all stored samples."""
        Base.metadata.drop_all(bind=self.engine)
        logger.warning("Dropped all tables at %s", self.engine.url.render_as_string(hide_password=True))

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Session that commits on success and rolls back on error."""
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()


_db_manager: Optional[DatabaseManager] = None


def get_db_manager(database_url: Optional[str] = None) -> DatabaseManager:
    """Process-wide DatabaseManager; database_url only applies to the first call."""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager(database_url)
    return _db_manager


def init_database(database_url: Optional[str] = None):
    """Create tables on the process-wide database."""
    get_db_manager(database_url).create_tables()
