"""Database connection and session management."""

from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from fintrack.core.config import settings

from .models import Base


class DatabaseSessionManager:
    """
    Manages the local storage engine and sessions.

    Storage is accessed synchronously from the event loop thread; every
    write is committed before the caller continues.
    """

    def __init__(self):
        self._engine = None
        self._sessionmaker = None

    def init(self, database_url: str | None = None):
        """
        Initialize the engine, session factory and storage table.

        Args:
            database_url: Optional override for the storage URL
        """
        url = database_url or settings.storage_url

        engine_kwargs = {"echo": settings.debug}
        if url.startswith("sqlite"):
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            # In-memory databases live as long as their single connection
            if url in ("sqlite://", "sqlite:///:memory:"):
                engine_kwargs["poolclass"] = StaticPool

        self._engine = create_engine(url, **engine_kwargs)
        Base.metadata.create_all(self._engine)

        self._sessionmaker = sessionmaker(
            bind=self._engine,
            class_=Session,
            expire_on_commit=False,
            autoflush=False,
        )

    def close(self):
        """Close the database engine."""
        if self._engine:
            self._engine.dispose()

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """
        Provide a transactional scope around operations.

        Yields:
            A database session
        """
        if self._sessionmaker is None:
            raise RuntimeError("Database not initialized. Call init() first.")

        session = self._sessionmaker()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()


db_manager = DatabaseSessionManager()
