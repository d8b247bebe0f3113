"""SQL-backed implementation of the local key-value store."""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from fintrack.domain.exceptions import PersistenceException
from fintrack.domain.interfaces import KeyValueStore
from fintrack.infrastructure.database import DatabaseSessionManager
from fintrack.infrastructure.database.models import StorageEntryModel


class SqlKeyValueStore(KeyValueStore):
    """Key-value store kept in the ``storage_entries`` table."""

    def __init__(self, session_manager: DatabaseSessionManager):
        self._db = session_manager

    def get(self, key: str) -> Optional[str]:
        try:
            with self._db.session() as session:
                model = session.get(StorageEntryModel, key)
                return model.value if model is not None else None
        except SQLAlchemyError as e:
            raise PersistenceException(key, str(e)) from e

    def set(self, key: str, value: str) -> None:
        try:
            with self._db.session() as session:
                session.merge(
                    StorageEntryModel(
                        key=key,
                        value=value,
                        updated_at=datetime.now(timezone.utc),
                    )
                )
        except SQLAlchemyError as e:
            raise PersistenceException(key, str(e)) from e
