"""Repository interfaces for local persistence."""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStore(ABC):
    """
    Abstract local durable key-value store.

    Each key holds one independently serialized value. Implementations
    may use SQLite, an in-memory dict, etc.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read the raw value stored under a key.

        Args:
            key: The slot name

        Returns:
            The stored string, or None if the key was never written

        Raises:
            PersistenceException: If the store cannot be read
        """
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Overwrite the value stored under a key.

        Raises:
            PersistenceException: If the store cannot be written
        """
        ...
