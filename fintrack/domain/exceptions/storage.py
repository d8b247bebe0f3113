"""Local storage exceptions."""

from .base import DomainException


class PersistenceException(DomainException):
    """Raised when a value cannot be written to or read from local storage."""

    def __init__(self, key: str, message: str):
        super().__init__(
            message=f"Local storage failure for '{key}': {message}",
            code="PERSISTENCE_ERROR",
        )
        self.key = key
