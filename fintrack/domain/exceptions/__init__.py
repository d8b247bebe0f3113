"""Domain Exceptions - Business rule violations and domain errors."""

from .base import DomainException
from .storage import PersistenceException
from .sync import (
    MalformedRemoteDocumentException,
    RemoteAuthException,
    RemoteDocumentNotFoundException,
    RemoteSyncException,
    RemoteSyncTimeoutException,
    SyncNotConfiguredException,
)
from .validation import (
    InvalidBudgetException,
    InvalidImportFileException,
    InvalidTransactionException,
    NothingToExportException,
)

__all__ = [
    "DomainException",
    "PersistenceException",
    "MalformedRemoteDocumentException",
    "RemoteAuthException",
    "RemoteDocumentNotFoundException",
    "RemoteSyncException",
    "RemoteSyncTimeoutException",
    "SyncNotConfiguredException",
    "InvalidBudgetException",
    "InvalidImportFileException",
    "InvalidTransactionException",
    "NothingToExportException",
]
