"""Application services (use cases)."""

from .transaction_store import (
    IdGenerator,
    MutationEvent,
    MutationHook,
    MutationKind,
    MutationOrigin,
    TransactionStore,
)
from .persistence_service import PersistenceService
from .sync_service import SyncService
from .transfer_service import TransferService

__all__ = [
    "IdGenerator",
    "MutationEvent",
    "MutationHook",
    "MutationKind",
    "MutationOrigin",
    "TransactionStore",
    "PersistenceService",
    "SyncService",
    "TransferService",
]
