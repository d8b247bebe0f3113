"""Data Transfer Objects for application layer."""

from .transaction import NewTransactionRequest, MutationResult
from .dashboard import DashboardView
from .sync import ConnectOutcome, SyncResult, SyncStatus
from .transfer import ExportResult, ImportMode, ImportResult

__all__ = [
    "NewTransactionRequest",
    "MutationResult",
    "DashboardView",
    "ConnectOutcome",
    "SyncResult",
    "SyncStatus",
    "ExportResult",
    "ImportMode",
    "ImportResult",
]
