"""Data transfer objects for remote sync operations."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class ConnectOutcome(str, Enum):
    """What a successful connect did with the remote document."""
    CREATED = "created"
    PUSHED = "pushed"
    PULLED = "pulled"


@dataclass(frozen=True)
class SyncStatus:
    """Current remote sync configuration and activity."""
    enabled: bool
    has_credential: bool
    document_id: Optional[str]
    push_pending: bool
    push_in_flight: int = 0
    last_synced_at: Optional[datetime] = None


@dataclass(frozen=True)
class SyncResult:
    """Response data for a user-initiated sync action."""
    message: str
    status: SyncStatus
    outcome: Optional[ConnectOutcome] = None
    transaction_count: Optional[int] = None
