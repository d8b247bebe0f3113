"""Remote sync Pydantic schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from fintrack.application.dto import ConnectOutcome, SyncResult, SyncStatus


class ConnectRequestSchema(BaseModel):
    """Schema for POST /v1/sync/connect request body."""

    credential: str = Field(
        ...,
        min_length=1,
        description="Access token with gist scope",
    )
    document_id: Optional[str] = Field(
        None,
        description="Existing gist to pull from; omit to push or create",
    )


class SyncStatusSchema(BaseModel):
    """Schema for the sync status. The credential itself is never returned."""

    enabled: bool
    has_credential: bool
    document_id: Optional[str] = None
    push_pending: bool
    push_in_flight: int = 0
    last_synced_at: Optional[datetime] = None

    @classmethod
    def from_status(cls, status: SyncStatus) -> "SyncStatusSchema":
        return cls(
            enabled=status.enabled,
            has_credential=status.has_credential,
            document_id=status.document_id,
            push_pending=status.push_pending,
            push_in_flight=status.push_in_flight,
            last_synced_at=status.last_synced_at,
        )


class SyncResultSchema(BaseModel):
    """Schema for the outcome of a user-initiated sync action."""

    message: str
    status: SyncStatusSchema
    outcome: Optional[ConnectOutcome] = None
    transaction_count: Optional[int] = None

    @classmethod
    def from_result(cls, result: SyncResult) -> "SyncResultSchema":
        return cls(
            message=result.message,
            status=SyncStatusSchema.from_status(result.status),
            outcome=result.outcome,
            transaction_count=result.transaction_count,
        )
