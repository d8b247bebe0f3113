"""Sync service - mirrors the transaction list to the remote document."""

from datetime import datetime, timezone
from typing import Any, List, Optional

import structlog

from fintrack.core.debounce import DebouncedTask
from fintrack.domain.entities import SyncCredentials, Transaction
from fintrack.domain.exceptions import (
    MalformedRemoteDocumentException,
    RemoteSyncException,
    SyncNotConfiguredException,
)
from fintrack.domain.interfaces import RemoteDocumentClient
from fintrack.application.dto import ConnectOutcome, SyncStatus
from .transaction_store import MutationEvent, MutationOrigin, TransactionStore

logger = structlog.get_logger(__name__)


def parse_remote_document(document: Any) -> List[Transaction]:
    """
    Extract the transaction list from remote document content.

    Raises:
        MalformedRemoteDocumentException: If the content is not
            ``{"transactions": [...]}`` with well-formed records
    """
    if not isinstance(document, dict) or not isinstance(document.get("transactions"), list):
        raise MalformedRemoteDocumentException("expected an object with a transactions array")

    records = []
    for index, item in enumerate(document["transactions"]):
        try:
            records.append(Transaction.from_dict(item))
        except ValueError as e:
            raise MalformedRemoteDocumentException(f"transaction {index}: {e}") from e
    return records


class SyncService:
    """
    Application service for remote sync.

    Remote state is advisory: background failures (startup pull and
    debounced pushes) are logged and never reach the caller, while
    user-initiated actions raise so the failure can be reported.
    """

    def __init__(
        self,
        client: RemoteDocumentClient,
        store: TransactionStore,
        credentials: Optional[SyncCredentials] = None,
        debounce_seconds: float = 2.0,
    ):
        self._client = client
        self._store = store
        self._credentials = credentials or SyncCredentials()
        self._push_task = DebouncedTask(
            self._background_push,
            delay=debounce_seconds,
            name="remote_push",
        )
        self._last_synced_at: Optional[datetime] = None

    @property
    def credentials(self) -> SyncCredentials:
        return self._credentials

    @property
    def is_enabled(self) -> bool:
        return self._credentials.is_enabled

    @property
    def push_pending(self) -> bool:
        return self._push_task.pending

    def status(self) -> SyncStatus:
        return SyncStatus(
            enabled=self.is_enabled,
            has_credential=bool(self._credentials.credential),
            document_id=self._credentials.document_id,
            push_pending=self._push_task.pending,
            push_in_flight=self._push_task.in_flight,
            last_synced_at=self._last_synced_at,
        )

    def set_credentials(self, credentials: SyncCredentials) -> None:
        """Replace the credentials without contacting the remote."""
        self._credentials = credentials

    # === Scheduling ===

    def on_mutation(self, event: MutationEvent) -> None:
        """Post-mutation hook: schedule a push unless the change came from the remote."""
        if event.origin == MutationOrigin.REMOTE:
            return
        self.schedule_push()

    def schedule_push(self) -> bool:
        """Debounce a push of the current list. Returns False when sync is off."""
        if not self.is_enabled:
            return False
        self._push_task.schedule()
        return True

    async def _background_push(self) -> None:
        if not self.is_enabled:
            return
        try:
            await self._push()
        except RemoteSyncException as e:
            logger.warning(
                "remote_sync_failed",
                operation="push",
                error_code=e.code,
                error=e.message,
            )

    # === User-initiated actions ===

    async def push_now(self) -> int:
        """
        Write the current list to the remote document immediately.

        Any pending debounced push is dropped since this one supersedes it.

        Returns:
            Number of transactions written

        Raises:
            SyncNotConfiguredException: If sync is not enabled
            RemoteSyncException: If the remote write fails
        """
        self._require_enabled()
        self._push_task.cancel()
        return await self._push()

    async def pull(self) -> int:
        """
        Replace the local list with the remote document's transactions.

        The replacement is marked as remote-originated so it is not pushed
        back.

        Returns:
            Number of transactions now in the store

        Raises:
            SyncNotConfiguredException: If sync is not enabled
            RemoteSyncException: If the fetch fails or the content is malformed
        """
        self._require_enabled()
        creds = self._credentials

        document = await self._client.fetch(creds.credential, creds.document_id)
        if document is None:
            raise MalformedRemoteDocumentException("document has no data file")

        records = parse_remote_document(document)
        count = self._store.replace_all(records, origin=MutationOrigin.REMOTE)
        self._last_synced_at = datetime.now(timezone.utc)

        logger.info("remote_pull_applied", document_id=creds.document_id, count=count)
        return count

    async def startup_sync(self) -> bool:
        """
        Pull once at startup when sync is enabled.

        The remote content replaces local content unconditionally, so
        local edits that were never pushed are lost. Failures are logged.

        Returns:
            True if the local list was replaced
        """
        if not self.is_enabled:
            logger.info("remote_sync_disabled")
            return False

        try:
            await self.pull()
        except RemoteSyncException as e:
            logger.warning(
                "remote_sync_failed",
                operation="startup_pull",
                error_code=e.code,
                error=e.message,
            )
            return False
        return True

    async def connect(
        self,
        credential: str,
        document_id: Optional[str] = None,
    ) -> ConnectOutcome:
        """
        Enable sync with a credential and optional existing document.

        - With a document id: pull it, overwriting the local list
        - Without one but with a previously known id: push to it
        - Otherwise: create a new document seeded from the local list

        The previous credentials are restored if the remote call fails.
        Persisting the new credentials is left to the caller.

        Raises:
            SyncNotConfiguredException: If the credential is empty
            RemoteSyncException: If the remote call fails
        """
        credential = (credential or "").strip()
        document_id = (document_id or "").strip() or None
        if not credential:
            raise SyncNotConfiguredException("An access credential is required to connect")

        previous = self._credentials
        log = logger.bind(document_id=document_id or previous.document_id)

        try:
            if document_id:
                self._credentials = SyncCredentials(credential, document_id)
                await self.pull()
                outcome = ConnectOutcome.PULLED
            elif previous.document_id:
                self._credentials = SyncCredentials(credential, previous.document_id)
                await self._push()
                outcome = ConnectOutcome.PUSHED
            else:
                new_id = await self._client.create(credential, self._store.list())
                self._credentials = SyncCredentials(credential, new_id)
                self._last_synced_at = datetime.now(timezone.utc)
                outcome = ConnectOutcome.CREATED
        except RemoteSyncException as e:
            self._credentials = previous
            log.warning("remote_connect_failed", error_code=e.code, error=e.message)
            raise

        log.info(
            "remote_sync_connected",
            outcome=outcome.value,
            document_id=self._credentials.document_id,
        )
        return outcome

    def disconnect(self) -> None:
        """Forget the credentials and drop any pending push. Local data stays."""
        self._push_task.cancel()
        self._credentials = SyncCredentials()
        logger.info("remote_sync_disconnected")

    async def shutdown(self) -> None:
        """Drop the pending push and wait for in-flight ones."""
        if self._push_task.cancel():
            logger.warning("pending_remote_push_dropped")
        await self._push_task.wait_idle()

    # === Helpers ===

    async def _push(self) -> int:
        creds = self._credentials
        transactions = self._store.list()
        await self._client.update(creds.credential, creds.document_id, transactions)
        self._last_synced_at = datetime.now(timezone.utc)
        return len(transactions)

    def _require_enabled(self) -> None:
        if not self.is_enabled:
            raise SyncNotConfiguredException()
