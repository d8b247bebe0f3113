"""
Unit Tests for SyncService.

These tests verify:
1. Debounced pushes after local mutations, and no echo for remote ones
2. Startup pull replaces local data (last fetch wins) and logs failures
3. Connect: pull / push / create, credentials restored on failure
4. Manual push/pull error reporting and disconnect
"""

import asyncio
import math

import pytest

from fintrack.application.dto import ConnectOutcome, NewTransactionRequest
from fintrack.application.services import MutationEvent, MutationKind, MutationOrigin, SyncService, TransactionStore
from fintrack.application.services.sync_service import parse_remote_document
from fintrack.domain.entities import SyncCredentials
from fintrack.domain.exceptions import (
    MalformedRemoteDocumentException,
    RemoteAuthException,
    RemoteDocumentNotFoundException,
    SyncNotConfiguredException,
)
from tests.fakes import MockRemoteDocumentClient, make_transaction

DEBOUNCE = 0.05
ENABLED = SyncCredentials("ghp_token", "gist-abc")


class HeldRemoteClient(MockRemoteDocumentClient):
    """Remote client whose updates wait until released."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.release = asyncio.Event()

    async def update(self, credential, document_id, transactions):
        await self.release.wait()
        await super().update(credential, document_id, transactions)


def remote_doc(*ids):
    return {
        "lastSync": "2026-10-19T10:00:00Z",
        "transactions": [make_transaction(i).to_dict() for i in ids],
    }


def new_request() -> NewTransactionRequest:
    return NewTransactionRequest(
        type="expense",
        description="Coffee",
        category="🍔 Food & Dining",
        amount=3.5,
        date="2026-10-19",
    )


@pytest.fixture
def store():
    return TransactionStore([make_transaction(2), make_transaction(1)])


@pytest.fixture
def client():
    return MockRemoteDocumentClient(documents={"gist-abc": remote_doc(10, 11, 12, 13, 14)})


def make_service(client, store, credentials=ENABLED) -> SyncService:
    service = SyncService(client, store, credentials=credentials, debounce_seconds=DEBOUNCE)
    store.add_hook(service.on_mutation)
    return service


# =============================================================================
# Debounced Push Tests
# =============================================================================

class TestDebouncedPush:
    """Tests for pushes scheduled by mutations."""

    @pytest.mark.asyncio
    async def test_mutation_burst_produces_one_push(self, client, store):
        service = make_service(client, store)

        for _ in range(4):
            store.add(new_request())
        assert service.push_pending

        await asyncio.sleep(DEBOUNCE * 4)

        assert len(client.update_calls) == 1
        assert len(client.update_calls[0]) == 6

    @pytest.mark.asyncio
    async def test_push_sends_latest_state(self, client, store):
        make_service(client, store)

        store.add(new_request())
        store.remove(1)
        await asyncio.sleep(DEBOUNCE * 4)

        pushed_ids = {t.id for t in client.update_calls[-1]}
        assert 1 not in pushed_ids
        assert len(pushed_ids) == 2

    @pytest.mark.asyncio
    async def test_no_push_when_disabled(self, client, store):
        service = make_service(client, store, credentials=SyncCredentials("ghp_token", None))

        store.add(new_request())
        await asyncio.sleep(DEBOUNCE * 3)

        assert not service.push_pending
        assert client.update_calls == []

    @pytest.mark.asyncio
    async def test_remote_origin_does_not_echo(self, client, store):
        service = make_service(client, store)

        service.on_mutation(MutationEvent(MutationKind.REPLACE_ALL, MutationOrigin.REMOTE))
        await asyncio.sleep(DEBOUNCE * 3)

        assert client.update_calls == []

    @pytest.mark.asyncio
    async def test_background_push_failure_is_swallowed(self, store):
        client = MockRemoteDocumentClient(fail_mode="error")
        make_service(client, store)

        store.add(new_request())
        await asyncio.sleep(DEBOUNCE * 3)

        # The local mutation stands; the failure is only logged
        assert len(client.update_calls) == 1
        assert len(store) == 3

    @pytest.mark.asyncio
    async def test_status_reports_push_in_flight(self, store):
        client = HeldRemoteClient(documents={"gist-abc": remote_doc(1)})
        service = make_service(client, store)

        store.add(new_request())
        await asyncio.sleep(DEBOUNCE * 3)
        assert service.status().push_in_flight == 1
        assert not service.status().push_pending

        client.release.set()
        await service.shutdown()
        assert service.status().push_in_flight == 0
        assert len(client.update_calls) == 1


# =============================================================================
# Startup Sync Tests
# =============================================================================

class TestStartupSync:
    """Tests for the one-time pull at startup."""

    @pytest.mark.asyncio
    async def test_remote_replaces_local(self, client, store):
        """Local-only records are lost: last fetch wins."""
        service = make_service(client, store)

        assert await service.startup_sync() is True

        assert [t.id for t in store.list()] == [10, 11, 12, 13, 14]
        await asyncio.sleep(DEBOUNCE * 3)
        assert client.update_calls == []

    @pytest.mark.asyncio
    async def test_disabled_does_not_fetch(self, client, store):
        service = make_service(client, store, credentials=SyncCredentials())

        assert await service.startup_sync() is False
        assert client.fetch_calls == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("fail_mode", ["auth", "not_found", "error"])
    async def test_failures_keep_local_data(self, store, fail_mode):
        client = MockRemoteDocumentClient(fail_mode=fail_mode)
        service = make_service(client, store)

        assert await service.startup_sync() is False
        assert [t.id for t in store.list()] == [2, 1]

    @pytest.mark.asyncio
    async def test_malformed_document_keeps_local_data(self, store):
        client = MockRemoteDocumentClient(documents={"gist-abc": {"transactions": "nope"}})
        service = make_service(client, store)

        assert await service.startup_sync() is False
        assert len(store) == 2

    @pytest.mark.asyncio
    async def test_missing_file_keeps_local_data(self, store):
        client = MockRemoteDocumentClient(documents={"gist-abc": None})
        service = make_service(client, store)

        assert await service.startup_sync() is False
        assert len(store) == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "overrides",
        [{"id": math.inf}, {"amount": math.inf}, {"amount": math.nan}, {"date": "2026-10-5"}],
    )
    async def test_invalid_record_keeps_local_data(self, store, overrides):
        bad = {**make_transaction(7).to_dict(), **overrides}
        client = MockRemoteDocumentClient(documents={"gist-abc": {"transactions": [bad]}})
        service = make_service(client, store)

        assert await service.startup_sync() is False
        assert [t.id for t in store.list()] == [2, 1]


# =============================================================================
# Connect Tests
# =============================================================================

class TestConnect:
    """Tests for connecting remote sync."""

    @pytest.mark.asyncio
    async def test_connect_with_document_id_pulls(self, client, store):
        service = make_service(client, store, credentials=SyncCredentials())

        outcome = await service.connect("ghp_token", "gist-abc")

        assert outcome == ConnectOutcome.PULLED
        assert service.credentials == ENABLED
        assert len(store) == 5
        assert client.update_calls == []

    @pytest.mark.asyncio
    async def test_connect_with_known_id_pushes(self, client, store):
        service = make_service(client, store, credentials=SyncCredentials(None, "gist-abc"))

        outcome = await service.connect("ghp_new")

        assert outcome == ConnectOutcome.PUSHED
        assert service.credentials == SyncCredentials("ghp_new", "gist-abc")
        assert [t.id for t in client.update_calls[0]] == [2, 1]

    @pytest.mark.asyncio
    async def test_connect_first_time_creates(self, client, store):
        service = make_service(client, store, credentials=SyncCredentials())

        outcome = await service.connect("ghp_token")

        assert outcome == ConnectOutcome.CREATED
        assert service.credentials.document_id == "gist-1"
        assert [t.id for t in client.create_calls[0]] == [2, 1]
        assert service.is_enabled

    @pytest.mark.asyncio
    async def test_connect_failure_restores_previous_credentials(self, store):
        client = MockRemoteDocumentClient(fail_mode="auth")
        previous = SyncCredentials(None, "gist-old")
        service = make_service(client, store, credentials=previous)

        with pytest.raises(RemoteAuthException):
            await service.connect("bad_token", "gist-abc")

        assert service.credentials == previous
        assert len(store) == 2

    @pytest.mark.asyncio
    async def test_connect_requires_credential(self, client, store):
        service = make_service(client, store, credentials=SyncCredentials())

        with pytest.raises(SyncNotConfiguredException):
            await service.connect("   ")


# =============================================================================
# Manual Action Tests
# =============================================================================

class TestManualActions:
    """Tests for push_now, pull and disconnect."""

    @pytest.mark.asyncio
    async def test_push_now_supersedes_pending(self, client, store):
        service = make_service(client, store)
        store.add(new_request())
        assert service.push_pending

        count = await service.push_now()

        assert count == 3
        assert not service.push_pending
        await asyncio.sleep(DEBOUNCE * 3)
        assert len(client.update_calls) == 1
        assert service.status().last_synced_at is not None

    @pytest.mark.asyncio
    async def test_push_now_requires_configuration(self, client, store):
        service = make_service(client, store, credentials=SyncCredentials())

        with pytest.raises(SyncNotConfiguredException):
            await service.push_now()

    @pytest.mark.asyncio
    async def test_pull_errors_reach_caller(self, store):
        client = MockRemoteDocumentClient()
        service = make_service(client, store)

        with pytest.raises(RemoteDocumentNotFoundException):
            await service.pull()

    @pytest.mark.asyncio
    async def test_disconnect_cancels_pending_and_keeps_data(self, client, store):
        service = make_service(client, store)
        store.add(new_request())

        service.disconnect()
        await asyncio.sleep(DEBOUNCE * 3)

        assert client.update_calls == []
        assert not service.is_enabled
        assert service.credentials == SyncCredentials()
        assert len(store) == 3

    @pytest.mark.asyncio
    async def test_shutdown_drops_pending_push(self, client, store):
        service = make_service(client, store)
        store.add(new_request())

        await service.shutdown()
        await asyncio.sleep(DEBOUNCE * 3)

        assert client.update_calls == []


# =============================================================================
# Document Parsing Tests
# =============================================================================

class TestParseRemoteDocument:
    """Tests for remote document parsing."""

    def test_parses_records(self):
        records = parse_remote_document(remote_doc(1, 2))
        assert [t.id for t in records] == [1, 2]

    @pytest.mark.parametrize(
        "document",
        [
            None,
            [],
            {},
            {"transactions": {}},
            {"transactions": [{"id": 1}]},
            {"transactions": [{**make_transaction(1).to_dict(), "id": math.inf}]},
            {"transactions": [{**make_transaction(1).to_dict(), "date": "2026-9-20"}]},
        ],
    )
    def test_rejects_bad_shapes(self, document):
        with pytest.raises(MalformedRemoteDocumentException):
            parse_remote_document(document)
