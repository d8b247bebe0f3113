"""
Fixtures for integration tests.

Provides:
- A controller over an in-memory key-value store and a mock remote client
- Test client for the FastAPI app with the controller injected
- Helper request bodies
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from fintrack.application.controller import FinanceController
from fintrack.core.config import Settings
from fintrack.core.dependencies import get_controller
from fintrack.main import app
from tests.fakes import TODAY, InMemoryKeyValueStore, MockRemoteDocumentClient

TEST_SETTINGS = Settings(sync_debounce_seconds=0.1, default_monthly_budget=1000.0)


def build_test_controller(
    kv: InMemoryKeyValueStore,
    remote: MockRemoteDocumentClient,
) -> FinanceController:
    """Controller loaded from the given fakes, pinned to a fixed date."""
    return FinanceController.from_storage(
        kv_store=kv,
        remote_client=remote,
        config=TEST_SETTINGS,
        today=lambda: TODAY,
    )


@pytest.fixture
def kv_store() -> InMemoryKeyValueStore:
    """Empty local storage."""
    return InMemoryKeyValueStore()


@pytest.fixture
def remote_client() -> MockRemoteDocumentClient:
    """Remote client with no documents."""
    return MockRemoteDocumentClient()


@pytest.fixture
def controller(kv_store, remote_client) -> FinanceController:
    return build_test_controller(kv_store, remote_client)


@pytest_asyncio.fixture
async def client(controller: FinanceController) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client with the controller injected.

    The app lifespan is not run, so no real database or network is used.
    """
    app.dependency_overrides[get_controller] = lambda: controller

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    await controller.shutdown()
    app.dependency_overrides.clear()


# =============================================================================
# Helper Fixtures
# =============================================================================

@pytest.fixture
def income_request() -> dict:
    """Request body for a salary this month."""
    return {
        "type": "income",
        "description": "October salary",
        "category": "💼 Salary",
        "amount": 1000,
        "date": "2026-10-01",
    }


@pytest.fixture
def expense_request() -> dict:
    """Request body for a food expense this month."""
    return {
        "type": "expense",
        "description": "Dinner out",
        "category": "🍔 Food & Dining",
        "amount": 300,
        "date": "2026-10-05",
    }
