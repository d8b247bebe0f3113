"""Integration tests for the Prometheus metrics endpoint."""

import pytest
from httpx import AsyncClient


class TestMetrics:
    """Tests for GET /metrics."""

    @pytest.mark.asyncio
    async def test_metrics_exposed(self, client: AsyncClient, expense_request: dict):
        await client.post("/v1/transactions", json=expense_request)

        response = await client.get("/metrics")

        assert response.status_code == 200
        assert "fintrack_transaction_mutations_total" in response.text
        assert 'operation="add"' in response.text

    @pytest.mark.asyncio
    async def test_health(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.status_code == 200
