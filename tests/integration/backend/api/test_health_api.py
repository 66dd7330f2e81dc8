"""
Integration Tests for Health Endpoints.
"""

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.integration


class TestLiveness:
    @pytest.mark.asyncio
    async def test_health(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestReadiness:
    @pytest.mark.asyncio
    async def test_ready_with_api_key(self, client: AsyncClient, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")

        response = await client.get("/health/ready")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["checks"]["llm"] == {"status": "healthy", "model": "gpt-4o"}

    @pytest.mark.asyncio
    async def test_not_ready_without_api_key(self, client: AsyncClient, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "")

        response = await client.get("/health/ready")

        assert response.status_code == 503
        detail = response.json()["detail"]
        assert detail["status"] == "unhealthy"
        assert detail["checks"]["llm"]["status"] == "unhealthy"
