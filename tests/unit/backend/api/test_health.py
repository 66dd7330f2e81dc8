"""
Unit Tests for Health Check Endpoints.

Tests the health check functionality including:
- Liveness check (/health)
- Readiness check (/health/ready)
- Language model credential check
"""

import pytest
from fastapi import HTTPException
from unittest.mock import MagicMock, patch


class TestHealthCheck:
    """Tests for the liveness health check endpoint."""

    @pytest.mark.asyncio
    async def test_health_returns_healthy(self):
        """Should return healthy status."""
        from examnotes.backend.api.health import health_check

        result = await health_check()

        assert result == {"status": "healthy"}


class TestCheckLlm:
    """Tests for the language model check."""

    def test_unhealthy_without_api_key(self, mock_app_config):
        from examnotes.backend.api.health import check_llm

        mock_settings = MagicMock()
        mock_settings.openai_api_key = None

        with patch("examnotes.backend.core.config.get_settings", return_value=mock_settings), \
             patch("examnotes.backend.core.config.get_app_config", return_value=mock_app_config):
            result = check_llm()

        assert result["status"] == "unhealthy"
        assert "OPENAI_API_KEY" in result["error"]

    def test_healthy_with_api_key(self, mock_app_config):
        from examnotes.backend.api.health import check_llm

        mock_settings = MagicMock()
        mock_settings.openai_api_key = "sk-test"

        with patch("examnotes.backend.core.config.get_settings", return_value=mock_settings), \
             patch("examnotes.backend.core.config.get_app_config", return_value=mock_app_config):
            result = check_llm()

        assert result == {"status": "healthy", "model": "test-model"}


class TestReadinessCheck:
    """Tests for the readiness check endpoint."""

    @pytest.mark.asyncio
    async def test_ready_when_llm_healthy(self):
        from examnotes.backend.api.health import readiness_check

        with patch(
            "examnotes.backend.api.health.check_llm",
            return_value={"status": "healthy", "model": "gpt-4o"},
        ):
            result = await readiness_check()

        assert result["status"] == "healthy"
        assert result["checks"]["llm"]["model"] == "gpt-4o"
        assert "timestamp" in result

    @pytest.mark.asyncio
    async def test_raises_503_when_llm_unhealthy(self):
        from examnotes.backend.api.health import readiness_check

        with patch(
            "examnotes.backend.api.health.check_llm",
            return_value={"status": "unhealthy", "error": "OPENAI_API_KEY is not configured"},
        ):
            with pytest.raises(HTTPException) as exc_info:
                await readiness_check()

        assert exc_info.value.status_code == 503
        assert exc_info.value.detail["status"] == "unhealthy"
        assert exc_info.value.detail["checks"]["llm"]["status"] == "unhealthy"
