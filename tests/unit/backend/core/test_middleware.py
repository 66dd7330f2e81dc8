"""
Unit Tests for Request Context Middleware.

Request ID propagation, frontend identification, timing headers and
structlog context binding.
"""

from unittest.mock import MagicMock, patch

import pytest
from starlette.requests import Request
from starlette.responses import Response

from examnotes.backend.core.middleware import KNOWN_FRONTENDS, RequestContextMiddleware


class TestRequestContextMiddleware:
    """Tests for RequestContextMiddleware."""

    @pytest.fixture
    def middleware(self):
        return RequestContextMiddleware(MagicMock())

    @pytest.fixture
    def mock_request(self):
        request = MagicMock(spec=Request)
        request.headers = {}
        request.method = "POST"
        request.url = MagicMock()
        request.url.path = "/api/v1/generate-notes"
        request.client = MagicMock()
        request.client.host = "127.0.0.1"
        request.state = MagicMock()
        return request

    @pytest.mark.asyncio
    @pytest.mark.parametrize("frontend", sorted(KNOWN_FRONTENDS))
    async def test_known_frontend(self, middleware, mock_request, frontend):
        mock_request.headers = {"X-Frontend-ID": frontend}

        async def call_next(request):
            assert request.state.frontend == frontend
            return Response("OK")

        with patch("examnotes.backend.core.middleware.structlog.contextvars"):
            await middleware.dispatch(mock_request, call_next)

    @pytest.mark.asyncio
    async def test_unknown_frontend(self, middleware, mock_request):
        mock_request.headers = {"X-Frontend-ID": "toaster"}

        async def call_next(request):
            assert request.state.frontend == "unknown"
            return Response("OK")

        with patch("examnotes.backend.core.middleware.structlog.contextvars"):
            await middleware.dispatch(mock_request, call_next)

    @pytest.mark.asyncio
    async def test_propagates_request_id(self, middleware, mock_request):
        mock_request.headers = {"X-Request-ID": "req-42"}

        async def call_next(request):
            return Response("OK")

        with patch("examnotes.backend.core.middleware.structlog.contextvars"):
            response = await middleware.dispatch(mock_request, call_next)

        assert response.headers["X-Request-ID"] == "req-42"
        assert response.headers["X-Response-Time"].endswith("ms")

    @pytest.mark.asyncio
    async def test_generates_request_id(self, middleware, mock_request):
        async def call_next(request):
            return Response("OK")

        with patch("examnotes.backend.core.middleware.structlog.contextvars"):
            response = await middleware.dispatch(mock_request, call_next)

        assert len(response.headers["X-Request-ID"]) == 36

    @pytest.mark.asyncio
    async def test_binds_log_context(self, middleware, mock_request):
        mock_request.headers = {"X-Request-ID": "req-1", "X-Frontend-ID": "cli"}

        async def call_next(request):
            return Response("OK")

        with patch("examnotes.backend.core.middleware.structlog.contextvars") as contextvars:
            await middleware.dispatch(mock_request, call_next)

        contextvars.bind_contextvars.assert_called_once_with(
            request_id="req-1",
            frontend="cli",
            method="POST",
            path="/api/v1/generate-notes",
            source="api",
        )
        assert contextvars.clear_contextvars.call_count == 2

    @pytest.mark.asyncio
    async def test_exception_propagates(self, middleware, mock_request):
        async def call_next(request):
            raise RuntimeError("boom")

        with patch("examnotes.backend.core.middleware.structlog.contextvars"):
            with pytest.raises(RuntimeError):
                await middleware.dispatch(mock_request, call_next)
