"""
Integration Test Fixtures.

The real FastAPI app over an in-process ASGI transport. The language model
is replaced by a PydanticAI FunctionModel so the whole request path runs
without network access.
"""

from collections.abc import AsyncGenerator, Generator
from dataclasses import dataclass, field

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pydantic_ai import Agent
from pydantic_ai.messages import ModelMessage, ModelResponse, TextPart
from pydantic_ai.models.function import AgentInfo, FunctionModel

import examnotes.backend.core.concurrency as concurrency_module
from examnotes.backend.core.dependencies import get_generation_service
from examnotes.backend.services.generation import NOTE_GENERATION_PROMPT, GenerationService


@dataclass
class FakeModel:
    """Scripted model reply plus a record of what the model was sent."""

    reply: str = "# Photosynthesis\n\n## Key Points\n- Light becomes chemical energy"
    fail: bool = False
    requests: list[list[ModelMessage]] = field(default_factory=list)

    def respond(self, messages: list[ModelMessage], info: AgentInfo) -> ModelResponse:
        self.requests.append(messages)
        if self.fail:
            raise RuntimeError("model unavailable")
        return ModelResponse(parts=[TextPart(self.reply)])


@pytest.fixture(autouse=True)
def _reset_semaphores() -> Generator[None, None, None]:
    concurrency_module._semaphores.clear()
    yield
    concurrency_module._semaphores.clear()


@pytest.fixture
def fake_model() -> FakeModel:
    """
    Controls the model behind the generation endpoints.

    Usage:
        async def test_failure(client, fake_model):
            fake_model.fail = True
    """
    return FakeModel()


@pytest.fixture
def app(fake_model: FakeModel) -> Generator[FastAPI, None, None]:
    """Application with the generation service wired to the fake model."""
    from examnotes.backend.main import create_app

    application = create_app()
    agent = Agent(
        FunctionModel(fake_model.respond),
        output_type=str,
        instructions=NOTE_GENERATION_PROMPT,
    )
    application.dependency_overrides[get_generation_service] = (
        lambda: GenerationService(agent=agent)
    )
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def transport(app: FastAPI) -> ASGITransport:
    return ASGITransport(app=app, raise_app_exceptions=False)


@pytest.fixture
async def client(transport: ASGITransport) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTP client talking to the app in-process.

    Usage:
        async def test_health_endpoint(client: AsyncClient):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    async with AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client
