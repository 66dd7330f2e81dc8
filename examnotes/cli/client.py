"""
HTTP Client for the terminal client.

Async client for the generation proxy. Every request carries
X-Frontend-ID: cli so server logs can tell CLI traffic apart.
"""

import mimetypes
from pathlib import Path
from typing import Any

import httpx

from examnotes.backend.core.config import get_app_config, get_server_base_url
from examnotes.backend.core.exceptions import GenerationError, ValidationError
from examnotes.backend.core.logging import get_logger, log_with_source
from examnotes.backend.schemas.generation import GeneratedNotes

logger = get_logger(__name__)

DEFAULT_IMAGE_TYPE = "image/jpeg"


class APIClient:
    """
    HTTP client for the generation proxy.

    Usage:
        client = APIClient()
        notes = await client.generate_notes_from_text("Photosynthesis ...")
        await client.close()
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        api_prefix: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the API client.

        Args:
            base_url: Server base URL. If None, read from application.yaml.
            timeout: Request timeout in seconds. If None, read from application.yaml.
            api_prefix: Versioned API prefix. If None, read from application.yaml.
            transport: Optional httpx transport (tests pass an ASGITransport).
        """
        if base_url is None or timeout is None or api_prefix is None:
            config_base_url, config_timeout = get_server_base_url()
            base_url = base_url or config_base_url
            timeout = timeout if timeout is not None else config_timeout
            if api_prefix is None:
                api_prefix = get_app_config().application.api_prefix

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.api_prefix = api_prefix.rstrip("/")
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={"X-Frontend-ID": "cli"},
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """
        Make an HTTP request to the server.

        Raises:
            httpx.HTTPError: On transport failure
        """
        client = await self._get_client()

        log_with_source(logger, "cli", "debug", "API request", method=method, path=path)

        try:
            response = await client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            log_with_source(
                logger, "cli", "error", "API request failed",
                method=method, path=path, error=str(e),
            )
            raise

        log_with_source(
            logger, "cli", "debug", "API response",
            method=method, path=path, status_code=response.status_code,
        )
        return response

    async def get(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("POST", path, **kwargs)

    async def generate_notes(self, image_paths: list[Path]) -> GeneratedNotes:
        """
        Upload images and return the generated notes.

        Raises:
            ValidationError: An image file could not be read
            GenerationError: The server rejected the request or generation failed
            httpx.HTTPError: The server could not be reached
        """
        files = []
        for path in image_paths:
            try:
                data = path.read_bytes()
            except OSError as e:
                raise ValidationError(f"Cannot read image {path}: {e}") from e
            media_type = mimetypes.guess_type(path.name)[0] or DEFAULT_IMAGE_TYPE
            files.append(("images", (path.name, data, media_type)))

        response = await self.post(f"{self.api_prefix}/generate-notes", files=files)
        return self._parse_generation(response)

    async def generate_notes_from_text(self, text: str) -> GeneratedNotes:
        """
        Send study text and return the generated notes.

        Raises:
            GenerationError: The server rejected the request or generation failed
            httpx.HTTPError: The server could not be reached
        """
        response = await self.post(
            f"{self.api_prefix}/generate-notes-from-text",
            json={"text": text},
        )
        return self._parse_generation(response)

    @staticmethod
    def _parse_generation(response: httpx.Response) -> GeneratedNotes:
        if response.status_code == 200:
            return GeneratedNotes.model_validate(response.json())

        message = f"Server responded with status {response.status_code}"
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and isinstance(body.get("error"), dict):
            message = body["error"].get("message") or message
        raise GenerationError(message)


# Module-level client instance
_client: APIClient | None = None


def get_api_client() -> APIClient:
    """Get or create the API client singleton."""
    global _client
    if _client is None:
        _client = APIClient()
    return _client


async def close_api_client() -> None:
    """Close the API client."""
    global _client
    if _client:
        await _client.close()
        _client = None
