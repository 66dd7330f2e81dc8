"""
Configuration Management.

Loads secrets from config/.env and settings from config/settings/*.yaml.

Secrets (.env):
    OPENAI_API_KEY

Settings (YAML):
    application.yaml   - App identity, server, cors, timeouts, upload limits
    logging.yaml       - Logging configuration
    generation.yaml    - LLM model and note reshaping defaults
    storage.yaml       - Local key-value storage for notes and preferences
    concurrency.yaml   - Thread pool and semaphore sizing

The project root is the nearest ancestor of the working directory holding a
.project_root marker. EXAMNOTES_HOME overrides the search.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from examnotes.backend.core.config_schema import (
    ApplicationSchema,
    ConcurrencySchema,
    GenerationSchema,
    LoggingSchema,
    StorageSchema,
)

HOME_ENV_VAR = "EXAMNOTES_HOME"


def find_project_root() -> Path:
    """Find project root from EXAMNOTES_HOME or the .project_root marker file."""
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(override).expanduser().resolve()

    current = Path.cwd()
    while current != current.parent:
        if (current / ".project_root").exists():
            return current
        current = current.parent
    raise RuntimeError(
        f"Project root not found. Create a .project_root file or set {HOME_ENV_VAR}."
    )


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Load a YAML configuration file from config/settings/."""
    config_path = find_project_root() / "config" / "settings" / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path) as f:
        return yaml.safe_load(f) or {}


class Settings(BaseSettings):
    """Secrets loaded from config/.env. Only passwords, tokens, and keys."""

    openai_api_key: str | None = None

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


def _load_validated(schema_cls: type, filename: str) -> Any:
    """Load YAML and validate against schema. Returns typed model instance."""
    raw = load_yaml_config(filename)
    try:
        return schema_cls(**raw)
    except ValidationError as e:
        raise ValueError(
            f"Invalid configuration in {filename}:\n{e}"
        ) from e


class AppConfig:
    """
    Application configuration loaded from YAML files.

    Each file is validated against its schema when the config is built;
    properties return typed Pydantic models.
    """

    def __init__(self) -> None:
        self._application = _load_validated(ApplicationSchema, "application.yaml")
        self._logging = _load_validated(LoggingSchema, "logging.yaml")
        self._generation = _load_validated(GenerationSchema, "generation.yaml")
        self._storage = _load_validated(StorageSchema, "storage.yaml")
        self._concurrency = _load_validated(ConcurrencySchema, "concurrency.yaml")

    @property
    def application(self) -> ApplicationSchema:
        """Application settings."""
        return self._application

    @property
    def logging(self) -> LoggingSchema:
        """Logging settings."""
        return self._logging

    @property
    def generation(self) -> GenerationSchema:
        """Note generation settings."""
        return self._generation

    @property
    def storage(self) -> StorageSchema:
        """Local storage settings."""
        return self._storage

    @property
    def concurrency(self) -> ConcurrencySchema:
        """Concurrency settings (thread pool, semaphores)."""
        return self._concurrency


@lru_cache
def get_settings() -> Settings:
    """Get cached secrets instance. Resolves .env path from project root."""
    env_path = find_project_root() / "config" / ".env"
    return Settings(_env_file=str(env_path))


@lru_cache
def get_app_config() -> AppConfig:
    """Get cached application configuration."""
    return AppConfig()


def resolve_project_path(configured_path: str) -> Path:
    """Resolve a configured path; relative paths are anchored at the project root."""
    path = Path(configured_path).expanduser()
    if path.is_absolute():
        return path
    return find_project_root() / path


def get_server_base_url() -> tuple[str, float]:
    """
    Get the backend server base URL and timeout from application.yaml.

    Returns:
        Tuple of (base_url, timeout_seconds).
    """
    app = get_app_config().application
    server = app.server
    base_url = f"http://{server.host}:{server.port}"
    timeout = float(app.timeouts.external_api)
    return base_url, timeout
