"""
Configuration Schemas.

Pydantic models describing each YAML file in config/settings/. AppConfig
validates every file against its schema when it is loaded, so a missing
key or a typo fails at startup with the offending file named.

    ApplicationSchema  → application.yaml
    LoggingSchema      → logging.yaml
    GenerationSchema   → generation.yaml
    StorageSchema      → storage.yaml
    ConcurrencySchema  → concurrency.yaml
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class _StrictBase(BaseModel):
    """Base with extra='forbid' so unknown YAML keys are caught immediately."""

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# application.yaml
# =============================================================================


class ServerSchema(_StrictBase):
    host: str
    port: int


class CorsSchema(_StrictBase):
    origins: list[str]


class TimeoutsSchema(_StrictBase):
    external_api: int


class UploadsSchema(_StrictBase):
    max_files: int = Field(gt=0)
    max_file_bytes: int = Field(gt=0)


class ApplicationSchema(_StrictBase):
    name: str
    version: str
    description: str
    environment: str
    debug: bool
    api_prefix: str
    server: ServerSchema
    cors: CorsSchema
    timeouts: TimeoutsSchema
    uploads: UploadsSchema


# =============================================================================
# logging.yaml
# =============================================================================


class ConsoleHandlerSchema(_StrictBase):
    enabled: bool


class FileHandlerSchema(_StrictBase):
    enabled: bool
    path: str
    max_bytes: int
    backup_count: int


class HandlersSchema(_StrictBase):
    console: ConsoleHandlerSchema
    file: FileHandlerSchema


class LoggingSchema(_StrictBase):
    level: str
    format: Literal["json", "console"]
    handlers: HandlersSchema


# =============================================================================
# generation.yaml
# =============================================================================


class GenerationSchema(_StrictBase):
    model: str
    max_tokens: int = Field(gt=0)
    default_title: str
    title_max_length: int = Field(gt=0)


# =============================================================================
# storage.yaml
# =============================================================================


class StorageSchema(_StrictBase):
    backend: Literal["file", "memory"]
    path: str
    notes_key: str
    theme_key: str
    untitled_note_title: str


# =============================================================================
# concurrency.yaml
# =============================================================================


class ThreadPoolSchema(_StrictBase):
    max_workers: int = Field(gt=0)


class SemaphoresSchema(_StrictBase):
    llm: int = Field(gt=0)


class ConcurrencySchema(_StrictBase):
    thread_pool: ThreadPoolSchema
    semaphores: SemaphoresSchema
