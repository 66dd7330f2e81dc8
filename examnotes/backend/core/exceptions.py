"""
Custom Exceptions.

Application-specific exception classes shared by the proxy server and the
local note store. A missing note is not an error: NoteStore.get returns None.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class ValidationError(ApplicationError):
    """Raised when request input is missing or invalid."""

    def __init__(self, message: str = "Validation failed", details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message, code="VAL_VALIDATION_ERROR")


class GenerationError(ApplicationError):
    """Raised when the upstream language model call fails."""

    def __init__(self, message: str = "Failed to generate notes") -> None:
        super().__init__(message, code="SYS_GENERATION_FAILED")


class StorageError(ApplicationError):
    """Base for local persistence failures."""

    def __init__(self, message: str = "Storage error", code: str = "STORE_ERROR") -> None:
        super().__init__(message, code=code)


class StorageWriteError(StorageError):
    """Raised when a mutation could not be persisted. The change did not happen."""

    def __init__(self, message: str = "Failed to write to storage") -> None:
        super().__init__(message, code="STORE_WRITE_FAILED")
