"""
Base Service.

Common logging and validation helpers for service classes.

Usage:
    from examnotes.backend.services.base import BaseService

    class GenerationService(BaseService):
        async def generate_from_text(self, text: str) -> GeneratedNotes:
            self._validate_required({"text": text}, ["text"])
            ...
"""

from typing import Any

from examnotes.backend.core.exceptions import ValidationError
from examnotes.backend.core.logging import get_logger


class BaseService:
    """
    Base class for all services.

    Provides a logger named after the concrete service module plus
    required-field validation.
    """

    def __init__(self) -> None:
        self._logger = get_logger(self.__class__.__module__)

    def _validate_required(
        self,
        fields: dict[str, Any],
        field_names: list[str],
        message: str = "Required fields missing",
    ) -> None:
        """
        Validate that required fields are present and not empty.

        Raises:
            ValidationError: If any required field is missing, blank, or empty
        """
        missing = []
        for name in field_names:
            value = fields.get(name)
            if value is None or (isinstance(value, str) and not value.strip()):
                missing.append(name)
            elif isinstance(value, (list, tuple)) and not value:
                missing.append(name)

        if missing:
            raise ValidationError(
                message,
                details={"missing_fields": missing},
            )

    def _log_operation(
        self,
        operation: str,
        **context: Any,
    ) -> None:
        """Log a service operation with context at INFO."""
        self._logger.info(
            operation,
            extra={"service": self.__class__.__name__, **context},
        )

    def _log_debug(
        self,
        message: str,
        **context: Any,
    ) -> None:
        """Log debug information."""
        self._logger.debug(
            message,
            extra={"service": self.__class__.__name__, **context},
        )
