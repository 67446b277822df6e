"""
Base Service.

Base class for all services providing common patterns for business logic.
Services orchestrate repositories, validate input, and implement
business rules.

Usage:
    from notebox.backend.services.base import BaseService

    class NoteService(BaseService):
        def __init__(self, repository: NoteRepository) -> None:
            super().__init__()
            self.repo = repository
"""

from typing import Any

from notebox.backend.core.exceptions import ValidationError
from notebox.backend.core.logging import get_logger, log_with_source


class BaseService:
    """
    Base class for all services.

    Provides:
    - Logging context
    - Common validation patterns
    """

    def __init__(self) -> None:
        self._logger = get_logger(self.__class__.__module__)

    def _validate_required(
        self,
        fields: dict[str, Any],
        field_names: list[str],
    ) -> None:
        """
        Validate that required fields are present and not empty.

        Args:
            fields: Dictionary of field names to values
            field_names: List of required field names

        Raises:
            ValidationError: If any required field is missing or empty
        """
        missing = []
        for name in field_names:
            value = fields.get(name)
            if value is None or (isinstance(value, str) and not value.strip()):
                missing.append(name)

        if missing:
            raise ValidationError(
                "Required fields missing",
                details={"missing_fields": missing},
            )

    def _log_operation(
        self,
        operation: str,
        **context: Any,
    ) -> None:
        """
        Log a service operation with context.

        Args:
            operation: Description of the operation
            **context: Additional context to include in log
        """
        log_with_source(
            self._logger,
            "service",
            "info",
            operation,
            extra={"service": self.__class__.__name__, **context},
        )

    def _log_debug(
        self,
        message: str,
        **context: Any,
    ) -> None:
        """
        Log debug information.

        Args:
            message: Debug message
            **context: Additional context to include in log
        """
        log_with_source(
            self._logger,
            "service",
            "debug",
            message,
            extra={"service": self.__class__.__name__, **context},
        )
