"""
Exception hierarchy for Sentilyser.

Every operation boundary (analysis, chat, export) catches SentilyserError
subclasses and turns them into a user-facing message.
"""

from typing import Any, Dict, Optional


class SentilyserError(Exception):
    """Base exception for all Sentilyser errors."""

    def __init__(self, message: str, error_code: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        """
        Initialize base exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            context: Additional error context
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging."""
        return {
            'error_type': self.__class__.__name__,
            'error_code': self.error_code,
            'message': self.message,
            'context': self.context
        }


class ConfigurationError(SentilyserError):
    """Required configuration (the API key) is missing."""
    pass


class ProviderError(SentilyserError):
    """The LLM provider failed or returned content outside the response schema."""

    def __init__(self, message: str, operation: str, original_error: Optional[Exception] = None):
        context = {'operation': operation}
        if original_error is not None:
            context['original_error'] = str(original_error)
        super().__init__(message, context=context)
        self.operation = operation


class ExportError(SentilyserError):
    """Rendering or writing a report export failed."""

    def __init__(self, export_format: str, original_error: Exception):
        message = f"Failed to export {export_format.upper()} report: {original_error}"
        context = {
            'format': export_format,
            'original_error': str(original_error)
        }
        super().__init__(message, context=context)
        self.export_format = export_format
