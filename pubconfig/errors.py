"""
Custom Exceptions

Exceptions carry a context dict so failures can be logged as structured
fields and shown to the user in one line.
"""

from typing import Dict, Any, Optional


def _context(extra: Dict[str, Any], **named: Any) -> Dict[str, Any]:
    """Merge keyword context, skipping named fields that were not given."""
    context = dict(extra)
    context.update((key, value) for key, value in named.items() if value)
    return context


class PublishingError(Exception):
    """Base exception for publishing configuration errors."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self):
        if not self.context:
            return self.message
        details = ", ".join(f"{key}={value}" for key, value in self.context.items())
        return f"{self.message} (Context: {details})"


class ConfigurationError(PublishingError):
    """The publishing declaration, a properties file or a -P option is invalid."""

    def __init__(self, message: str, config_file: Optional[str] = None,
                 config_path: Optional[str] = None, **kwargs):
        super().__init__(message, _context(kwargs, config_file=config_file,
                                           config_path=config_path))


class RegistrationError(PublishingError):
    """The publishing registry rejected an entry."""

    def __init__(self, message: str, entry_type: Optional[str] = None,
                 entry_name: Optional[str] = None, **kwargs):
        super().__init__(message, _context(kwargs, entry_type=entry_type,
                                           entry_name=entry_name))


class CredentialError(PublishingError):
    """A credential store could not be set up."""

    def __init__(self, message: str, credential_type: Optional[str] = None,
                 credential_name: Optional[str] = None, **kwargs):
        super().__init__(message, _context(kwargs, credential_type=credential_type,
                                           credential_name=credential_name))


def format_error_context(error: Exception) -> Dict[str, Any]:
    """Structured log fields for any exception."""
    return {
        'error_type': type(error).__name__,
        'message': getattr(error, 'message', str(error)),
        'context': getattr(error, 'context', {}),
    }
