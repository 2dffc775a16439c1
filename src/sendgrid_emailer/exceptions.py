"""Custom exceptions for the SendGrid emailer."""

from typing import List, Optional


class EmailerError(Exception):
    """Base exception for all emailer errors."""

    pass


class ConfigurationError(EmailerError):
    """Raised when the tenant configuration is invalid or missing."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = list(errors or [])


class EmailerConnectionError(EmailerError, ConnectionError):
    """Raised when the SendGrid client cannot be activated.

    Also a builtin ConnectionError, so callers catching that still see it.
    """

    pass


class AttachmentReadError(EmailerError):
    """Raised when an attachment cannot be read from disk."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class ValidationError(EmailerError):
    """Raised when a message or address is malformed."""

    pass


class SendError(EmailerError):
    """Raised when SendGrid rejects a message."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.details = details
