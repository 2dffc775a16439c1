"""SendGrid email adapter with a provider-agnostic message model."""

import logging

__version__ = "0.1.0"

# Silent unless the host application configures logging
logging.getLogger(__name__).addHandler(logging.NullHandler())

from .exceptions import (
    EmailerError,
    ConfigurationError,
    EmailerConnectionError,
    AttachmentReadError,
    ValidationError,
    SendError,
)
from .models import Address, Attachment, EmailMessage, EmailerState, SendResult, SendStatus
from .config import (
    ConfigValidation,
    EmailerSettings,
    LoggingConfig,
    SendGridConfig,
    load_tenant_config,
    validate_config,
    verify_config,
)
from .client import CredentialStore
from .converter import convert_message
from .logging import setup_logging
from .providers import BaseEmailer, MockEmailer, SendGridEmailer, create_sendgrid_emailer

__all__ = [
    "EmailerError",
    "ConfigurationError",
    "EmailerConnectionError",
    "AttachmentReadError",
    "ValidationError",
    "SendError",
    "Address",
    "Attachment",
    "EmailMessage",
    "EmailerState",
    "SendResult",
    "SendStatus",
    "ConfigValidation",
    "EmailerSettings",
    "LoggingConfig",
    "SendGridConfig",
    "load_tenant_config",
    "validate_config",
    "verify_config",
    "CredentialStore",
    "convert_message",
    "setup_logging",
    "BaseEmailer",
    "MockEmailer",
    "SendGridEmailer",
    "create_sendgrid_emailer",
]
