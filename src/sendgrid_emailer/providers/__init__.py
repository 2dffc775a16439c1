"""Email provider implementations."""

from .base import BaseEmailer
from .mock import MockEmailer
from .sendgrid import SendGridEmailer, create_sendgrid_emailer

__all__ = ["BaseEmailer", "MockEmailer", "SendGridEmailer", "create_sendgrid_emailer"]
