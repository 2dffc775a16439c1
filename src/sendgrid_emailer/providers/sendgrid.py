"""SendGrid email provider."""

import json
import logging
from pprint import pformat
from typing import Any, Mapping, Optional, Tuple, Union

from ..client import ClientFactory, CredentialStore
from ..config import SendGridConfig, verify_config
from ..converter import convert_message
from ..exceptions import ConfigurationError, EmailerConnectionError, EmailerError
from ..models import Address, EmailMessage, SendResult
from .base import BaseEmailer


def _error_body(error: Exception) -> Any:
    body = getattr(error, "body", None)
    if body is None:
        response = getattr(error, "response", None)
        body = getattr(response, "body", None)

    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    if isinstance(body, str):
        try:
            return json.loads(body)
        except ValueError:
            return body or None
    return body


def extract_error_details(error: Exception) -> Tuple[Any, str]:
    """Pull a readable failure reason out of a SendGrid error.

    SendGrid error bodies look like ``{"errors": [{"message": ...}, ...]}``;
    the messages are joined with ", ". Without such a list the error's own
    text is used.

    Returns:
        Tuple of (info, details) where info is the parsed body when there is one
    """
    body = _error_body(error)

    if isinstance(body, Mapping):
        errors = body.get("errors")
        if isinstance(errors, list):
            messages = [
                str(e["message"]) for e in errors if isinstance(e, Mapping) and e.get("message")
            ]
            if messages:
                return body, ", ".join(messages)

    if isinstance(body, str):
        return body, body

    details = str(getattr(error, "reason", None) or error)
    return (body if body is not None else details), details


class SendGridEmailer(BaseEmailer):
    """Email adapter for the SendGrid v3 Mail Send API.

    SendGrid is a stateless HTTP API: the "connection" is just a client
    bound to this emailer's API key.
    """

    def __init__(
        self,
        client_factory: Optional[ClientFactory] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the emailer.

        Args:
            client_factory: Builds a client from an API key (default: SendGridAPIClient)
            logger: Logger to report through
        """
        super().__init__(logger=logger)
        self.credentials = CredentialStore(client_factory)

    def verify_config(self, config: Any) -> SendGridConfig:
        return verify_config(config)

    def connect(self) -> None:
        """Activate the configured API key.

        Raises:
            ConfigurationError: If the emailer was never initialized
            EmailerConnectionError: If the client cannot be created
        """
        if self.config is None:
            raise ConfigurationError("SendGridEmailer is not initialized")

        try:
            client = self.credentials.activate(self.config.api_key)
        except EmailerConnectionError as e:
            self.logger.error(f"SendGrid connection failed: {e}")
            raise

        self.set_connection(client)

    def disconnect(self) -> None:
        """Forget the client. There is no session to close."""
        self.credentials.clear()
        self.set_connection(None)

    def send(
        self, message: Union[EmailMessage, Mapping[str, Any]], show_details: bool = False
    ) -> SendResult:
        """Send an email via SendGrid.

        Rejected sends come back as a failed SendResult rather than raising.

        Args:
            message: Message to send, or its mapping form
            show_details: Log the outgoing message at INFO

        Returns:
            SendResult with status and details

        Raises:
            ConfigurationError: If the emailer was never initialized
            ValidationError: If the message cannot be built or has no sender
            AttachmentReadError: If an attachment cannot be read
        """
        message = self._coerce_message(message)

        if not self.is_connected:
            self.connect()

        if show_details:
            self.logger.info(
                f"====== SENDGRID OUTGOING EMAIL ======\n{pformat(message.to_dict())}"
            )

        payload = convert_message(message, default_sender=self._default_sender())

        try:
            response = self.connection.send(payload)
        except Exception as e:
            info, details = extract_error_details(e)
            self.logger.error(f"SendGrid email failed: {details}")
            return SendResult(
                success=False,
                message=message,
                info=info,
                status_code=getattr(e, "status_code", None),
                error_reason=details,
            )

        status_code = getattr(response, "status_code", None)
        if isinstance(status_code, int) and not 200 <= status_code < 300:
            details = f"SendGrid returned status {status_code}: {getattr(response, 'body', '')}"
            self.logger.error(f"SendGrid email failed: {details}")
            return SendResult(
                success=False,
                message=message,
                info=response,
                status_code=status_code,
                error_reason=details,
            )

        headers = getattr(response, "headers", None) or {}
        message_id = headers.get("X-Message-Id") if hasattr(headers, "get") else None
        self.logger.info(
            f"Email sent to {', '.join(a.email for a in message.to)} via SendGrid"
            f" (message_id: {message_id})"
        )

        return SendResult(
            success=True,
            message=message,
            info=response,
            status_code=status_code,
            message_id=message_id,
        )

    def _default_sender(self) -> Optional[Address]:
        if self.config is None or not self.config.from_email:
            return None
        return Address(email=self.config.from_email, name=self.config.from_name)


def create_sendgrid_emailer(
    tenant: Any,
    client_factory: Optional[ClientFactory] = None,
    logger: Optional[logging.Logger] = None,
) -> SendGridEmailer:
    """Create and initialize a SendGridEmailer after validating tenant config.

    Args:
        tenant: Tenant config holding ``sendgrid_api_key`` or ``api_key``
        client_factory: Builds a client from an API key
        logger: Logger handed to the emailer

    Returns:
        A connected, ready-to-use SendGridEmailer

    Raises:
        ConfigurationError: If the tenant config is invalid
        EmailerConnectionError: If initialization fails
    """
    config = verify_config(tenant)

    emailer = SendGridEmailer(client_factory=client_factory, logger=logger)
    log = emailer.logger
    try:
        emailer.initialize(config)
    except EmailerError as e:
        log.error(f"SendGridEmailer initialization failed: {e}")
        raise EmailerConnectionError(f"Failed to initialize SendGridEmailer: {e}") from e

    log.info("SendGridEmailer initialized successfully")
    return emailer
