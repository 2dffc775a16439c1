"""Base emailer interface shared by provider adapters."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional, Union

from ..models import EmailerState, EmailMessage, SendResult


class BaseEmailer(ABC):
    """Abstract base class for email provider adapters.

    Lifecycle: ``UNINITIALIZED -> CONNECTED -> DISCONNECTED``. ``send`` on a
    disconnected emailer reconnects first.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """Initialize the emailer.

        Args:
            logger: Logger to report through (defaults to the module logger)
        """
        self.logger = logger or logging.getLogger(type(self).__module__)
        self.config: Any = None
        self.connection: Any = None
        self.state = EmailerState.UNINITIALIZED

    @property
    def is_connected(self) -> bool:
        return self.connection is not None

    def set_connection(self, connection: Any) -> None:
        """Record the active connection and update the state."""
        self.connection = connection
        if connection is not None:
            self.state = EmailerState.CONNECTED
        elif self.state is not EmailerState.UNINITIALIZED:
            self.state = EmailerState.DISCONNECTED

    def initialize(self, config: Any) -> None:
        """Validate the config and connect.

        Args:
            config: Provider-specific tenant configuration

        Raises:
            ConfigurationError: If the config is invalid
        """
        self.config = self.verify_config(config)
        self.connect()

    def create_transport(self) -> None:
        """Create the provider transport. HTTP providers just connect."""
        self.connect()

    @abstractmethod
    def verify_config(self, config: Any) -> Any:
        """Validate the config, returning its normalized form."""
        pass

    @abstractmethod
    def connect(self) -> None:
        """Activate the provider client."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Release the provider client."""
        pass

    @abstractmethod
    def send(
        self, message: Union[EmailMessage, Mapping[str, Any]], show_details: bool = False
    ) -> SendResult:
        """Send an email message.

        Args:
            message: Message to send, or its mapping form
            show_details: Log the outgoing message

        Returns:
            SendResult with status and details
        """
        pass

    def _coerce_message(self, message: Union[EmailMessage, Mapping[str, Any]]) -> EmailMessage:
        if isinstance(message, EmailMessage):
            return message
        return EmailMessage.from_dict(message)
