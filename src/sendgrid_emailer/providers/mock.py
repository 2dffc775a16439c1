"""In-memory email provider for tests and previews."""

from typing import Any, Dict, List, Mapping, Union

from ..converter import convert_message
from ..exceptions import ConfigurationError
from ..models import EmailMessage, SendResult
from .base import BaseEmailer


class MockEmailer(BaseEmailer):
    """Emailer that converts messages but never sends them.

    Converted payloads are kept in ``outbox`` in send order.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.outbox: List[Dict[str, Any]] = []

    def verify_config(self, config: Any) -> Dict[str, Any]:
        if config is None:
            return {}
        if not isinstance(config, Mapping):
            raise ConfigurationError("Mock emailer config must be a mapping")
        return dict(config)

    def connect(self) -> None:
        if self.config is None:
            raise ConfigurationError("MockEmailer is not initialized")
        self.set_connection(self.outbox)

    def disconnect(self) -> None:
        self.set_connection(None)

    def send(
        self, message: Union[EmailMessage, Mapping[str, Any]], show_details: bool = False
    ) -> SendResult:
        """Pretend to send an email.

        Returns:
            SendResult with success status
        """
        message = self._coerce_message(message)
        if not self.is_connected:
            self.connect()

        payload = convert_message(message)
        self.outbox.append(payload)
        if show_details:
            self.logger.info(f"Mock email queued: {payload['subject']}")

        return SendResult(
            success=True,
            message=message,
            info=payload,
            message_id=f"mock-{len(self.outbox)}",
        )
