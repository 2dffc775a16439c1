"""SendGrid client activation."""

import logging
from typing import Any, Callable, Optional

from sendgrid import SendGridAPIClient

from .exceptions import EmailerConnectionError

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str], Any]


def default_client_factory(api_key: str) -> SendGridAPIClient:
    """Build a SendGrid API client bound to a single API key."""
    return SendGridAPIClient(api_key=api_key)


class CredentialStore:
    """Holds one API key and the client activated with it.

    Each store builds its own client, so stores holding different keys can
    live side by side in one process.
    """

    def __init__(self, client_factory: Optional[ClientFactory] = None):
        self._client_factory = client_factory or default_client_factory
        self._api_key: Optional[str] = None
        self.client: Any = None

    @property
    def api_key(self) -> Optional[str]:
        return self._api_key

    @property
    def is_active(self) -> bool:
        return self.client is not None

    def activate(self, api_key: str) -> Any:
        """Activate the key, returning the client.

        Raises:
            EmailerConnectionError: If the client factory fails
        """
        try:
            client = self._client_factory(api_key)
        except Exception as e:
            logger.error("Failed to initialize SendGrid client.")
            raise EmailerConnectionError(
                f"Unable to initialize SendGrid connection: {e}"
            ) from e

        self._api_key = api_key
        self.client = client
        return client

    def clear(self) -> None:
        """Drop the local client reference. The key itself is not revoked."""
        self.client = None
