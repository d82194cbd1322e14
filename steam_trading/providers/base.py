"""Collaborator interfaces used by the trade manager.

The trade manager never logs in, stores cookies, signs confirmations or
speaks HTTP itself. It borrows those capabilities through the abstract
classes below, so any session implementation (a browser-cookie dump, a
mobile authenticator, a test double) can be plugged in.
"""

from abc import ABC, abstractmethod
from typing import Optional

from ..models.confirmation import ConfirmationMethod, Confirmations


class Transport(ABC):
    """Sends authenticated HTTP requests to Steam."""

    @abstractmethod
    async def request(
        self,
        url: str,
        method: str,
        headers: Optional[dict] = None,
        body: Optional[dict] = None,
    ) -> str:
        """Send a request and return the raw response text.

        Args:
            url: Absolute endpoint URL
            method: "GET" or "POST"
            headers: Extra headers (e.g. Referer)
            body: Form fields for POST, query parameters for GET

        Returns:
            Response body as text, whatever the HTTP status

        Raises:
            TransportError: On network, timeout or decoding failure
        """
        pass


class SessionProvider(ABC):
    """Read-only access to the logged in session."""

    @abstractmethod
    def current_session_id(self, host: str) -> Optional[str]:
        """Value of the sessionid cookie for `host`, if logged in."""
        pass

    @abstractmethod
    def cached_api_key(self) -> Optional[str]:
        """Steam Web API key, if one has been cached."""
        pass


class ConfirmationProvider(ABC):
    """Fetches and signs mobile confirmations."""

    @abstractmethod
    async def fetch_confirmations(self) -> Optional[Confirmations]:
        """Pending confirmations, or None when there are none.

        Raises:
            TransportError: If the confirmation list cannot be fetched
        """
        pass

    @abstractmethod
    async def process_confirmations(
        self, method: ConfirmationMethod, confirmations: Confirmations
    ) -> None:
        """Accept or deny the given confirmations."""
        pass


class GuardChecker(ABC):
    """Detects Steam Guard trade holds on a counterparty."""

    @abstractmethod
    async def check_recent_guard_change(self, partner_id: int, token: Optional[str]) -> None:
        """Inspect the counterparty's trade page.

        Args:
            partner_id: Counterparty 32-bit account id
            token: Trade link access token, if any

        Raises:
            SteamGuardRecentlyChangedError: If the counterparty is on a hold
        """
        pass
