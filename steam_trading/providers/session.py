"""Session and confirmation providers backed by configuration.

EnvSession serves cookies exported from an existing browser or mobile
session. ManualConfirmationProvider is used where no mobile
authenticator is available: it never finds confirmations, so created
offers surface ConfirmationNotFoundButTradeCreatedError and are left for
manual confirmation.
"""

from typing import Optional

from ..config import TradeConfig
from ..constants import STEAM_COMMUNITY_HOST
from ..exceptions import ManualConfirmationRequiredError
from ..logging_config import get_logger
from ..models.confirmation import ConfirmationMethod, Confirmations
from .base import ConfirmationProvider, SessionProvider


class EnvSession(SessionProvider):
    """Session cookies and API key read from TradeConfig."""

    def __init__(self, config: TradeConfig):
        self.config = config

    def current_session_id(self, host: str) -> Optional[str]:
        if host != STEAM_COMMUNITY_HOST:
            return None
        return self.config.session_id or None

    def cached_api_key(self) -> Optional[str]:
        return self.config.api_key or None

    def cookies(self) -> dict:
        return {
            "sessionid": self.config.session_id,
            "steamLoginSecure": self.config.login_secure,
        }


class ManualConfirmationProvider(ConfirmationProvider):
    """Confirmation provider for accounts confirmed by hand."""

    def __init__(self):
        self.logger = get_logger(__name__)

    async def fetch_confirmations(self) -> Optional[Confirmations]:
        self.logger.info("confirmations_manual", extra={"reason": "no mobile authenticator configured"})
        return None

    async def process_confirmations(
        self, method: ConfirmationMethod, confirmations: Confirmations
    ) -> None:
        self.logger.warning(
            "confirmations_not_processed",
            extra={"method": method.value, "confirmations": len(confirmations)},
        )
        raise ManualConfirmationRequiredError()
