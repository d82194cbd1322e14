"""Steam Web API client for IEconService trade offer reads."""

import json
from typing import Optional

from .constants import DEFAULT_HISTORY_MAX_TRADES, MAX_HISTORICAL_CUTOFF, STEAM_API_BASE
from .exceptions import MissingApiKeyError, TransportError
from .logging_config import get_logger
from .models.api import TradeHistoryResponse, TradeOffersResponse
from .providers.base import Transport


def _flag(value: bool) -> str:
    return "1" if value else "0"


class SteamWebAPI:
    """IEconService client.

    Built once with the API key and reused for every read.

    Example:
        >>> api = SteamWebAPI(transport, api_key="ABCDEF")
        >>> offers = await api.get_trade_offers(sent=True, received=True, active_only=True)
    """

    def __init__(self, transport: Transport, api_key: Optional[str]):
        if not api_key:
            raise MissingApiKeyError()
        self.transport = transport
        self.api_key = api_key
        self.logger = get_logger(__name__)

    async def _get(self, interface: str, method: str, params: dict) -> dict:
        url = f"{STEAM_API_BASE}{interface}/{method}/v1/"
        text = await self.transport.request(url, "GET", body={"key": self.api_key, **params})
        try:
            document = json.loads(text)
        except ValueError as e:
            raise TransportError(f"{interface}/{method} returned invalid JSON") from e

        if not isinstance(document, dict):
            raise TransportError(f"{interface}/{method} returned unexpected body")
        return document

    async def get_trade_offers(
        self,
        sent: bool,
        received: bool,
        active_only: bool,
        historical_cutoff: int = MAX_HISTORICAL_CUTOFF,
    ) -> TradeOffersResponse:
        """Call IEconService/GetTradeOffers."""
        document = await self._get(
            "IEconService",
            "GetTradeOffers",
            {
                "get_sent_offers": _flag(sent),
                "get_received_offers": _flag(received),
                "active_only": _flag(active_only),
                "time_historical_cutoff": str(historical_cutoff),
            },
        )
        try:
            return TradeOffersResponse.from_dict(document)
        except (KeyError, TypeError, ValueError, OverflowError) as e:
            raise TransportError(f"Unexpected GetTradeOffers response: {e}") from e

    async def get_trade_history(
        self,
        max_trades: int = DEFAULT_HISTORY_MAX_TRADES,
        include_failed: bool = False,
    ) -> TradeHistoryResponse:
        """Call IEconService/GetTradeHistory."""
        document = await self._get(
            "IEconService",
            "GetTradeHistory",
            {
                "max_trades": str(max_trades),
                "include_failed": _flag(include_failed),
                "include_total": "0",
            },
        )
        try:
            return TradeHistoryResponse.from_dict(document)
        except (KeyError, TypeError, ValueError, OverflowError) as e:
            raise TransportError(f"Unexpected GetTradeHistory response: {e}") from e
