"""Steam trade offer automation.

Create, accept, cancel and decline Steam trade offers through an already
authenticated session, and reconcile them with mobile confirmations.

Main components:
    - SteamTradeManager: Orchestrates every trade offer operation
    - TradeConfig: Configuration from environment variables
    - TradeOffer / Tradelink / Asset: Offer building blocks
    - classify: Response classifier for trade offer endpoints
    - Collaborator interfaces: Transport, SessionProvider,
      ConfirmationProvider, GuardChecker

Example usage:
    >>> from steam_trading import SteamTradeManager, TradeOffer, Tradelink, Asset
    >>>
    >>> manager = SteamTradeManager(transport, session, confirmations)
    >>> offer = TradeOffer(
    ...     my_assets=[Asset(appid=730, contextid=2, assetid=15319724006)],
    ...     their_assets=[],
    ...     their_tradelink=Tradelink.parse(url),
    ... )
    >>> tradeoffer_id = await manager.create_offer_and_confirm(offer)
"""

from .config import TradeConfig
from .constants import (
    TRADE_MAX_ITEMS,
    TRADE_MAX_ONGOING_TRADES,
    TRADE_MAX_TRADES_PER_SINGLE_USER,
    STANDARD_DELAY_MS,
)
from .classifier import classify, ClassifiedResponse
from .manager import SteamTradeManager
from .models import Asset, TradeOffer, Tradelink
from .providers.base import ConfirmationProvider, GuardChecker, SessionProvider, Transport

__all__ = [
    "TradeConfig",
    "SteamTradeManager",
    "TradeOffer",
    "Tradelink",
    "Asset",
    "classify",
    "ClassifiedResponse",
    "Transport",
    "SessionProvider",
    "ConfirmationProvider",
    "GuardChecker",
    "TRADE_MAX_ITEMS",
    "TRADE_MAX_TRADES_PER_SINGLE_USER",
    "TRADE_MAX_ONGOING_TRADES",
    "STANDARD_DELAY_MS",
]

__version__ = "0.1.0"
