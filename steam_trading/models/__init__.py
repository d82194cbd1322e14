"""Trade offer, tradelink, confirmation and wire models."""

from .assets import Asset, OfferAsset, TradedAsset
from .tradelink import Tradelink, account_id_to_steam64, steam64_to_account_id
from .offer import (
    TradeOffer,
    ETradeOfferState,
    CreateOffer,
    AcceptOffer,
    CancelOffer,
    DeclineOffer,
    OperationKind,
)
from .confirmation import Confirmation, ConfirmationKind, ConfirmationMethod, Confirmations
from .api import (
    TradeOfferCreateResponse,
    TradeOfferAcceptResponse,
    TradeOfferCancelResponse,
    GenericErrorResponse,
    TradeOfferRecord,
    TradeOffersResponse,
    TradeHistoryTrade,
    TradeHistoryResponse,
)

__all__ = [
    "Asset",
    "OfferAsset",
    "TradedAsset",
    "Tradelink",
    "account_id_to_steam64",
    "steam64_to_account_id",
    "TradeOffer",
    "ETradeOfferState",
    "CreateOffer",
    "AcceptOffer",
    "CancelOffer",
    "DeclineOffer",
    "OperationKind",
    "Confirmation",
    "ConfirmationKind",
    "ConfirmationMethod",
    "Confirmations",
    "TradeOfferCreateResponse",
    "TradeOfferAcceptResponse",
    "TradeOfferCancelResponse",
    "GenericErrorResponse",
    "TradeOfferRecord",
    "TradeOffersResponse",
    "TradeHistoryTrade",
    "TradeHistoryResponse",
]
