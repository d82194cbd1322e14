"""Wire models for trade offer endpoints and IEconService responses.

Each model parses a decoded JSON document with `from_dict`, raising
ValueError, KeyError or TypeError when the document does not have the
expected shape. The response classifier relies on that to decide which
shape a body is.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional

from .assets import OfferAsset, TradedAsset, _to_int
from .offer import ETradeOfferState
from .tradelink import account_id_to_steam64

_ERROR_KEYS = ("strError", "error_message")


def _expect_object(data) -> dict:
    if not isinstance(data, dict):
        raise TypeError(f"Expected JSON object, got {type(data).__name__}")
    return data


def _objects(data: dict, key: str) -> list[dict]:
    """Array of JSON objects under `key`, empty when absent."""
    values = data.get(key, [])
    if not isinstance(values, list):
        raise TypeError(f"{key} must be an array, got {type(values).__name__}")
    return [_expect_object(value) for value in values]


def _require_object(data) -> dict:
    _expect_object(data)
    if any(key in data for key in _ERROR_KEYS):
        raise ValueError("Body is an error envelope")
    return data


def _optional_bool(data: dict, key: str) -> Optional[bool]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        raise TypeError(f"{key} must be a boolean")
    return value


# ============================================================================
# Trade offer endpoint responses
# ============================================================================

@dataclass
class TradeOfferCreateResponse:
    """Response of tradeoffer/new/send."""

    tradeofferid: int
    needs_mobile_confirmation: Optional[bool] = None
    needs_email_confirmation: Optional[bool] = None
    email_domain: Optional[str] = None

    @classmethod
    def from_dict(cls, data) -> "TradeOfferCreateResponse":
        data = _require_object(data)
        return cls(
            tradeofferid=int(data["tradeofferid"]),
            needs_mobile_confirmation=_optional_bool(data, "needs_mobile_confirmation"),
            needs_email_confirmation=_optional_bool(data, "needs_email_confirmation"),
            email_domain=data.get("email_domain"),
        )


@dataclass
class TradeOfferAcceptResponse:
    """Response of tradeoffer/<id>/accept.

    `tradeid` is present when the trade completed without a confirmation.
    """

    tradeid: Optional[int] = None
    needs_mobile_confirmation: Optional[bool] = None
    needs_email_confirmation: Optional[bool] = None
    email_domain: Optional[str] = None

    @classmethod
    def from_dict(cls, data) -> "TradeOfferAcceptResponse":
        data = _require_object(data)
        known = ("tradeid", "needs_mobile_confirmation", "needs_email_confirmation")
        if not any(key in data for key in known):
            raise ValueError("Not an accept response")

        tradeid = data.get("tradeid")
        return cls(
            tradeid=int(tradeid) if tradeid is not None else None,
            needs_mobile_confirmation=_optional_bool(data, "needs_mobile_confirmation"),
            needs_email_confirmation=_optional_bool(data, "needs_email_confirmation"),
            email_domain=data.get("email_domain"),
        )


@dataclass
class TradeOfferCancelResponse:
    """Response of tradeoffer/<id>/cancel and tradeoffer/<id>/decline."""

    tradeofferid: int

    @classmethod
    def from_dict(cls, data) -> "TradeOfferCancelResponse":
        data = _require_object(data)
        return cls(tradeofferid=int(data["tradeofferid"]))


@dataclass
class GenericErrorResponse:
    """Error envelope. Steam sends `strError`, older clients `error_message`."""

    error_message: Optional[str] = None
    eresult: Optional[int] = None

    @classmethod
    def from_dict(cls, data) -> "GenericErrorResponse":
        _expect_object(data)

        message = data.get("error_message", data.get("strError"))
        if message is not None and not isinstance(message, str):
            message = str(message)

        eresult = data.get("eresult")
        if isinstance(eresult, bool):
            eresult = None
        elif eresult is not None:
            try:
                eresult = int(eresult)
            except (TypeError, ValueError, OverflowError):
                eresult = None

        return cls(error_message=message, eresult=eresult)


# ============================================================================
# IEconService/GetTradeOffers
# ============================================================================

@dataclass
class TradeOfferRecord:
    """A trade offer as listed by GetTradeOffers."""

    tradeofferid: int
    accountid_other: int
    state: ETradeOfferState
    is_our_offer: bool
    message: str = ""
    expiration_time: int = 0
    time_created: int = 0
    time_updated: int = 0
    items_to_give: list[OfferAsset] = field(default_factory=list)
    items_to_receive: list[OfferAsset] = field(default_factory=list)
    tradeid: Optional[int] = None
    from_real_time_trade: bool = False
    escrow_end_date: int = 0
    confirmation_method: int = 0

    @property
    def partner_steamid64(self) -> int:
        return account_id_to_steam64(self.accountid_other)

    @classmethod
    def from_dict(cls, data: dict) -> "TradeOfferRecord":
        data = _expect_object(data)
        tradeid = data.get("tradeid")
        accountid_other = int(data["accountid_other"])
        # raises ValueError for anything but an individual account
        account_id_to_steam64(accountid_other)

        return cls(
            tradeofferid=int(data["tradeofferid"]),
            accountid_other=accountid_other,
            state=ETradeOfferState.from_api(data.get("trade_offer_state")),
            is_our_offer=bool(data.get("is_our_offer", False)),
            message=data.get("message", ""),
            expiration_time=_to_int(data.get("expiration_time")),
            time_created=_to_int(data.get("time_created")),
            time_updated=_to_int(data.get("time_updated")),
            items_to_give=[OfferAsset.from_api(a) for a in _objects(data, "items_to_give")],
            items_to_receive=[OfferAsset.from_api(a) for a in _objects(data, "items_to_receive")],
            tradeid=int(tradeid) if tradeid is not None else None,
            from_real_time_trade=bool(data.get("from_real_time_trade", False)),
            escrow_end_date=_to_int(data.get("escrow_end_date")),
            confirmation_method=_to_int(data.get("confirmation_method")),
        )


@dataclass
class TradeOffersResponse:
    trade_offers_sent: list[TradeOfferRecord] = field(default_factory=list)
    trade_offers_received: list[TradeOfferRecord] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "TradeOffersResponse":
        body = _expect_object(_expect_object(data).get("response", data))
        return cls(
            trade_offers_sent=[TradeOfferRecord.from_dict(o) for o in _objects(body, "trade_offers_sent")],
            trade_offers_received=[
                TradeOfferRecord.from_dict(o) for o in _objects(body, "trade_offers_received")
            ],
        )

    def all_offers(self) -> list[TradeOfferRecord]:
        return self.trade_offers_sent + self.trade_offers_received

    def filter_by(self, predicate: Callable[[TradeOfferRecord], bool]) -> list[TradeOfferRecord]:
        """Sent and received offers matching `predicate`, sent first."""
        return [offer for offer in self.all_offers() if predicate(offer)]


# ============================================================================
# IEconService/GetTradeHistory
# ============================================================================

@dataclass
class TradeHistoryTrade:
    """A completed (or failed) trade from GetTradeHistory."""

    tradeid: int
    steamid_other: int
    time_init: int
    status: int
    time_escrow_end: Optional[int] = None
    assets_given: list[TradedAsset] = field(default_factory=list)
    assets_received: list[TradedAsset] = field(default_factory=list)

    def every_asset(self) -> list[TradedAsset]:
        """Given assets followed by received assets."""
        return self.assets_given + self.assets_received

    @classmethod
    def from_dict(cls, data: dict) -> "TradeHistoryTrade":
        data = _expect_object(data)
        escrow_end = data.get("time_escrow_end")
        return cls(
            tradeid=int(data["tradeid"]),
            steamid_other=int(data["steamid_other"]),
            time_init=_to_int(data.get("time_init")),
            status=_to_int(data.get("status")),
            time_escrow_end=int(escrow_end) if escrow_end is not None else None,
            assets_given=[TradedAsset.from_api(a) for a in _objects(data, "assets_given")],
            assets_received=[TradedAsset.from_api(a) for a in _objects(data, "assets_received")],
        )


@dataclass
class TradeHistoryResponse:
    more: bool = False
    trades: list[TradeHistoryTrade] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "TradeHistoryResponse":
        body = _expect_object(_expect_object(data).get("response", data))
        return cls(
            more=bool(body.get("more", False)),
            trades=[TradeHistoryTrade.from_dict(t) for t in _objects(body, "trades")],
        )

    def filter_by(self, predicate: Callable[[TradeHistoryTrade], bool]) -> list[TradeHistoryTrade]:
        return [trade for trade in self.trades if predicate(trade)]
