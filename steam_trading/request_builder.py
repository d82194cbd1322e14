"""Request construction for trade offer operations.

Maps each operation kind to its endpoint, headers and form payload. The
session id is injected last, right before the request is handed to the
transport.
"""

import json
from dataclasses import dataclass, field, replace
from typing import Optional

from .constants import TRADEOFFER_BASE, TRADEOFFER_NEW_SEND_URL, TRADEOFFER_NEW_URL
from .exceptions import MissingSessionError
from .models.api import TradeOfferAcceptResponse, TradeOfferCancelResponse, TradeOfferCreateResponse
from .models.offer import AcceptOffer, CancelOffer, CreateOffer, DeclineOffer, OperationKind

SERVER_ID = "1"


@dataclass(frozen=True)
class RequestSpec:
    """Endpoint, headers and payload for one trade offer request."""

    url: str
    method: str = "POST"
    headers: dict = field(default_factory=dict)
    payload: dict = field(default_factory=dict)

    def with_session_id(self, session_id: Optional[str]) -> "RequestSpec":
        """Return a copy carrying the sessionid form field.

        Raises:
            MissingSessionError: If no session id is available
        """
        if not session_id:
            raise MissingSessionError()
        return replace(self, payload={**self.payload, "sessionid": session_id})


def tradeoffer_url(tradeoffer_id: int, action: str = "") -> str:
    return f"{TRADEOFFER_BASE}{tradeoffer_id}/{action}"


def build_request(operation: OperationKind) -> RequestSpec:
    """Build the request for an operation.

    Args:
        operation: One of CreateOffer, AcceptOffer, CancelOffer, DeclineOffer

    Returns:
        RequestSpec without session id

    Raises:
        TypeError: If `operation` is not a known operation kind
    """
    if isinstance(operation, CreateOffer):
        offer = operation.offer
        tradelink = offer.their_tradelink

        create_params = {}
        if tradelink.token:
            create_params["trade_offer_access_token"] = tradelink.token

        return RequestSpec(
            url=TRADEOFFER_NEW_SEND_URL,
            headers={"Referer": TRADEOFFER_NEW_URL},
            payload={
                "serverid": SERVER_ID,
                "partner": str(tradelink.steamid64),
                "tradeoffermessage": offer.message,
                "json_tradeoffer": offer.to_json_tradeoffer(),
                "captcha": "",
                "trade_offer_create_params": json.dumps(create_params),
            },
        )

    if isinstance(operation, AcceptOffer):
        return RequestSpec(
            url=tradeoffer_url(operation.tradeoffer_id, "accept"),
            headers={"Referer": tradeoffer_url(operation.tradeoffer_id)},
            payload={
                "serverid": SERVER_ID,
                "tradeofferid": str(operation.tradeoffer_id),
                "partner": str(operation.partner_steamid),
                "captcha": "",
            },
        )

    if isinstance(operation, CancelOffer):
        return RequestSpec(url=tradeoffer_url(operation.tradeoffer_id, "cancel"))

    if isinstance(operation, DeclineOffer):
        return RequestSpec(url=tradeoffer_url(operation.tradeoffer_id, "decline"))

    raise TypeError(f"Unknown trade offer operation: {operation!r}")


def response_model_for(operation: OperationKind):
    """Success shape expected back from an operation's endpoint."""
    if isinstance(operation, CreateOffer):
        return TradeOfferCreateResponse
    if isinstance(operation, AcceptOffer):
        return TradeOfferAcceptResponse
    if isinstance(operation, (CancelOffer, DeclineOffer)):
        return TradeOfferCancelResponse
    raise TypeError(f"Unknown trade offer operation: {operation!r}")
