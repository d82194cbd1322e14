"""Trade offer and operation kind definitions."""

import json
from dataclasses import dataclass, field
from enum import Enum

from .assets import Asset
from .tradelink import Tradelink


@dataclass
class TradeOffer:
    """A trade offer proposed to the owner of `their_tradelink`.

    Created by the caller and consumed once by create_offer.
    """

    my_assets: list[Asset]
    their_assets: list[Asset]
    their_tradelink: Tradelink
    message: str = ""

    @property
    def total_items(self) -> int:
        return len(self.my_assets) + len(self.their_assets)

    def to_json_tradeoffer(self) -> str:
        """Serialize both sides into Steam's json_tradeoffer form field."""
        document = {
            "newversion": True,
            "version": self.total_items + 1,
            "me": {
                "assets": [asset.to_wire() for asset in self.my_assets],
                "currency": [],
                "ready": False,
            },
            "them": {
                "assets": [asset.to_wire() for asset in self.their_assets],
                "currency": [],
                "ready": False,
            },
        }
        return json.dumps(document, separators=(",", ":"))


class ETradeOfferState(int, Enum):
    """Trade offer states reported by IEconService."""
    INVALID = 1
    ACTIVE = 2
    ACCEPTED = 3
    COUNTERED = 4
    EXPIRED = 5
    CANCELED = 6
    DECLINED = 7
    INVALID_ITEMS = 8
    CREATED_NEEDS_CONFIRMATION = 9
    CANCELED_BY_SECOND_FACTOR = 10
    IN_ESCROW = 11

    @classmethod
    def from_api(cls, value) -> "ETradeOfferState":
        try:
            return cls(int(value))
        except (TypeError, ValueError):
            return cls.INVALID


# Operation kinds. The set is closed: build_request() handles exactly these.

@dataclass(frozen=True)
class CreateOffer:
    offer: TradeOffer = field(hash=False)

    name = "create"


@dataclass(frozen=True)
class AcceptOffer:
    tradeoffer_id: int
    partner_steamid: int

    name = "accept"


@dataclass(frozen=True)
class CancelOffer:
    tradeoffer_id: int

    name = "cancel"


@dataclass(frozen=True)
class DeclineOffer:
    tradeoffer_id: int

    name = "decline"


OperationKind = CreateOffer | AcceptOffer | CancelOffer | DeclineOffer
