"""Asset models shared by offers, offer listings and trade history."""

from dataclasses import dataclass
from typing import Optional


def _to_int(value, default: int = 0) -> int:
    """Steam string-encodes 64-bit ids; accept both forms."""
    if value is None or value == "":
        return default
    return int(value)


@dataclass(frozen=True)
class Asset:
    """An item in a trade offer.

    Identified by the (appid, contextid, assetid) triple.
    """

    appid: int
    contextid: int
    assetid: int
    amount: int = 1

    @property
    def key(self) -> tuple[int, int, int]:
        return (self.appid, self.contextid, self.assetid)

    def to_wire(self) -> dict:
        """Convert to the json_tradeoffer asset shape."""
        return {
            "appid": self.appid,
            "contextid": str(self.contextid),
            "amount": self.amount,
            "assetid": str(self.assetid),
        }

    @classmethod
    def from_api(cls, data: dict) -> "Asset":
        return cls(
            appid=_to_int(data["appid"]),
            contextid=_to_int(data["contextid"]),
            assetid=_to_int(data["assetid"]),
            amount=_to_int(data.get("amount"), default=1),
        )


@dataclass(frozen=True)
class OfferAsset:
    """Asset as listed by GetTradeOffers."""

    appid: int
    contextid: int
    assetid: int
    classid: int
    instanceid: int
    amount: int = 1
    missing: bool = False

    @classmethod
    def from_api(cls, data: dict) -> "OfferAsset":
        return cls(
            appid=_to_int(data["appid"]),
            contextid=_to_int(data["contextid"]),
            assetid=_to_int(data["assetid"]),
            classid=_to_int(data.get("classid")),
            instanceid=_to_int(data.get("instanceid")),
            amount=_to_int(data.get("amount"), default=1),
            missing=bool(data.get("missing", False)),
        )


@dataclass(frozen=True)
class TradedAsset:
    """Asset as listed by GetTradeHistory.

    new_assetid/new_contextid are the identifiers the item received
    in the destination inventory after the trade completed.
    """

    appid: int
    contextid: int
    assetid: int
    classid: int
    instanceid: int
    amount: int = 1
    new_assetid: Optional[int] = None
    new_contextid: Optional[int] = None

    @classmethod
    def from_api(cls, data: dict) -> "TradedAsset":
        new_assetid = data.get("new_assetid")
        new_contextid = data.get("new_contextid")
        return cls(
            appid=_to_int(data["appid"]),
            contextid=_to_int(data["contextid"]),
            assetid=_to_int(data["assetid"]),
            classid=_to_int(data.get("classid")),
            instanceid=_to_int(data.get("instanceid")),
            amount=_to_int(data.get("amount"), default=1),
            new_assetid=int(new_assetid) if new_assetid is not None else None,
            new_contextid=int(new_contextid) if new_contextid is not None else None,
        )
