"""Mobile confirmation models.

Confirmations are produced by the confirmation collaborator. This package
only reads and filters them before handing them back for processing.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Optional


class ConfirmationMethod(str, Enum):
    """Operation applied to a set of confirmations."""
    ACCEPT = "allow"
    DENY = "cancel"


class ConfirmationKind(int, Enum):
    """Confirmation types reported by the mobile confirmations list."""
    UNKNOWN = 0
    TRADE = 2
    MARKET_LISTING = 3
    API_KEY = 9


@dataclass(frozen=True)
class Confirmation:
    """A pending mobile confirmation.

    related_trade_offer_id is set for trade confirmations only.
    """

    id: str
    nonce: str
    related_trade_offer_id: Optional[int] = None
    kind: ConfirmationKind = ConfirmationKind.TRADE
    headline: str = ""

    @classmethod
    def from_api(cls, data: dict) -> "Confirmation":
        creator = data.get("creator_id")
        kind_value = int(data.get("type", 0))
        try:
            kind = ConfirmationKind(kind_value)
        except ValueError:
            kind = ConfirmationKind.UNKNOWN

        return cls(
            id=str(data["id"]),
            nonce=str(data.get("nonce", "")),
            related_trade_offer_id=int(creator) if creator and kind == ConfirmationKind.TRADE else None,
            kind=kind,
            headline=data.get("headline", ""),
        )


class Confirmations:
    """Ordered collection of pending confirmations."""

    def __init__(self, confirmations: Iterable[Confirmation] = ()):
        self._items: list[Confirmation] = list(confirmations)

    def filter_by_trade_offer_ids(self, tradeoffer_ids: Iterable[int]) -> "Confirmations":
        """Return the confirmations related to any of the given trade offers."""
        wanted = set(tradeoffer_ids)
        return Confirmations(
            conf for conf in self._items if conf.related_trade_offer_id in wanted
        )

    def __iter__(self) -> Iterator[Confirmation]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __repr__(self) -> str:
        return f"Confirmations({self._items!r})"
