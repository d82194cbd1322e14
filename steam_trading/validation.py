"""Input validation for trade offers and identifiers.

Checks run before any request is built, so a rejected offer never
reaches the network. Validation is fail-fast: the first violated rule
is raised.
"""

from typing import Any, Sequence

from .constants import TRADE_MAX_ITEMS
from .exceptions import (
    DuplicateAssetError,
    EmptyOfferError,
    OfferValidationError,
    TooManyItemsError,
)
from .models.assets import Asset


def validate_offer(my_assets: Sequence[Asset], their_assets: Sequence[Asset]) -> None:
    """Validate the item sets of a proposed trade offer.

    Args:
        my_assets: Items leaving this account
        their_assets: Items requested from the counterparty

    Raises:
        TooManyItemsError: If both sides together exceed TRADE_MAX_ITEMS
        EmptyOfferError: If both sides are empty
        DuplicateAssetError: If one side lists the same asset twice

    Examples:
        >>> validate_offer([Asset(730, 2, 1)], [])
        >>> validate_offer([], [])
        Traceback (most recent call last):
        ...
        steam_trading.exceptions.EmptyOfferError: Trade offer has no items on either side
    """
    total = len(my_assets) + len(their_assets)
    if total > TRADE_MAX_ITEMS:
        raise TooManyItemsError(
            f"Trade offer has {total} items, maximum is {TRADE_MAX_ITEMS}"
        )

    if total == 0:
        raise EmptyOfferError("Trade offer has no items on either side")

    for side, assets in (("my_assets", my_assets), ("their_assets", their_assets)):
        seen = set()
        for asset in assets:
            if asset.key in seen:
                raise DuplicateAssetError(
                    f"Asset {asset.appid}/{asset.contextid}/{asset.assetid} listed twice in {side}"
                )
            seen.add(asset.key)


def validate_tradeoffer_id(value: Any) -> int:
    """Validate a trade offer id (positive 64-bit integer).

    Accepts the string-encoded form Steam uses on the wire.

    Raises:
        OfferValidationError: If not a positive integer that fits in 64 bits
    """
    if isinstance(value, bool):
        raise OfferValidationError(f"Trade offer id must be an integer, got: {value!r}")

    try:
        tradeoffer_id = int(value)
    except (TypeError, ValueError):
        raise OfferValidationError(f"Trade offer id must be an integer, got: {value!r}")

    if not 0 < tradeoffer_id < 2**63:
        raise OfferValidationError(f"Trade offer id out of range: {tradeoffer_id}")

    return tradeoffer_id
