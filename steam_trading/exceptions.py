"""
Custom exception hierarchy for steam-trading.

All trade offer errors derive from TradeError for easy catching.
Organized by domain: Configuration, Validation, Payload, Transport,
Offer (classified platform responses), Confirmation, Tradelink.
"""

from typing import Optional


class TradeError(Exception):
    """Base exception for all trade offer errors."""
    pass


# ============================================================================
# Configuration Errors
# ============================================================================

class ConfigurationError(TradeError):
    """Configuration-related errors (env vars, settings)."""
    pass


# ============================================================================
# Validation Errors (rejected before any network call)
# ============================================================================

class OfferValidationError(TradeError):
    """Trade offer violates item-count, emptiness or uniqueness rules."""
    pass


class TooManyItemsError(OfferValidationError):
    """Combined item count exceeds the platform ceiling."""
    pass


class EmptyOfferError(OfferValidationError):
    """Both sides of the offer are empty."""
    pass


class DuplicateAssetError(OfferValidationError):
    """Same (appid, contextid, assetid) listed twice on one side."""
    pass


# ============================================================================
# Payload Errors (missing local prerequisites)
# ============================================================================

class PayloadError(TradeError):
    """Local state required to build the request is missing."""
    pass


class MissingSessionError(PayloadError):
    """No sessionid cookie available for the community host."""

    def __init__(self, message: str = "Missing session identifier, login required."):
        super().__init__(message)


class MissingApiKeyError(PayloadError):
    """Web API key must be cached for read endpoints."""

    def __init__(self, message: str = "Missing Web API key, it must be cached to query trade offers."):
        super().__init__(message)


# ============================================================================
# Transport Errors
# ============================================================================

class TransportError(TradeError):
    """Network, timeout or decoding failure at the transport boundary."""
    pass


# ============================================================================
# Offer Errors (produced by the response classifier)
# ============================================================================

class OfferError(TradeError):
    """Steam rejected or failed to process a trade offer request."""
    pass


class NoMatchError(OfferError):
    """No trade offer (or trade) matched the requested id."""
    pass


class GeneralFailureError(OfferError):
    """Unmapped or unrecognized response. Carries the raw message."""

    def __init__(self, message: str, eresult: Optional[int] = None):
        self.raw_message = message
        self.eresult = eresult
        super().__init__(f"Steam Response: {message}")


class MappedOfferError(OfferError):
    """Base for errors matched through the phrase or eresult tables."""

    description = "Steam rejected the trade offer."

    def __init__(self, message: Optional[str] = None, eresult: Optional[int] = None):
        self.raw_message = message
        self.eresult = eresult
        super().__init__(message or self.description)


# Phrase table kinds

class TooManyOffersError(MappedOfferError):
    description = "Too many trade offers sent or outstanding with this user."


class EscrowHoldError(MappedOfferError):
    description = "Items in this trade would be held in escrow."


class ItemsUnavailableError(MappedOfferError):
    description = "One or more items in the offer are no longer available."


class TradeBanError(MappedOfferError):
    description = "The counterparty has a trade ban."


class TradeUnavailableError(MappedOfferError):
    description = "The counterparty is not available to trade."


class InventoryFullError(MappedOfferError):
    description = "An inventory involved in the trade is full."


class NewDeviceCooldownError(MappedOfferError):
    description = "Trading is on hold after a login from a new device."


# EResult table kinds

class InvalidStateError(MappedOfferError):
    description = "The trade offer is not in a state that allows this action."


class AccessDeniedError(MappedOfferError):
    description = "Access denied: missing token, private inventory or not allowed to trade."


class OfferTimeoutError(MappedOfferError):
    description = "Steam timed out. The offer may or may not have been processed."


class ServiceUnavailableError(MappedOfferError):
    description = "Steam trading service is unavailable."


class LimitExceededError(MappedOfferError):
    description = "A Steam limit was exceeded (items, offers or inventory space)."


class ItemsRevokedError(MappedOfferError):
    description = "Items in the offer are no longer in the inventory they were requested from."


class RateLimitedError(MappedOfferError):
    description = "Rate limited by Steam."


class SteamGuardRecentlyChangedError(TradeError):
    """Counterparty recently changed Steam Guard settings and is on a trade hold."""
    pass


# ============================================================================
# Confirmation Errors (produced by the reconciler)
# ============================================================================

class ConfirmationError(TradeError):
    """Mobile confirmation could not be matched or processed."""
    pass


class ConfirmationNotFoundError(ConfirmationError):
    """No pending confirmation matched the trade offer."""

    def __init__(self, message: str = "Confirmation not found for the trade offer."):
        super().__init__(message)


class ConfirmationNotFoundButTradeCreatedError(ConfirmationError):
    """Offer is live on Steam but its confirmation never appeared.

    The caller must confirm it manually or cancel it.
    """

    def __init__(self, tradeoffer_id: int):
        self.tradeoffer_id = tradeoffer_id
        super().__init__(
            f"Trade offer {tradeoffer_id} was created but its confirmation was not found. "
            f"Confirm it manually or cancel it."
        )


class ConfirmationTransportError(ConfirmationError):
    """Failed to fetch pending confirmations."""
    pass


class ManualConfirmationRequiredError(ConfirmationError):
    """Confirmations can only be handled from the Steam mobile app."""

    def __init__(self, message: str = "No mobile authenticator configured, confirm from the Steam mobile app."):
        super().__init__(message)


# ============================================================================
# Tradelink Errors
# ============================================================================

class TradelinkError(TradeError):
    """Malformed or unparsable trade link."""
    pass
