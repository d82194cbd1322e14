"""Response classification for trade offer endpoints.

Steam answers trade offer requests with one of:
- the operation's success document,
- a generic error envelope carrying a human readable message and/or an
  EResult code,
- something else entirely (HTML error pages, empty bodies, maintenance).

classify() turns any response text into exactly one ClassifiedResponse.
Error envelopes run through an ordered chain of pure classifiers, each
returning an OfferError or None; the first hit wins.
"""

import json
import re
from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

from .exceptions import (
    AccessDeniedError,
    EscrowHoldError,
    GeneralFailureError,
    InvalidStateError,
    InventoryFullError,
    ItemsRevokedError,
    ItemsUnavailableError,
    LimitExceededError,
    NewDeviceCooldownError,
    OfferError,
    OfferTimeoutError,
    RateLimitedError,
    ServiceUnavailableError,
    TooManyOffersError,
    TradeBanError,
    TradeUnavailableError,
)
from .logging_config import get_logger
from .models.api import GenericErrorResponse

logger = get_logger(__name__)

T = TypeVar("T")

# Lowercased phrases Steam sends in strError, matched as substrings in order.
ERROR_MESSAGE_TABLE: tuple[tuple[str, type[OfferError]], ...] = (
    ("sent too many trade offers", TooManyOffersError),
    ("held in escrow", EscrowHoldError),
    ("items in this trade offer are no longer available", ItemsUnavailableError),
    ("they have a trade ban", TradeBanError),
    ("is not available to trade", TradeUnavailableError),
    ("inventory is full", InventoryFullError),
    ("logged in from a new device", NewDeviceCooldownError),
)

ERESULT_TABLE: dict[int, type[OfferError]] = {
    11: InvalidStateError,
    15: AccessDeniedError,
    16: OfferTimeoutError,
    20: ServiceUnavailableError,
    25: LimitExceededError,
    26: ItemsRevokedError,
    84: RateLimitedError,
}

# "There was an error sending your trade offer.  Please try again later. (26)"
_TRAILING_ERESULT = re.compile(r"\((\d+)\)\s*$")


@dataclass(frozen=True)
class ClassifiedResponse(Generic[T]):
    """Either a parsed success value or a classified error.

    `recognized` is False when the body matched neither the success shape
    nor the error envelope.
    """

    value: Optional[T] = None
    error: Optional[OfferError] = None
    recognized: bool = True

    @property
    def is_success(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "ClassifiedResponse[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: OfferError, recognized: bool = True) -> "ClassifiedResponse[T]":
        return cls(error=error, recognized=recognized)


def classify_error_message(envelope: GenericErrorResponse) -> Optional[OfferError]:
    """Match the message against the phrase table."""
    if envelope.error_message is None:
        return None

    lowered = envelope.error_message.lower()
    for phrase, error_class in ERROR_MESSAGE_TABLE:
        if phrase in lowered:
            return error_class(envelope.error_message, envelope.eresult)
    return None


def message_eresult(message: str) -> Optional[int]:
    """EResult code Steam appends to many messages, if any."""
    match = _TRAILING_ERESULT.search(message)
    return int(match.group(1)) if match else None


def classify_unmapped_message(envelope: GenericErrorResponse) -> Optional[OfferError]:
    """Any other message is a general failure carrying it.

    The code appended to the message is kept for diagnostics only.
    """
    if envelope.error_message is None:
        return None

    eresult = envelope.eresult
    if eresult is None:
        eresult = message_eresult(envelope.error_message)
    return GeneralFailureError(envelope.error_message, eresult)


def classify_eresult(envelope: GenericErrorResponse) -> Optional[OfferError]:
    """Map the numeric result code. Unknown codes are general failures."""
    if envelope.eresult is None:
        return None

    error_class = ERESULT_TABLE.get(envelope.eresult)
    if error_class is None:
        return GeneralFailureError(f"EResult {envelope.eresult}", envelope.eresult)
    return error_class(eresult=envelope.eresult)


ENVELOPE_CLASSIFIERS: tuple[Callable[[GenericErrorResponse], Optional[OfferError]], ...] = (
    classify_error_message,
    classify_unmapped_message,
    classify_eresult,
)


def classify_envelope(envelope: GenericErrorResponse) -> Optional[OfferError]:
    """Run the envelope classifiers in order and return the first match."""
    for classifier in ENVELOPE_CLASSIFIERS:
        error = classifier(envelope)
        if error is not None:
            return error
    return None


def classify(raw_text: str, success_model: type[T]) -> ClassifiedResponse[T]:
    """Classify a trade offer endpoint response.

    Args:
        raw_text: Response body as received from the transport
        success_model: Model with a `from_dict` parser for the success shape

    Returns:
        ClassifiedResponse with either `value` or `error` set

    Example:
        >>> classify('{"eresult": 25}', TradeOfferCreateResponse).error
        LimitExceededError('A Steam limit was exceeded (items, offers or inventory space).')
    """
    try:
        document = json.loads(raw_text)
    except (TypeError, ValueError):
        document = None
        parsed = False
    else:
        parsed = True

    if parsed:
        try:
            return ClassifiedResponse.success(success_model.from_dict(document))
        except (KeyError, TypeError, ValueError, OverflowError):
            pass

        try:
            envelope = GenericErrorResponse.from_dict(document)
        except TypeError:
            envelope = None

        if envelope is not None:
            error = classify_envelope(envelope)
            if error is not None:
                logger.debug(
                    "response_classified",
                    extra={"error_type": type(error).__name__, "eresult": envelope.eresult},
                )
                return ClassifiedResponse.failure(error)

            logger.error(
                "response_not_understood",
                extra={"body": raw_text[:500]},
            )
            return ClassifiedResponse.failure(GeneralFailureError(raw_text))

    logger.error(
        "response_unrecognized",
        extra={"body": str(raw_text)[:500]},
    )
    return ClassifiedResponse.failure(GeneralFailureError(str(raw_text)), recognized=False)
