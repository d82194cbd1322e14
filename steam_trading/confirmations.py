"""Confirmation reconciliation for created and accepted offers.

After Steam registers a created or accepted offer it issues a mobile
confirmation for it. The reconciler waits one pacing interval, looks the
confirmation up by trade offer id and accepts it.

A missing confirmation after a create is reported distinctly: the offer
is already live on Steam and must be confirmed by hand or cancelled, not
retried.
"""

import asyncio
from enum import Enum

from .exceptions import (
    ConfirmationNotFoundButTradeCreatedError,
    ConfirmationNotFoundError,
    ConfirmationTransportError,
    TransportError,
)
from .logging_config import get_logger
from .models.confirmation import ConfirmationMethod
from .providers.base import ConfirmationProvider


class ReconcileContext(str, Enum):
    """Operation that produced the confirmation being reconciled."""
    AFTER_CREATE = "after_create"
    AFTER_ACCEPT = "after_accept"


class ConfirmationReconciler:
    """Matches a trade offer to its pending confirmation and accepts it.

    Example:
        >>> reconciler = ConfirmationReconciler(provider, pacing_delay=1.0)
        >>> await reconciler.reconcile(6123456789, ReconcileContext.AFTER_CREATE)
    """

    def __init__(self, provider: ConfirmationProvider, pacing_delay: float):
        self.provider = provider
        self.pacing_delay = pacing_delay
        self.logger = get_logger(__name__)

    async def reconcile(self, tradeoffer_id: int, context: ReconcileContext) -> None:
        """Find and accept the confirmation for `tradeoffer_id`.

        Raises:
            ConfirmationNotFoundButTradeCreatedError: No match after a create
            ConfirmationNotFoundError: No match after an accept
            ConfirmationTransportError: Confirmation list could not be fetched
        """
        # Steam needs a moment to register the pending confirmation
        await asyncio.sleep(self.pacing_delay)

        try:
            confirmations = await self.provider.fetch_confirmations()
        except TransportError as e:
            raise ConfirmationTransportError(f"Failed to fetch confirmations: {e}") from e

        self.logger.debug(
            "confirmations_fetched",
            extra={"total": len(confirmations) if confirmations else 0},
        )

        matched = confirmations.filter_by_trade_offer_ids([tradeoffer_id]) if confirmations else None

        if not matched:
            self.logger.warning(
                "confirmation_not_found",
                extra={"tradeoffer_id": tradeoffer_id, "context": context.value},
            )
            if context is ReconcileContext.AFTER_CREATE:
                raise ConfirmationNotFoundButTradeCreatedError(tradeoffer_id)
            raise ConfirmationNotFoundError()

        await self.provider.process_confirmations(ConfirmationMethod.ACCEPT, matched)

        self.logger.info(
            "confirmation_accepted",
            extra={"tradeoffer_id": tradeoffer_id, "confirmations": len(matched)},
        )
