"""Trade manager - orchestrator for Steam trade offer operations.

This module provides the SteamTradeManager class that creates, accepts,
cancels and declines trade offers through an already authenticated
session, and drives the mobile confirmations those actions require.

IMPORTANT: the account must have the Steam Guard mobile authenticator
enabled, otherwise created and accepted offers are held in escrow.
"""

from typing import Optional

from .classifier import classify
from .config import TradeConfig
from .confirmations import ConfirmationReconciler, ReconcileContext
from .constants import STEAM_COMMUNITY_HOST
from .exceptions import MissingApiKeyError, MissingSessionError, NoMatchError
from .logging_config import OfferContext, get_logger
from .models.api import (
    TradeHistoryResponse,
    TradeOfferAcceptResponse,
    TradeOfferRecord,
    TradeOffersResponse,
)
from .models.offer import (
    AcceptOffer,
    CancelOffer,
    CreateOffer,
    DeclineOffer,
    ETradeOfferState,
    OperationKind,
    TradeOffer,
)
from .models.tradelink import Tradelink
from .pacer import BatchDeclinePacer
from .providers.base import ConfirmationProvider, GuardChecker, SessionProvider, Transport
from .providers.guard import TradelinkGuardChecker
from .request_builder import build_request, response_model_for
from .validation import validate_offer, validate_tradeoffer_id
from .webapi import SteamWebAPI


class SteamTradeManager:
    """Main orchestrator for trade offer operations.

    Every mutating operation follows the same sequence:
    1. Validate the offer (create only)
    2. Build the request for the operation kind
    3. Inject the session id and send it through the transport
    4. Classify the response into a typed value or an OfferError
    5. Reconcile the mobile confirmation (create and accept only)

    Example:
        >>> manager = SteamTradeManager(transport, session, confirmations)
        >>> tradeoffer_id = await manager.create_offer_and_confirm(offer)
        >>> await manager.cancel_offer(tradeoffer_id)
    """

    def __init__(
        self,
        transport: Transport,
        session: SessionProvider,
        confirmations: ConfirmationProvider,
        guard_checker: Optional[GuardChecker] = None,
        config: Optional[TradeConfig] = None,
        api: Optional[SteamWebAPI] = None,
    ):
        """Initialize trade manager.

        Args:
            transport: Authenticated HTTP transport
            session: Session provider lending the sessionid cookie and API key
            confirmations: Mobile confirmation provider
            guard_checker: Steam Guard hold detector (defaults to trade page inspection)
            config: Pacing and policy settings
            api: Web API client; built from the cached API key when omitted
        """
        self.transport = transport
        self.session = session
        self.config = config or TradeConfig()
        self.logger = get_logger(__name__)

        self.guard_checker = guard_checker or TradelinkGuardChecker(transport)
        self.reconciler = ConfirmationReconciler(confirmations, self.config.pacing_delay)

        if api is None:
            api_key = session.cached_api_key() or self.config.api_key
            if api_key:
                api = SteamWebAPI(transport, api_key)
            else:
                self.logger.warning("web_api_unavailable", extra={"reason": "no cached API key"})
        self.api = api

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def _web_api(self) -> SteamWebAPI:
        if self.api is None:
            raise MissingApiKeyError()
        return self.api

    async def get_trade_offers(
        self, sent: bool, received: bool, active_only: bool
    ) -> TradeOffersResponse:
        """Fetch trade offers of the logged in account."""
        return await self._web_api().get_trade_offers(sent, received, active_only)

    async def get_tradeoffer_by_id(self, tradeoffer_id: int) -> list[TradeOfferRecord]:
        """Active sent or received offers with the given id (zero or one)."""
        offers = await self.get_trade_offers(sent=True, received=True, active_only=True)
        return offers.filter_by(lambda offer: offer.tradeofferid == tradeoffer_id)

    async def get_trade_history(
        self, max_trades: Optional[int] = None, include_failed: bool = False
    ) -> TradeHistoryResponse:
        """Fetch completed trades. Defaults to config.history_max_trades."""
        return await self._web_api().get_trade_history(
            max_trades or self.config.history_max_trades, include_failed
        )

    async def get_asset_id_map(self, tradeid: int) -> dict[int, int]:
        """Map each asset id of a completed trade to its post-trade id.

        Raises:
            NoMatchError: If the trade is not in the recent history
        """
        history = await self.get_trade_history()
        trades = history.filter_by(lambda trade: trade.tradeid == tradeid)
        if not trades:
            raise NoMatchError(f"Trade {tradeid} not found in trade history")

        return {
            asset.assetid: asset.new_assetid
            for asset in trades[0].every_asset()
            if asset.new_assetid is not None
        }

    async def get_new_assetids(self, tradeid: int) -> list[int]:
        """New asset ids of every item exchanged in a completed trade."""
        return list((await self.get_asset_id_map(tradeid)).values())

    async def check_steam_guard_recently_activated(self, tradelink: Tradelink) -> None:
        """Raise SteamGuardRecentlyChangedError if the tradelink owner is on a guard hold."""
        await self.guard_checker.check_recent_guard_change(tradelink.partner_id, tradelink.token)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def create_offer(self, tradeoffer: TradeOffer) -> int:
        """Send a new trade offer without confirming it.

        Returns:
            The trade offer id

        Raises:
            OfferValidationError: If the item sets break platform limits
            MissingSessionError: If not logged in
            OfferError: If Steam rejected the offer
        """
        OfferContext.set("create")
        validate_offer(tradeoffer.my_assets, tradeoffer.their_assets)

        response = await self._request(CreateOffer(tradeoffer))
        OfferContext.update(tradeoffer_id=response.tradeofferid)

        self.logger.info(
            "offer_created",
            extra={
                "tradeoffer_id": response.tradeofferid,
                "partner_id": tradeoffer.their_tradelink.partner_id,
                "items": tradeoffer.total_items,
                "needs_mobile_confirmation": response.needs_mobile_confirmation,
            },
        )
        return response.tradeofferid

    async def create_offer_and_confirm(self, tradeoffer: TradeOffer) -> int:
        """Create a trade offer and accept its mobile confirmation.

        Returns:
            The trade offer id

        Raises:
            ConfirmationNotFoundButTradeCreatedError: The offer is live but could
                not be confirmed; confirm it manually or cancel it
        """
        tradeoffer_id = await self.create_offer(tradeoffer)
        await self.reconciler.reconcile(tradeoffer_id, ReconcileContext.AFTER_CREATE)
        return tradeoffer_id

    async def accept_offer(self, tradeoffer_id: int) -> None:
        """Accept a trade offer made to this account, confirming it if needed.

        Be extra careful: the acceptance is confirmed with the mobile
        authenticator.

        Raises:
            NoMatchError: If no active offer has this id (nothing is sent)
        """
        tradeoffer_id = validate_tradeoffer_id(tradeoffer_id)
        OfferContext.set("accept", tradeoffer_id)

        session_id = self._require_session_id()

        matches = await self.get_tradeoffer_by_id(tradeoffer_id)
        if not matches:
            raise NoMatchError(f"No active trade offer with id {tradeoffer_id}")

        operation = AcceptOffer(tradeoffer_id, matches[0].partner_steamid64)
        response: TradeOfferAcceptResponse = await self._request(operation, session_id)

        if not self._needs_confirmation(response):
            self.logger.info("offer_accepted", extra={"tradeoffer_id": tradeoffer_id, "tradeid": response.tradeid})
            return

        await self.reconciler.reconcile(tradeoffer_id, ReconcileContext.AFTER_ACCEPT)
        self.logger.info("offer_accepted", extra={"tradeoffer_id": tradeoffer_id, "confirmed": True})

    async def cancel_offer(self, tradeoffer_id: int) -> None:
        """Cancel a trade offer created by this account."""
        tradeoffer_id = validate_tradeoffer_id(tradeoffer_id)
        OfferContext.set("cancel", tradeoffer_id)

        await self._request(CancelOffer(tradeoffer_id))
        self.logger.info("offer_canceled", extra={"tradeoffer_id": tradeoffer_id})

    async def decline_offer(self, tradeoffer_id: int) -> None:
        """Decline a trade offer made to this account."""
        tradeoffer_id = validate_tradeoffer_id(tradeoffer_id)
        OfferContext.set("decline", tradeoffer_id)

        await self._request(DeclineOffer(tradeoffer_id))
        self.logger.info("offer_declined", extra={"tradeoffer_id": tradeoffer_id})

    async def decline_received_offers(self) -> int:
        """Decline every active offer received by this account.

        Keeps the trade offer log clear of the total offer limit.

        Returns:
            Number of offers declined

        Raises:
            The first decline error observed, in submission order
        """
        OfferContext.set("decline_all")
        offers = await self.get_trade_offers(sent=False, received=True, active_only=True)
        received = offers.filter_by(
            lambda offer: offer.state == ETradeOfferState.ACTIVE and not offer.is_our_offer
        )

        self.logger.info("declining_received_offers", extra={"total": len(received)})

        pacer = BatchDeclinePacer(self.decline_offer, self.config.pacing_delay)
        declined = await pacer.run([offer.tradeofferid for offer in received])

        self.logger.info("received_offers_declined", extra={"total": declined})
        return declined

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_session_id(self) -> str:
        session_id = self.session.current_session_id(STEAM_COMMUNITY_HOST)
        if not session_id:
            raise MissingSessionError()
        return session_id

    def _needs_confirmation(self, response: TradeOfferAcceptResponse) -> bool:
        if response.needs_mobile_confirmation is not None:
            return response.needs_mobile_confirmation
        if response.tradeid is not None:
            return False
        return self.config.confirm_when_flag_missing

    async def _request(self, operation: OperationKind, session_id: Optional[str] = None):
        """Build, send and classify one trade offer request."""
        request = build_request(operation)
        request = request.with_session_id(session_id or self.session.current_session_id(STEAM_COMMUNITY_HOST))

        response_text = await self.transport.request(
            request.url, request.method, request.headers, request.payload
        )
        self.logger.debug(
            "tradeoffer_response",
            extra={"operation": operation.name, "body": response_text[:500]},
        )

        classified = classify(response_text, response_model_for(operation))
        if classified.is_success:
            return classified.value

        if not classified.recognized and isinstance(operation, CreateOffer):
            tradelink = operation.offer.their_tradelink
            await self.guard_checker.check_recent_guard_change(tradelink.partner_id, tradelink.token)
            self.logger.error(
                "tradeoffer_response_unrecognized",
                extra={"operation": operation.name, "hint": "Steam servers may be offline"},
            )

        raise classified.error
