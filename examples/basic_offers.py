"""
Basic Trade Offer Example
=========================

This example shows how to:
1. Build a trade manager from the .env session
2. List active trade offers
3. Send an offer to a trade link
4. Clear received offers
5. Look up new asset ids after a trade
"""

import asyncio
import sys

from steam_trading import Asset, TradeConfig, TradeOffer, Tradelink
from steam_trading.exceptions import ConfirmationNotFoundButTradeCreatedError, TradeError
from steam_trading.logging_config import setup_logging
from steam_trading.providers.factory import create_manager
from steam_trading.tradelock import estimate_tradelock_end


async def basic_offers_example(tradelink_url: str, assetid: int):
    """Send a one-item CS2 offer and tidy up received offers."""

    print("🔁 steam-trading - Basic Trade Offer Example\n")

    # 1. Load configuration from .env file
    print("1️⃣ Loading configuration...")
    config = TradeConfig.from_env()
    print(f"   {config!r}\n")

    manager = create_manager(config)

    # 2. List what is currently open
    print("2️⃣ Fetching active offers...")
    offers = await manager.get_trade_offers(sent=True, received=True, active_only=True)
    for offer in offers.all_offers():
        direction = "sent" if offer.is_our_offer else "received"
        print(f"   - {offer.tradeofferid} ({direction}) {offer.state.name}")
    print()

    # 3. Send an offer. Without a mobile authenticator the offer stays
    #    unconfirmed and has to be confirmed from the Steam app.
    print("3️⃣ Sending offer...")
    tradeoffer = TradeOffer(
        my_assets=[Asset(appid=730, contextid=2, assetid=assetid)],
        their_assets=[],
        their_tradelink=Tradelink.parse(tradelink_url),
        message="Sent with steam-trading",
    )
    try:
        tradeoffer_id = await manager.create_offer_and_confirm(tradeoffer)
        print(f"   ✓ Offer {tradeoffer_id} sent and confirmed\n")
    except ConfirmationNotFoundButTradeCreatedError as e:
        print(f"   ⚠️ Offer {e.tradeoffer_id} sent, confirm it in the Steam app\n")

    # 4. Decline everything received
    print("4️⃣ Declining received offers...")
    declined = await manager.decline_received_offers()
    print(f"   ✓ {declined} offer(s) declined\n")

    # 5. Inspect the latest completed trade
    print("5️⃣ Checking trade history...")
    history = await manager.get_trade_history(max_trades=1)
    if history.trades:
        trade = history.trades[0]
        new_ids = await manager.get_new_assetids(trade.tradeid)
        print(f"   Trade {trade.tradeid}: new asset ids {new_ids}")
        print(f"   Tradable again at {estimate_tradelock_end(trade.time_init).isoformat()}\n")
    else:
        print("   No completed trades\n")


def main():
    """Main entry point."""
    if len(sys.argv) != 3:
        print("Usage: python examples/basic_offers.py <tradelink> <assetid>")
        sys.exit(1)

    setup_logging(level="WARNING", use_json=False)

    try:
        asyncio.run(basic_offers_example(sys.argv[1], int(sys.argv[2])))
    except TradeError as e:
        print(f"❌ {type(e).__name__}: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
