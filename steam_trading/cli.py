#!/usr/bin/env python3
"""Trade offer CLI.

JSON-emitting commands for scripts and cron jobs. Session cookies and
the Web API key come from the environment (see TradeConfig.from_env).
Offers created elsewhere can be inspected, cancelled or declined here;
creating and accepting need a mobile authenticator and are left to the
library API.
"""

import argparse
import asyncio
import json
import sys

from .config import TradeConfig
from .exceptions import TradeError
from .logging_config import get_logger, setup_logging
from .providers.factory import create_manager
from .tradelock import ONE_WEEK_SECONDS, estimate_tradelock_end

logger = get_logger(__name__)


def json_output(data: dict):
    """Print JSON output."""
    print(json.dumps(data, indent=2))


async def cmd_offers(manager, args) -> dict:
    """List active trade offers."""
    offers = await manager.get_trade_offers(sent=True, received=True, active_only=True)
    return {
        "success": True,
        "offers": [
            {
                "tradeofferid": str(offer.tradeofferid),
                "partner": str(offer.partner_steamid64),
                "state": offer.state.name,
                "is_our_offer": offer.is_our_offer,
                "items_to_give": len(offer.items_to_give),
                "items_to_receive": len(offer.items_to_receive),
            }
            for offer in offers.all_offers()
        ],
    }


async def cmd_cancel(manager, args) -> dict:
    """Cancel a sent offer."""
    await manager.cancel_offer(args.tradeoffer_id)
    return {"success": True, "canceled": str(args.tradeoffer_id)}


async def cmd_decline(manager, args) -> dict:
    """Decline a received offer."""
    await manager.decline_offer(args.tradeoffer_id)
    return {"success": True, "declined": str(args.tradeoffer_id)}


async def cmd_decline_all(manager, args) -> dict:
    """Decline every active received offer."""
    declined = await manager.decline_received_offers()
    return {"success": True, "declined": declined}


async def cmd_new_assets(manager, args) -> dict:
    """Post-trade asset ids of a completed trade."""
    id_map = await manager.get_asset_id_map(args.tradeid)
    return {
        "success": True,
        "assets": {str(old): str(new) for old, new in id_map.items()},
    }


async def cmd_tradelock(manager, args) -> dict:
    """Estimated end of the trade lock for items of a completed trade."""
    history = await manager.get_trade_history()
    trades = history.filter_by(lambda trade: trade.tradeid == args.tradeid)
    if not trades:
        return {"success": False, "error": f"Trade {args.tradeid} not found in trade history"}

    unlocks_at = estimate_tradelock_end(trades[0].time_init, args.days * 24 * 60 * 60)
    return {"success": True, "tradeid": str(args.tradeid), "unlocks_at": unlocks_at.isoformat()}


COMMANDS = {
    "offers": cmd_offers,
    "cancel": cmd_cancel,
    "decline": cmd_decline,
    "decline-all": cmd_decline_all,
    "new-assets": cmd_new_assets,
    "tradelock": cmd_tradelock,
}


async def run_command(args, config: TradeConfig) -> int:
    """Run one command and print its JSON result. Returns the exit code."""
    try:
        manager = create_manager(config)
        result = await COMMANDS[args.command](manager, args)
    except TradeError as e:
        logger.error("cli_command_failed", extra={"command": args.command, "error": str(e)})
        result = {"success": False, "error": str(e), "error_type": type(e).__name__}

    json_output(result)
    return 0 if result.get("success") else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Steam trade offer CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("offers", help="List active sent and received offers")

    cancel_parser = subparsers.add_parser("cancel", help="Cancel a sent offer")
    cancel_parser.add_argument("tradeoffer_id", type=int, help="Trade offer ID")

    decline_parser = subparsers.add_parser("decline", help="Decline a received offer")
    decline_parser.add_argument("tradeoffer_id", type=int, help="Trade offer ID")

    subparsers.add_parser("decline-all", help="Decline every active received offer")

    assets_parser = subparsers.add_parser("new-assets", help="Post-trade asset ids of a trade")
    assets_parser.add_argument("tradeid", type=int, help="Trade ID")

    lock_parser = subparsers.add_parser("tradelock", help="Estimate when traded items unlock")
    lock_parser.add_argument("tradeid", type=int, help="Trade ID")
    lock_parser.add_argument(
        "--days", type=int, default=ONE_WEEK_SECONDS // (24 * 60 * 60), help="Restriction length in days"
    )

    return parser


def main():
    """Main CLI entry point."""
    args = build_parser().parse_args()

    try:
        config = TradeConfig.from_env()
    except TradeError as e:
        json_output({"success": False, "error": f"Configuration error: {e}"})
        sys.exit(1)

    is_valid, error_msg = config.validate()
    if not is_valid:
        json_output({"success": False, "error": f"Configuration error: {error_msg}"})
        sys.exit(1)

    setup_logging(level=config.log_level, use_json=config.log_json)
    sys.exit(asyncio.run(run_command(args, config)))


if __name__ == "__main__":
    main()
