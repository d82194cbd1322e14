"""
Shared pytest fixtures for steam-trading tests.
Provides a routing fake transport, mock collaborators and sample Steam documents.
"""
import json
from unittest.mock import AsyncMock, Mock

import pytest

from steam_trading.config import TradeConfig
from steam_trading.manager import SteamTradeManager
from steam_trading.models import Asset, Confirmation, Confirmations, TradeOffer, Tradelink
from steam_trading.providers.base import (
    ConfirmationProvider,
    GuardChecker,
    SessionProvider,
    Transport,
)
from steam_trading.webapi import SteamWebAPI

TRADELINK_WITH_TOKEN = "https://steamcommunity.com/tradeoffer/new/?partner=79925588&token=Ob27qXzn"
TRADELINK_WITHOUT_TOKEN = "https://steamcommunity.com/tradeoffer/new/?partner=79925588"


class FakeTransport(Transport):
    """Transport returning canned bodies by URL substring.

    Routes are checked in insertion order. A route value may be a string,
    an exception instance (raised) or a list consumed one item per call.
    """

    def __init__(self, routes: dict | None = None):
        self.routes = dict(routes or {})
        self.calls = []

    @property
    def mutating_calls(self):
        return [call for call in self.calls if call["method"] == "POST"]

    async def request(self, url, method, headers=None, body=None):
        self.calls.append({"url": url, "method": method, "headers": headers, "body": body})
        for fragment, response in self.routes.items():
            if fragment in url:
                if isinstance(response, list):
                    response = response.pop(0)
                if isinstance(response, Exception):
                    raise response
                return response
        raise AssertionError(f"Unexpected request: {method} {url}")


def offers_document(*offers) -> str:
    """GetTradeOffers body with the given received offer dicts."""
    return json.dumps({"response": {"trade_offers_received": list(offers)}})


def offer_record(tradeofferid: int, state: int = 2, is_our_offer: bool = False, accountid: int = 79925588) -> dict:
    return {
        "tradeofferid": str(tradeofferid),
        "accountid_other": accountid,
        "message": "",
        "expiration_time": 1700000000,
        "trade_offer_state": state,
        "items_to_receive": [
            {"appid": 730, "contextid": "2", "assetid": "15319724006", "classid": "3035569977",
             "instanceid": "302028390", "amount": "1", "missing": False}
        ],
        "is_our_offer": is_our_offer,
        "time_created": 1690000000,
        "time_updated": 1690000000,
        "from_real_time_trade": False,
        "escrow_end_date": 0,
        "confirmation_method": 0,
    }


@pytest.fixture
def tradelink():
    return Tradelink.parse(TRADELINK_WITH_TOKEN)


@pytest.fixture
def asset_factory():
    """
    Factory fixture for creating distinct assets.

    Usage:
        def test_example(asset_factory):
            assets = asset_factory(10)
    """
    def _create_assets(count: int, appid: int = 730, contextid: int = 2, start: int = 1000):
        return [Asset(appid=appid, contextid=contextid, assetid=start + i) for i in range(count)]

    return _create_assets


@pytest.fixture
def trade_offer(tradelink, asset_factory):
    return TradeOffer(
        my_assets=asset_factory(2),
        their_assets=asset_factory(1, start=5000),
        their_tradelink=tradelink,
        message="gl hf",
    )


@pytest.fixture
def session():
    session = Mock(spec=SessionProvider)
    session.current_session_id.return_value = "a1b2c3sessionid"
    session.cached_api_key.return_value = "TESTAPIKEY"
    return session


@pytest.fixture
def confirmations():
    provider = Mock(spec=ConfirmationProvider)
    provider.fetch_confirmations = AsyncMock(return_value=None)
    provider.process_confirmations = AsyncMock(return_value=None)
    return provider


@pytest.fixture
def guard_checker():
    checker = Mock(spec=GuardChecker)
    checker.check_recent_guard_change = AsyncMock(return_value=None)
    return checker


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def config():
    return TradeConfig(pacing_delay_ms=0)


@pytest.fixture
def manager(transport, session, confirmations, guard_checker, config):
    return SteamTradeManager(
        transport=transport,
        session=session,
        confirmations=confirmations,
        guard_checker=guard_checker,
        config=config,
        api=SteamWebAPI(transport, "TESTAPIKEY"),
    )


@pytest.fixture
def confirmation_for():
    def _create(*tradeoffer_ids):
        return Confirmations(
            Confirmation(id=f"conf{i}", nonce=f"nonce{i}", related_trade_offer_id=tid)
            for i, tid in enumerate(tradeoffer_ids)
        )

    return _create


@pytest.fixture
def trade_history_json():
    """Sample GetTradeHistory body."""
    return json.dumps({
        "response": {
            "more": True,
            "trades": [
                {
                    "tradeid": "3622543526924228084",
                    "steamid_other": "76561198040191316",
                    "time_init": 1603998438,
                    "status": 3,
                    "assets_given": [
                        {
                            "appid": 730, "contextid": "2", "assetid": "15319724006", "amount": "1",
                            "classid": "3035569977", "instanceid": "302028390",
                            "new_assetid": "19793871926", "new_contextid": "2",
                        }
                    ],
                },
                {
                    "tradeid": "3151905948742966439",
                    "steamid_other": "76561198040191316",
                    "time_init": 1594190957,
                    "status": 3,
                    "assets_received": [
                        {
                            "appid": 730, "contextid": "2", "assetid": "17300115678", "amount": "1",
                            "classid": "1989330488", "instanceid": "302028390",
                            "new_assetid": "19034292089", "new_contextid": "2",
                        }
                    ],
                },
                {
                    "tradeid": "2289455842905057389",
                    "steamid_other": "76561198994791561",
                    "time_init": 1582942255,
                    "time_escrow_end": 1584238255,
                    "status": 3,
                    "assets_given": [
                        {
                            "appid": 730, "contextid": "2", "assetid": "16832065568", "amount": "1",
                            "classid": "1989312177", "instanceid": "302028390",
                            "new_assetid": "18074934023", "new_contextid": "2",
                        }
                    ],
                },
                {
                    "tradeid": "2022547174628335361",
                    "steamid_other": "76561197976600825",
                    "time_init": 1515644947,
                    "status": 3,
                    "assets_received": [
                        {
                            "appid": 730, "contextid": "2", "assetid": "12792180950", "amount": "1",
                            "classid": "2521767801", "instanceid": "0",
                            "new_assetid": "13327860916", "new_contextid": "2",
                        },
                        {
                            "appid": 447820, "contextid": "2", "assetid": "1667881814169014779", "amount": "1",
                            "classid": "2219693199", "instanceid": "0",
                            "new_assetid": "1827766562939536102", "new_contextid": "2",
                        },
                    ],
                },
            ],
        }
    })
