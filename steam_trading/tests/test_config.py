"""Tests for configuration loading, validation and logging setup."""

import json
import logging

import pytest

from steam_trading.config import TradeConfig
from steam_trading.exceptions import ConfigurationError, ManualConfirmationRequiredError
from steam_trading.logging_config import OfferContext, OfferContextFilter, setup_logging
from steam_trading.models import ConfirmationMethod
from steam_trading.providers.factory import create_manager
from steam_trading.providers.session import EnvSession, ManualConfirmationProvider


class TestTradeConfig:
    """Test suite for TradeConfig."""

    def test_defaults(self):
        config = TradeConfig()

        assert config.pacing_delay_ms == 1000
        assert config.pacing_delay == 1.0
        assert config.history_max_trades == 500
        assert config.confirm_when_flag_missing is True
        assert config.validate() == (True, None)

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("STEAM_API_KEY", "ABCDEF0123456789")
        monkeypatch.setenv("STEAM_SESSIONID", "sess")
        monkeypatch.setenv("STEAM_LOGIN_SECURE", "login")
        monkeypatch.setenv("STEAM_PACING_DELAY_MS", "250")
        monkeypatch.setenv("STEAM_REQUEST_TIMEOUT", "12.5")
        monkeypatch.setenv("STEAM_CONFIRM_WHEN_FLAG_MISSING", "false")
        monkeypatch.setenv("LOG_JSON", "0")

        config = TradeConfig.from_env()

        assert config.api_key == "ABCDEF0123456789"
        assert config.session_id == "sess"
        assert config.pacing_delay == 0.25
        assert config.request_timeout == 12.5
        assert config.confirm_when_flag_missing is False
        assert config.log_json is False

    def test_from_env_bad_number(self, monkeypatch):
        monkeypatch.setenv("STEAM_PACING_DELAY_MS", "fast")

        with pytest.raises(ConfigurationError, match="STEAM_PACING_DELAY_MS"):
            TradeConfig.from_env()

    @pytest.mark.parametrize("overrides,fragment", [
        ({"pacing_delay_ms": -1}, "pacing_delay_ms"),
        ({"request_timeout": 0}, "request_timeout"),
        ({"history_max_trades": 0}, "history_max_trades"),
        ({"log_level": "LOUD"}, "log level"),
    ])
    def test_validate_rejects(self, overrides, fragment):
        is_valid, error_msg = TradeConfig(**overrides).validate()

        assert not is_valid
        assert fragment in error_msg

    def test_repr_masks_credentials(self):
        config = TradeConfig(api_key="ABCDEF0123456789", session_id="secret-session", login_secure="secret-login")
        text = repr(config)

        assert "ABCDEF01..." in text
        assert "0123456789" not in text
        assert "secret-session" not in text
        assert "secret-login" not in text


class TestFactory:
    """Test suite for create_manager."""

    def test_builds_manager(self):
        manager = create_manager(TradeConfig(api_key="KEY", session_id="sess", login_secure="login"))

        assert manager.api is not None
        assert manager.session.current_session_id("steamcommunity.com") == "sess"

    def test_without_api_key(self):
        assert create_manager(TradeConfig(session_id="sess")).api is None

    def test_invalid_config(self):
        with pytest.raises(ConfigurationError):
            create_manager(TradeConfig(request_timeout=-1))

    def test_env_session_scoped_to_community_host(self):
        session = EnvSession(TradeConfig(session_id="sess"))

        assert session.current_session_id("steamcommunity.com") == "sess"
        assert session.current_session_id("store.steampowered.com") is None
        assert session.cached_api_key() is None


class TestLogging:
    """Structured logging setup."""

    @pytest.fixture
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        for handler in root.handlers[:]:
            root.removeHandler(handler)
        for handler in handlers:
            root.addHandler(handler)
        root.setLevel(level)

    def test_json_output_carries_offer_context(self, capsys, restore_root_logger):
        setup_logging(level="INFO", use_json=True)
        OfferContext.set("cancel", 6123456789)
        try:
            logging.getLogger("steam_trading.test").info("offer_canceled", extra={"items": 2})
        finally:
            OfferContext.clear()

        record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert record["message"] == "offer_canceled"
        assert record["level"] == "INFO"
        assert record["operation"] == "cancel"
        assert record["tradeoffer_id"] == 6123456789
        assert record["items"] == 2

    @pytest.mark.asyncio
    async def test_provider_events_reach_json_output(self, capsys, restore_root_logger, confirmation_for):
        setup_logging(level="INFO", use_json=True)
        OfferContext.set("accept", 6123456789)
        try:
            with pytest.raises(ManualConfirmationRequiredError):
                await ManualConfirmationProvider().process_confirmations(
                    ConfirmationMethod.ACCEPT, confirmation_for(6123456789)
                )
        finally:
            OfferContext.clear()

        record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert record["message"] == "confirmations_not_processed"
        assert record["logger"] == "steam_trading.providers.session"
        assert record["level"] == "WARNING"
        assert record["operation"] == "accept"
        assert record["confirmations"] == 1

    def test_filter_does_not_override_explicit_extra(self):
        OfferContext.set("accept", 1)
        try:
            record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
            record.tradeoffer_id = 2
            OfferContextFilter().filter(record)
        finally:
            OfferContext.clear()

        assert record.tradeoffer_id == 2
        assert record.operation == "accept"

    def test_update_and_clear(self):
        OfferContext.set("create")
        OfferContext.update(tradeoffer_id=42)
        assert OfferContext.get_extra() == {"operation": "create", "tradeoffer_id": 42}

        OfferContext.clear()
        assert OfferContext.get_extra() == {}
