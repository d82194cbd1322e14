"""Trade manager configuration.

This module provides the configuration dataclass for the trade manager.

SECURITY: Cookies and API keys are loaded from environment variables only.
See .env.example for configuration template.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .constants import DEFAULT_HISTORY_MAX_TRADES, STANDARD_DELAY_MS
from .exceptions import ConfigurationError

# Load .env file if it exists (for local development)
load_dotenv()

_TRUE_VALUES = ("true", "1", "yes")


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in _TRUE_VALUES


def _env_number(name: str, default: str, cast):
    raw = os.getenv(name, default)
    try:
        return cast(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a {cast.__name__}, got: {raw!r}")


@dataclass
class TradeConfig:
    """Trade manager configuration.

    Credentials are optional: the manager borrows the session id and
    API key from its session collaborator, these fields only back the
    environment-driven session used by the CLI.
    """

    # Session cookies and Web API key
    api_key: str = ""
    session_id: str = ""
    login_secure: str = ""

    # Pacing between paced requests and before confirmation lookups
    pacing_delay_ms: int = STANDARD_DELAY_MS

    # Transport
    request_timeout: float = 30.0

    # GetTradeHistory default page size
    history_max_trades: int = DEFAULT_HISTORY_MAX_TRADES

    # Accept responses without needs_mobile_confirmation still go
    # through confirmation reconciliation when this is set.
    confirm_when_flag_missing: bool = True

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    @property
    def pacing_delay(self) -> float:
        """Pacing delay in seconds."""
        return self.pacing_delay_ms / 1000

    @classmethod
    def from_env(cls) -> "TradeConfig":
        """Load configuration from environment variables.

        Returns:
            TradeConfig instance with values from environment

        Raises:
            ConfigurationError: If a numeric variable cannot be parsed

        Example:
            >>> config = TradeConfig.from_env()
            >>> config.pacing_delay_ms
            1000
        """
        return cls(
            api_key=os.getenv("STEAM_API_KEY", ""),
            session_id=os.getenv("STEAM_SESSIONID", ""),
            login_secure=os.getenv("STEAM_LOGIN_SECURE", ""),
            pacing_delay_ms=_env_number("STEAM_PACING_DELAY_MS", str(STANDARD_DELAY_MS), int),
            request_timeout=_env_number("STEAM_REQUEST_TIMEOUT", "30.0", float),
            history_max_trades=_env_number(
                "STEAM_HISTORY_MAX_TRADES", str(DEFAULT_HISTORY_MAX_TRADES), int
            ),
            confirm_when_flag_missing=_env_bool("STEAM_CONFIRM_WHEN_FLAG_MISSING", "true"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_json=_env_bool("LOG_JSON", "true"),
        )

    def validate(self) -> tuple[bool, Optional[str]]:
        """Validate numeric parameters.

        Returns:
            (is_valid, error_message) tuple
        """
        if self.pacing_delay_ms < 0:
            return False, "pacing_delay_ms must not be negative"

        if self.request_timeout <= 0:
            return False, "request_timeout must be positive"

        if self.history_max_trades <= 0:
            return False, "history_max_trades must be positive"

        if self.log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            return False, f"Unknown log level: {self.log_level}"

        return True, None

    def __repr__(self) -> str:
        """String representation with masked cookies and key."""
        masked_key = f"{self.api_key[:8]}..." if self.api_key else None
        masked_session = "***REDACTED***" if self.session_id else None
        masked_login = "***REDACTED***" if self.login_secure else None

        return (
            f"TradeConfig(api_key={masked_key}, "
            f"session_id={masked_session}, "
            f"login_secure={masked_login}, "
            f"pacing_delay_ms={self.pacing_delay_ms}, "
            f"request_timeout={self.request_timeout}, "
            f"history_max_trades={self.history_max_trades}, "
            f"confirm_when_flag_missing={self.confirm_when_flag_missing})"
        )
