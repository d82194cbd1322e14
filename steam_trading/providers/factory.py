"""Factory for building a trade manager from configuration.

Wires the environment-backed collaborators: cookie transport, session,
manual confirmations and the trade page guard checker.
"""

from ..config import TradeConfig
from ..exceptions import ConfigurationError
from .aiohttp_transport import AiohttpTransport
from .guard import TradelinkGuardChecker
from .session import EnvSession, ManualConfirmationProvider


def create_manager(config: TradeConfig):
    """Create a SteamTradeManager from configuration.

    Args:
        config: Trade configuration with session cookies and API key

    Returns:
        SteamTradeManager using environment-backed collaborators

    Raises:
        ConfigurationError: If the configuration is invalid

    Example:
        >>> manager = create_manager(TradeConfig.from_env())
        >>> await manager.decline_received_offers()
    """
    # Imported here to avoid a circular import with the manager module
    from ..manager import SteamTradeManager

    is_valid, error_msg = config.validate()
    if not is_valid:
        raise ConfigurationError(error_msg)

    session = EnvSession(config)
    transport = AiohttpTransport(session.cookies(), timeout=config.request_timeout)

    return SteamTradeManager(
        transport=transport,
        session=session,
        confirmations=ManualConfirmationProvider(),
        guard_checker=TradelinkGuardChecker(transport),
        config=config,
    )
