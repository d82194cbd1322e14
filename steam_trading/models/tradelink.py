"""Trade link parsing and SteamID conversion."""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import parse_qs, urlparse

from ..constants import STEAM_COMMUNITY_HOST, STEAMID64_BASE, TRADEOFFER_NEW_URL
from ..exceptions import TradelinkError

_MAX_ACCOUNT_ID = 2**32 - 1


def account_id_to_steam64(account_id: int) -> int:
    """Convert a 32-bit account id (steamid3) to a 64-bit SteamID."""
    if not 0 < account_id <= _MAX_ACCOUNT_ID:
        raise ValueError(f"Account id out of range: {account_id}")
    return STEAMID64_BASE + account_id


def steam64_to_account_id(steamid64: int) -> int:
    """Convert a 64-bit SteamID back to its 32-bit account id."""
    account_id = steamid64 - STEAMID64_BASE
    if not 0 < account_id <= _MAX_ACCOUNT_ID:
        raise ValueError(f"Not an individual SteamID64: {steamid64}")
    return account_id


@dataclass(frozen=True)
class Tradelink:
    """Counterparty identity and access token parsed from a trade URL.

    Example:
        >>> link = Tradelink.parse(
        ...     "https://steamcommunity.com/tradeoffer/new/?partner=79925588&token=Ob27qXzn"
        ... )
        >>> link.partner_id, link.token
        (79925588, 'Ob27qXzn')
        >>> link.steamid64
        76561198040191316
    """

    partner_id: int
    token: Optional[str]
    raw_url: str

    @property
    def steamid64(self) -> int:
        return account_id_to_steam64(self.partner_id)

    @classmethod
    def parse(cls, url: str) -> "Tradelink":
        """Parse a trade offer URL.

        Raises:
            TradelinkError: If the URL is not a steamcommunity trade link or
                the partner parameter is missing or invalid
        """
        if not url or not isinstance(url, str):
            raise TradelinkError("Trade link must be a non-empty string")

        parsed = urlparse(url.strip())
        if parsed.netloc != STEAM_COMMUNITY_HOST or not parsed.path.startswith("/tradeoffer/new"):
            raise TradelinkError(f"Not a Steam trade link: {url}")

        query = parse_qs(parsed.query)
        partner_values = query.get("partner")
        if not partner_values:
            raise TradelinkError(f"Trade link has no partner parameter: {url}")

        try:
            partner_id = int(partner_values[0])
            account_id_to_steam64(partner_id)
        except ValueError:
            raise TradelinkError(f"Invalid partner id in trade link: {partner_values[0]}")

        token_values = query.get("token")
        token = token_values[0] if token_values else None

        return cls(partner_id=partner_id, token=token, raw_url=url)

    @classmethod
    def from_partner(cls, partner_id: int, token: Optional[str] = None) -> "Tradelink":
        """Build a trade link for a known account id."""
        url = f"{TRADEOFFER_NEW_URL}/?partner={partner_id}"
        if token:
            url += f"&token={token}"
        return cls.parse(url)
