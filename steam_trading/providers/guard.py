"""Steam Guard trade hold detection.

Steam refuses offers to accounts that recently enabled, disabled or reset
Steam Guard, but the send endpoint does not always say so. The trade
offer page of the counterparty does: it renders the reason in an
`error_msg` block instead of the trade window.
"""

import html
import re
from typing import Optional

from ..constants import TRADEOFFER_NEW_URL
from ..exceptions import SteamGuardRecentlyChangedError
from ..logging_config import get_logger
from .base import GuardChecker, Transport

_ERROR_BLOCK = re.compile(r'<div[^>]*id="error_msg"[^>]*>(.*?)</div>', re.IGNORECASE | re.DOTALL)
_TAGS = re.compile(r"<[^>]+>")
_GUARD_NOTICE = re.compile(r"steam\s*guard", re.IGNORECASE)


def extract_error_message(page: str) -> Optional[str]:
    """Text of the trade page error block, if present."""
    match = _ERROR_BLOCK.search(page)
    if not match:
        return None
    text = html.unescape(_TAGS.sub(" ", match.group(1)))
    return " ".join(text.split()) or None


class TradelinkGuardChecker(GuardChecker):
    """Guard checker that inspects the counterparty's trade offer page."""

    def __init__(self, transport: Transport):
        self.transport = transport
        self.logger = get_logger(__name__)

    async def check_recent_guard_change(self, partner_id: int, token: Optional[str]) -> None:
        params = {"partner": str(partner_id)}
        if token:
            params["token"] = token

        page = await self.transport.request(f"{TRADEOFFER_NEW_URL}/", "GET", body=params)
        message = extract_error_message(page)

        if message and _GUARD_NOTICE.search(message):
            self.logger.warning(
                "steam_guard_hold_detected",
                extra={"partner_id": partner_id, "notice": message},
            )
            raise SteamGuardRecentlyChangedError(message)
