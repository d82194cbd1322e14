"""aiohttp transport for Steam Community and Web API requests."""

import asyncio
from typing import Optional
from urllib.parse import urlparse

import aiohttp

from ..constants import STEAM_COMMUNITY_HOST
from ..exceptions import TransportError
from ..logging_config import get_logger
from .base import Transport

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0 Safari/537.36"
)


class AiohttpTransport(Transport):
    """Transport sending session cookies to steamcommunity.com.

    Cookies are attached to community requests only; Web API calls
    authenticate with their `key` parameter.

    Example:
        >>> transport = AiohttpTransport({"sessionid": "...", "steamLoginSecure": "..."})
        >>> text = await transport.request(url, "POST", body={"sessionid": "..."})
    """

    def __init__(self, cookies: Optional[dict] = None, timeout: float = 30.0):
        self.cookies = {name: value for name, value in (cookies or {}).items() if value}
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.logger = get_logger(__name__)

    def _cookies_for(self, url: str) -> dict:
        if urlparse(url).netloc == STEAM_COMMUNITY_HOST:
            return self.cookies
        return {}

    async def request(
        self,
        url: str,
        method: str,
        headers: Optional[dict] = None,
        body: Optional[dict] = None,
    ) -> str:
        request_headers = {"User-Agent": USER_AGENT}
        request_headers.update(headers or {})

        if method.upper() == "GET":
            kwargs = {"params": body}
        else:
            kwargs = {"data": body}

        try:
            async with aiohttp.ClientSession(
                cookies=self._cookies_for(url), timeout=self.timeout
            ) as session:
                async with session.request(
                    method.upper(), url, headers=request_headers, **kwargs
                ) as response:
                    text = await response.text()
                    self.logger.debug(
                        "http_response",
                        extra={"url": url, "method": method, "status": response.status},
                    )
                    return text

        except asyncio.TimeoutError as e:
            raise TransportError(f"{method} {url} timed out") from e
        except aiohttp.ClientError as e:
            raise TransportError(f"{method} {url} failed: {e}") from e
