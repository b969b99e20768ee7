"""Bounded network fetcher: one GET with a hard timeout and a browser identity."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

import httpx

from config import FetcherSettings, get_fetcher_settings
from utils.exceptions import FetchError, FetchTimeoutError


logger = logging.getLogger(__name__)


class BoundedFetcher:
    """
    Performs single retrievals with a fixed outbound identity.

    Each call owns its own client and response buffer. On timeout the
    in-flight request task is cancelled, which closes the client and
    releases the connection. No retries are attempted here.
    """

    def __init__(
        self,
        settings: Optional[FetcherSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            settings: timeouts and headers; defaults to the global settings
            transport: optional httpx transport (tests use httpx.MockTransport)
        """
        self.settings = settings or get_fetcher_settings()
        self._transport = transport

    def _headers(self, accept: str, *, with_language: bool = True) -> Dict[str, str]:
        headers = {
            "User-Agent": self.settings.user_agent,
            "Accept": accept,
        }
        if with_language:
            headers["Accept-Language"] = self.settings.accept_language
        return headers

    def _budget(self, timeout: Optional[float], long_running: bool) -> float:
        if timeout is not None:
            return float(timeout)
        if long_running:
            return float(self.settings.long_timeout)
        return float(self.settings.timeout)

    async def _request(self, url: str, headers: Dict[str, str], budget: float) -> httpx.Response:
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(budget),
            follow_redirects=self.settings.follow_redirects,
            transport=self._transport,
        ) as client:
            try:
                response = await client.get(url, headers=headers)
            except httpx.TimeoutException as exc:
                raise FetchTimeoutError(url, budget) from exc
            except (httpx.HTTPError, httpx.InvalidURL) as exc:
                raise FetchError(str(exc) or type(exc).__name__, url=url) from exc

        if not response.is_success:
            raise FetchError.from_status(url, response.status_code, response.reason_phrase)
        return response

    async def _get(self, url: str, headers: Dict[str, str], budget: float) -> httpx.Response:
        logger.debug(f"GET {url} (timeout={budget:g}s)")
        try:
            return await asyncio.wait_for(self._request(url, headers, budget), timeout=budget)
        except asyncio.TimeoutError:
            logger.warning(f"GET {url} cancelled after {budget:g}s")
            raise FetchTimeoutError(url, budget) from None
        except FetchError as exc:
            logger.warning(f"GET {url} failed: {exc}")
            raise

    async def fetch_text(
        self,
        url: str,
        *,
        timeout: Optional[float] = None,
        long_running: bool = False,
    ) -> str:
        """
        Fetch a page or feed as text.

        Raises:
            FetchTimeoutError: the budget elapsed and the request was cancelled
            FetchError: non-2xx status or transport failure
        """
        budget = self._budget(timeout, long_running)
        response = await self._get(url, self._headers(self.settings.accept), budget)
        return str(response.text or "")

    async def fetch_json(
        self,
        url: str,
        *,
        timeout: Optional[float] = None,
        long_running: bool = False,
    ) -> Any:
        """Fetch and decode a JSON document; a non-JSON body raises FetchError."""
        budget = self._budget(timeout, long_running)
        headers = self._headers(self.settings.accept_json, with_language=False)
        response = await self._get(url, headers, budget)
        try:
            return response.json()
        except ValueError as exc:
            raise FetchError(f"Invalid JSON body: {exc}", url=url, status_code=response.status_code) from exc

