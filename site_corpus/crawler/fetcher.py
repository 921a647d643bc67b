# site_corpus/crawler/fetcher.py
"""
Fetcher module: HTTP GET over a shared aiohttp session with timeout and optional retry/backoff.
"""
from __future__ import annotations

import asyncio
from typing import Protocol, Sequence

from aiohttp import ClientError, ClientSession, ClientTimeout

from site_corpus.config import CrawlerConfig
from site_corpus.crawler.models import FetchResult, TransportError
from site_corpus.logger import logger

RETRY_STATUS: Sequence[int] = tuple(range(500, 600)) + (429,)


class FetchCapability(Protocol):
    async def fetch(self, url: str, *, any_type: bool = False) -> FetchResult: ...


def backoff_delay(attempt: int) -> float:
    """Exponential backoff before retry number *attempt*, capped at 60 s."""
    return min(2**attempt, 60)


class Fetcher:
    """Fetches one URL at a time; the session is owned by the caller."""

    def __init__(
        self,
        session: ClientSession,
        config: CrawlerConfig,
        retry_status: Sequence[int] = RETRY_STATUS,
    ) -> None:
        self.session = session
        self.config = config
        self._retry_status = retry_status

    @classmethod
    def open_session(cls, config: CrawlerConfig) -> ClientSession:
        """Create the session the crawler hands to :class:`Fetcher`."""
        return ClientSession(
            timeout=ClientTimeout(total=config.timeout),
            headers={"User-Agent": config.user_agent},
            raise_for_status=False,
        )

    async def fetch(self, url: str, *, any_type: bool = False) -> FetchResult:
        """
        GET *url* and return status, Content-Type and text body.

        The body of a 2xx response is read when it is HTML, or whatever the
        Content-Type (even none) with ``any_type=True``, as robots.txt needs.
        Statuses in ``retry_status`` are re-requested up to
        ``config.retry_times`` times; the last answer is returned as is.
        Raises TransportError on connection errors and timeouts.
        """
        attempts = 0
        while True:
            try:
                async with self.session.get(url) as resp:
                    status = resp.status
                    ctype = resp.headers.get("Content-Type", "")
                    if status in self._retry_status and attempts < self.config.retry_times:
                        attempts += 1
                        backoff = backoff_delay(attempts)
                        logger.debug(
                            "Retry %d/%d for %s (HTTP %d) after %.1f s",
                            attempts, self.config.retry_times, url, status, backoff,
                        )
                    else:
                        result = FetchResult(status, ctype)
                        if result.ok and (any_type or result.is_html):
                            text = await resp.text(errors="replace")
                            return FetchResult(status, ctype, text)
                        return result
            except asyncio.TimeoutError as exc:
                raise TransportError(url, f"timeout after {self.config.timeout:g} s") from exc
            except ClientError as exc:
                raise TransportError(url, f"{type(exc).__name__}: {exc}") from exc
            await asyncio.sleep(backoff)


__all__ = ("Fetcher", "FetchCapability", "RETRY_STATUS", "backoff_delay")
