# File: tests/helpers.py
"""Test doubles for the fetch and store capabilities plus a tiny aiohttp server runner."""
from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from typing import Dict, List, Tuple, Union

from aiohttp import web

from site_corpus.crawler.models import FetchResult
from site_corpus.storage import StoreError

SEED = "http://example.com"

Answer = Union[FetchResult, Exception]


def html(*hrefs: str) -> FetchResult:
    """A 200 text/html page linking to *hrefs* in order."""
    body = "".join(f'<a href="{h}">{h}</a>' for h in hrefs)
    return FetchResult(200, "text/html; charset=utf-8", f"<html><body>{body}</body></html>")


class FakeFetcher:
    """In-memory fetch capability: answers come from a dict or a resolver callable."""

    def __init__(self, site: Union[Dict[str, Answer], Callable[[str], Answer]]) -> None:
        self._site = site
        self.calls: List[str] = []
        self.any_type_calls: List[str] = []

    async def fetch(self, url: str, *, any_type: bool = False) -> FetchResult:
        self.calls.append(url)
        if any_type:
            self.any_type_calls.append(url)
        if callable(self._site):
            answer = self._site(url)
        else:
            answer = self._site.get(url, FetchResult(404, "text/html"))
        if isinstance(answer, Exception):
            raise answer
        return answer

    @property
    def page_calls(self) -> List[str]:
        return [u for u in self.calls if not u.endswith("/robots.txt")]


class MemoryStore:
    def __init__(self, fail_on: Tuple[str, ...] = ()) -> None:
        self.pages: Dict[str, str] = {}
        self._fail_on = fail_on

    def store(self, url: str, content: str) -> None:
        if url in self._fail_on:
            raise StoreError(f"disk full for {url}")
        self.pages[url] = content


async def serve_app(app: web.Application) -> AsyncIterator[str]:
    """Start *app* on a free localhost port, yield its base URL, clean up afterwards."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "127.0.0.1", 0)
    await site.start()
    port = runner.addresses[0][1]
    try:
        yield f"http://127.0.0.1:{port}"
    finally:
        await runner.cleanup()
