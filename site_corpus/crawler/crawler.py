# === FILE: site_corpus/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import logging
import time
from typing import Optional

from aiohttp import ClientSession

from site_corpus.config import CrawlerConfig
from site_corpus.crawler.fetcher import FetchCapability, Fetcher
from site_corpus.crawler.frontier import Frontier
from site_corpus.crawler.link_extractor import extract_links
from site_corpus.crawler.metrics import CrawlReport, RunMetrics
from site_corpus.crawler.models import (
    CrawlOutcome,
    CrawlState,
    FetchFailed,
    Rejected,
    Saved,
    TransportError,
    WrongContentType,
)
from site_corpus.crawler.normalizer import normalize, origin_of
from site_corpus.crawler.robots import DisallowRules, parse_robots
from site_corpus.logger import LOGGER_NAME
from site_corpus.storage import PageStore, StoreError

__all__ = ("CorpusCrawler",)


class CorpusCrawler:
    """
    Breadth-first single-host crawler: one fetch in flight, stops on page budget or empty frontier.

    Used as an async context manager. Without an explicit *fetcher* it opens an
    aiohttp session on enter and closes it on exit; robots.txt is loaded on
    enter either way.
    """

    def __init__(
        self,
        config: CrawlerConfig,
        store: PageStore,
        fetcher: Optional[FetchCapability] = None,
    ) -> None:
        self.config = config
        self.store = store
        self.seed = config.seed
        self.frontier = Frontier(self.seed)
        self.metrics = RunMetrics()
        self.robots_rules = DisallowRules()
        self.state = CrawlState.IDLE
        self.logger = logging.getLogger(LOGGER_NAME)
        self.session: Optional[ClientSession] = None
        self._fetcher = fetcher

    async def __aenter__(self) -> CorpusCrawler:
        if self._fetcher is None:
            self.session = Fetcher.open_session(self.config)
            self._fetcher = Fetcher(self.session, self.config)
        try:
            await self._load_robots()
        except BaseException:
            await self.__aexit__(None, None, None)
            raise
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    @property
    def fetcher(self) -> FetchCapability:
        if self._fetcher is None:
            raise RuntimeError("Fetcher not initialized; use 'async with CorpusCrawler(...)'")
        return self._fetcher

    async def crawl(self) -> CrawlReport:
        if self.state is not CrawlState.IDLE:
            raise RuntimeError(f"Crawler already {self.state.value}")
        fetcher = self.fetcher
        self.state = CrawlState.RUNNING
        self.logger.info("Crawl started: %s (budget %d pages)", self.seed, self.config.max_pages)
        start = time.monotonic()

        while self.frontier.has_next() and self.metrics.pages_saved < self.config.max_pages:
            url = self.frontier.dequeue()
            outcome = await self._visit(fetcher, url)
            self._dispatch(outcome)
            if self.config.request_delay:
                await asyncio.sleep(self.config.request_delay)

        self.state = CrawlState.FINISHED
        report = CrawlReport(
            seed_url=self.seed,
            metrics=self.metrics,
            seen_count=self.frontier.seen_count(),
            queued_count=self.frontier.size(),
            elapsed=time.monotonic() - start,
            finished_by="budget" if self.metrics.pages_saved >= self.config.max_pages else "exhausted",
            pending=list(self.frontier.pending()),
        )
        self.logger.info(
            "Crawl finished (%s): %d pages in %.2f s (%.2f pages/s)",
            report.finished_by, self.metrics.pages_saved, report.elapsed, report.pages_per_second,
        )
        return report

    # ------------------------------------------------------------------ #
    # One iteration                                                      #
    # ------------------------------------------------------------------ #

    async def _visit(self, fetcher: FetchCapability, url: str) -> CrawlOutcome:
        try:
            result = await fetcher.fetch(url)
        except TransportError as exc:
            return FetchFailed(url, exc.reason)
        if not result.ok:
            return FetchFailed(url, f"HTTP {result.status}")
        if not result.is_html:
            return WrongContentType(url, result.media_type)
        return Saved(url, result.body)

    def _dispatch(self, outcome: CrawlOutcome) -> None:
        if isinstance(outcome, FetchFailed):
            self.metrics.fetch_errors += 1
            self.logger.warning("Fetch failed %s: %s", outcome.url, outcome.reason)
        elif isinstance(outcome, WrongContentType):
            self.metrics.content_type_errors += 1
            self.logger.debug("Skipped %s: content type %r", outcome.url, outcome.content_type)
        elif isinstance(outcome, Saved):
            self._save(outcome)
            self._admit_links(outcome)

    def _save(self, page: Saved) -> None:
        try:
            self.store.store(page.url, page.content)
        except (StoreError, OSError) as exc:
            self.metrics.store_errors += 1
            self.logger.warning("Store failed %s: %s", page.url, exc)
            return
        self.metrics.pages_saved += 1
        self.logger.debug("Saved %s (%d/%d)", page.url, self.metrics.pages_saved, self.config.max_pages)

    def _admit_links(self, page: Saved) -> None:
        try:
            for raw in extract_links(page.content):
                self.metrics.urls_discovered += 1
                candidate = normalize(raw, self.seed)
                if isinstance(candidate, Rejected):
                    self.metrics.record_rejection(candidate.reason)
                    continue
                if self.robots_rules.is_disallowed(candidate):
                    self.metrics.robots_blocked += 1
                    continue
                if self.frontier.enqueue_if_new(candidate):
                    self.metrics.urls_admitted += 1
        except Exception as exc:
            self.metrics.parse_errors += 1
            self.logger.warning("Link extraction failed on %s: %s", page.url, exc)

    # ------------------------------------------------------------------ #
    # robots.txt                                                         #
    # ------------------------------------------------------------------ #

    async def _load_robots(self) -> None:
        if not self.config.respect_robots:
            self.logger.debug("robots.txt handling disabled")
            return
        robots_url = origin_of(self.seed) + "/robots.txt"
        try:
            result = await self.fetcher.fetch(robots_url, any_type=True)
        except TransportError as exc:
            self.logger.warning("Error loading robots.txt: %s", exc)
            return
        if not result.ok:
            # default allow all
            self.logger.debug("robots.txt %s -> HTTP %s", robots_url, result.status)
            return
        self.robots_rules = parse_robots(result.body)
        self.logger.info("robots.txt: %d disallowed prefixes", len(self.robots_rules))
