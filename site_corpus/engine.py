# File: site_corpus/engine.py
"""site_corpus.engine: Точка оркестрации: запуск обхода с хранилищем по умолчанию."""

from __future__ import annotations

from typing import Optional

from site_corpus.config import CrawlerConfig
from site_corpus.crawler.crawler import CorpusCrawler
from site_corpus.crawler.metrics import CrawlReport
from site_corpus.logger import logger
from site_corpus.storage import AppendFileStore, PageStore

__all__ = ["start_crawl"]


async def start_crawl(cfg: CrawlerConfig, store: Optional[PageStore] = None) -> CrawlReport:
    """
    Запускает CorpusCrawler в контексте и возвращает итоговый CrawlReport.

    Parameters
    ----------
    cfg : CrawlerConfig
        Конфигурация обхода.
    store : PageStore, optional
        Хранилище страниц; по умолчанию AppendFileStore(cfg.output_dir).
    """
    if store is None:
        store = AppendFileStore(cfg.output_dir)
    logger.info("Starting crawl of %s", cfg.seed)
    async with CorpusCrawler(cfg, store) as crawler:
        return await crawler.crawl()
