# File: tests/conftest.py
from __future__ import annotations

from collections.abc import Callable

import pytest

from helpers import SEED, MemoryStore
from site_corpus.config import CrawlerConfig


@pytest.fixture()
def make_config() -> Callable[..., CrawlerConfig]:
    """
    Factory for CrawlerConfig with test-friendly defaults:
    no politeness delay and robots.txt handling off unless asked for.
    """

    def _make(**overrides) -> CrawlerConfig:
        data = {
            "seed_url": SEED,
            "max_pages": 100,
            "timeout": 2.0,
            "user_agent": "TestAgent/1.0",
            "request_delay": 0,
            "respect_robots": False,
        }
        data.update(overrides)
        return CrawlerConfig(**data)

    return _make


@pytest.fixture()
def memory_store() -> MemoryStore:
    return MemoryStore()
