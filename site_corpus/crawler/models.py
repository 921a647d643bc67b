# site_corpus/crawler/models.py
"""
Data models for the SiteCorpus crawler.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

HTML_TYPES = frozenset({"text/html", "application/xhtml+xml"})


@dataclass(slots=True, frozen=True)
class FetchResult:
    """Raw answer of the fetch capability: status, Content-Type header and text body."""

    status: int
    content_type: str
    body: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def media_type(self) -> str:
        return self.content_type.split(";", 1)[0].strip().lower()

    @property
    def is_html(self) -> bool:
        return self.media_type in HTML_TYPES


class TransportError(Exception):
    """DNS, connection or timeout failure while fetching a URL."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class RejectReason(str, Enum):
    EMPTY = "empty"
    FRAGMENT_OR_PLACEHOLDER = "fragment-or-placeholder"
    NON_HTTP_SCHEME = "non-http-scheme"
    CROSS_HOST = "cross-host"
    NO_PATH_SEGMENTS = "no-path-segments"
    MALFORMED = "malformed"


@dataclass(slots=True, frozen=True)
class Rejected:
    """A link the normalizer refused, with the rule that refused it."""

    reason: RejectReason


class CrawlState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    FINISHED = "finished"


# --------------------------------------------------------------------------- #
# Per-fetch outcomes                                                          #
# --------------------------------------------------------------------------- #


@dataclass(slots=True, frozen=True)
class Saved:
    url: str
    content: str


@dataclass(slots=True, frozen=True)
class FetchFailed:
    url: str
    reason: str


@dataclass(slots=True, frozen=True)
class WrongContentType:
    url: str
    content_type: str


CrawlOutcome = Union[Saved, FetchFailed, WrongContentType]

__all__ = (
    "HTML_TYPES",
    "FetchResult",
    "TransportError",
    "RejectReason",
    "Rejected",
    "CrawlState",
    "Saved",
    "FetchFailed",
    "WrongContentType",
    "CrawlOutcome",
)
