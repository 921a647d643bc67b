# site_corpus/crawler/metrics.py
"""
Run counters and the end-of-run report.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List

from site_corpus.crawler.models import RejectReason


@dataclass(slots=True)
class RunMetrics:
    """Counters owned by one crawler; they only ever grow."""

    pages_saved: int = 0
    urls_discovered: int = 0
    urls_admitted: int = 0
    fetch_errors: int = 0
    content_type_errors: int = 0
    store_errors: int = 0
    robots_blocked: int = 0
    parse_errors: int = 0
    rejected: Counter = field(default_factory=Counter)

    def record_rejection(self, reason: RejectReason) -> None:
        self.rejected[reason.value] += 1

    def as_dict(self) -> Dict[str, Any]:
        return {
            "pages_saved": self.pages_saved,
            "urls_discovered": self.urls_discovered,
            "urls_admitted": self.urls_admitted,
            "fetch_errors": self.fetch_errors,
            "content_type_errors": self.content_type_errors,
            "store_errors": self.store_errors,
            "robots_blocked": self.robots_blocked,
            "parse_errors": self.parse_errors,
            "rejected": dict(sorted(self.rejected.items())),
        }


@dataclass(slots=True)
class CrawlReport:
    """Snapshot of a finished run."""

    seed_url: str
    metrics: RunMetrics
    seen_count: int
    queued_count: int
    elapsed: float
    finished_by: str
    pending: List[str] = field(default_factory=list)

    @property
    def pages_per_second(self) -> float:
        return self.metrics.pages_saved / self.elapsed if self.elapsed else 0.0

    def as_dict(self) -> Dict[str, Any]:
        return {
            "seed_url": self.seed_url,
            "finished_by": self.finished_by,
            "elapsed_seconds": round(self.elapsed, 3),
            "seen_count": self.seen_count,
            "queued_count": self.queued_count,
            **self.metrics.as_dict(),
            "pending": list(self.pending),
        }

    def summary_lines(self) -> List[str]:
        m = self.metrics
        minutes, seconds = divmod(int(self.elapsed), 60)
        hours, minutes = divmod(minutes, 60)
        return [
            f"Crawled pages:       {m.pages_saved}",
            f"Unique URLs seen:    {self.seen_count}",
            f"URLs still queued:   {self.queued_count}",
            f"Links discovered:    {m.urls_discovered}",
            f"URLs admitted:       {m.urls_admitted}",
            f"Fetch errors:        {m.fetch_errors}",
            f"Content-type errors: {m.content_type_errors}",
            f"Store errors:        {m.store_errors}",
            f"Blocked by robots:   {m.robots_blocked}",
            f"Finished by:         {self.finished_by}",
            f"Total time:          {hours}:{minutes:02d}:{seconds:02d}",
        ]


__all__ = ("RunMetrics", "CrawlReport")
