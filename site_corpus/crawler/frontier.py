# site_corpus/crawler/frontier.py
"""
Crawl frontier: FIFO queue of URLs to visit plus the set of every URL ever queued.
"""
from __future__ import annotations

from collections import deque
from typing import Deque, Optional, Set, Tuple


class Frontier:
    """Breadth-first work queue with lifetime dedup.

    A URL enters the queue at most once per run: ``seen`` only grows, so a
    dequeued URL is never queued again. :meth:`enqueue_if_new` is the single
    check-and-append step; guard it with one lock if fetches ever run
    concurrently.
    """

    def __init__(self, seed: str) -> None:
        self._seen: Set[str] = {seed}
        self._queue: Deque[str] = deque([seed])

    def enqueue_if_new(self, url: str) -> bool:
        """Queue *url* unless it was seen before. Returns True if it was added."""
        if url in self._seen:
            return False
        self._seen.add(url)
        self._queue.append(url)
        return True

    def dequeue(self) -> Optional[str]:
        """Pop the oldest queued URL, or None when the queue is empty."""
        if not self._queue:
            return None
        return self._queue.popleft()

    def has_next(self) -> bool:
        return bool(self._queue)

    def size(self) -> int:
        return len(self._queue)

    def seen_count(self) -> int:
        return len(self._seen)

    def pending(self) -> Tuple[str, ...]:
        return tuple(self._queue)

    def __len__(self) -> int:
        return len(self._queue)

    def __contains__(self, url: object) -> bool:
        return url in self._seen


__all__ = ("Frontier",)
