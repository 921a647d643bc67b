# site_corpus/crawler/robots.py
"""
Parser and checker for robots.txt ``Disallow`` rules.

Only the literal ``Disallow:`` directive is understood; user-agent groups,
``Allow``, wildcards and crawl-delay are ignored. Matching is a plain
path-prefix test.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Iterator
from urllib.parse import urlsplit

_DIRECTIVE = "Disallow:"


@dataclass(frozen=True)
class DisallowRules:
    """Immutable set of disallowed path prefixes, built once per run."""

    prefixes: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def parse(cls, text: str) -> DisallowRules:
        return cls(frozenset(_disallowed_paths(text)))

    def is_disallowed(self, url: str) -> bool:
        """True if the path of *url* starts with any disallowed prefix."""
        path = urlsplit(url).path or "/"
        return any(path.startswith(prefix) for prefix in self.prefixes)

    def __len__(self) -> int:
        return len(self.prefixes)

    def __bool__(self) -> bool:
        return bool(self.prefixes)


def _disallowed_paths(text: str) -> Iterator[str]:
    for raw in text.splitlines():
        line = raw.strip()
        if not line.startswith(_DIRECTIVE):
            continue
        value = line.partition(":")[2].split("#", 1)[0].strip()
        # empty Disallow means "allow everything", skip it
        if not value:
            continue
        yield value


def parse_robots(text: str) -> DisallowRules:
    """Parse a robots.txt body into :class:`DisallowRules`."""
    return DisallowRules.parse(text)


def is_disallowed(url: str, rules: DisallowRules) -> bool:
    return rules.is_disallowed(url)


__all__ = ("DisallowRules", "parse_robots", "is_disallowed")
