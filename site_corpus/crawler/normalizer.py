# site_corpus/crawler/normalizer.py
"""
URL normalization and acceptance rules.

:func:`normalize` turns a raw ``href`` value into a canonical same-host URL or
a :class:`Rejected` carrying the first rule that refused it. Canonical URLs
are absolute, have a lower-cased scheme and host, no default port, no fragment
and no trailing slash; they are the dedup keys of the frontier.
"""
from __future__ import annotations

from typing import Union
from urllib.parse import urlsplit, urlunsplit

from site_corpus.crawler.models import Rejected, RejectReason

_PLACEHOLDER_PREFIXES = ("#", "$")
_NON_HTTP_PREFIXES = ("mailto:", "tel:", "sms:")
_HTTP_PREFIXES = ("http:", "https:")
_DEFAULT_PORTS = {"http": 80, "https": 443}


def _netloc(parts) -> str:
    """Lower-cased host with the port only when it is not the scheme default."""
    host = parts.hostname or ""
    if ":" in host:
        host = f"[{host}]"
    port = parts.port
    if port is not None and port != _DEFAULT_PORTS.get(parts.scheme.lower()):
        host = f"{host}:{port}"
    userinfo = parts.netloc.rpartition("@")[0]
    return f"{userinfo}@{host}" if userinfo else host


def canonical_seed(seed_url: str) -> str:
    """Canonical form of the seed itself, built like the URLs :func:`normalize` returns."""
    parts = urlsplit(seed_url.strip())
    path = parts.path[:-1] if parts.path.endswith("/") else parts.path
    return urlunsplit((parts.scheme.lower(), _netloc(parts), path, parts.query, ""))


def origin_of(url: str) -> str:
    """``scheme://host[:port]`` of *url*, the port only when not the default."""
    parts = urlsplit(url)
    return f"{parts.scheme.lower()}://{_netloc(parts)}"


def normalize(raw_link: str, seed_url: str) -> Union[str, Rejected]:
    """
    Classify *raw_link* found on a page of the site rooted at *seed_url*.

    Rules are applied in order and the first match decides:

    1. empty or whitespace only -> ``empty``
    2. ``#...`` or ``$...`` -> ``fragment-or-placeholder``
    3. ``mailto:``/``tel:``/``sms:`` -> ``non-http-scheme``
    4. explicit ``http(s):`` on another host -> ``cross-host``
       (``//host/path`` borrows the seed scheme and is checked the same way)
    5. ``/path`` is resolved against the seed origin
    6. one trailing ``/`` is stripped, the fragment and a default port dropped
    7. nothing left of the path -> ``no-path-segments``

    Anything else that is not an absolute http(s) URL after these steps is
    ``non-http-scheme`` (``javascript:``, ``ftp:``) or ``malformed``
    (scheme-less relative paths, unparsable hosts or ports). Never raises.
    """
    link = raw_link.strip() if isinstance(raw_link, str) else ""
    if not link:
        return Rejected(RejectReason.EMPTY)
    if link.startswith(_PLACEHOLDER_PREFIXES):
        return Rejected(RejectReason.FRAGMENT_OR_PLACEHOLDER)
    lowered = link.lower()
    if lowered.startswith(_NON_HTTP_PREFIXES):
        return Rejected(RejectReason.NON_HTTP_SCHEME)

    try:
        seed = urlsplit(seed_url)
        if link.startswith("//"):
            link = f"{seed.scheme}:{link}"
            lowered = link.lower()

        if lowered.startswith(_HTTP_PREFIXES):
            parts = urlsplit(link)
            if not parts.hostname or parts.hostname != seed.hostname:
                return Rejected(RejectReason.CROSS_HOST)
        elif link.startswith("/"):
            parts = urlsplit(origin_of(seed_url) + link)
        elif urlsplit(link).scheme:
            return Rejected(RejectReason.NON_HTTP_SCHEME)
        else:
            return Rejected(RejectReason.MALFORMED)

        # raises ValueError on a non-numeric or out-of-range port
        _ = parts.port
    except ValueError:
        return Rejected(RejectReason.MALFORMED)

    path = parts.path[:-1] if parts.path.endswith("/") else parts.path
    if not [segment for segment in path.split("/") if segment]:
        return Rejected(RejectReason.NO_PATH_SEGMENTS)

    return urlunsplit((parts.scheme.lower(), _netloc(parts), path, parts.query, ""))


__all__ = ("normalize", "canonical_seed", "origin_of")
