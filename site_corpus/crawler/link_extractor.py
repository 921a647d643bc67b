# site_corpus/crawler/link_extractor.py
"""
Anchor ``href`` extraction for SiteCorpus.
"""
from __future__ import annotations

from typing import Iterator

from bs4 import BeautifulSoup, SoupStrainer
from bs4.element import Tag

# parse only <a href=...> tags
LINK_STRAINER = SoupStrainer("a", href=True)


def extract_links(html: str) -> Iterator[str]:
    """
    Yield the raw ``href`` value of every anchor in *html*, in document order.

    Values are not resolved or filtered here; that is the normalizer's job.
    The generator is lazy, and calling the function again starts over.
    """
    soup = BeautifulSoup(html, "html.parser", parse_only=LINK_STRAINER)
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href = tag.get("href")
        if isinstance(href, str):
            yield href


__all__ = ("extract_links", "LINK_STRAINER")
