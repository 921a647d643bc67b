# File: tests/test_link_extractor.py
from site_corpus.crawler.link_extractor import extract_links

PAGE = """
<html><head><link href="/style.css" rel="stylesheet"></head>
<body>
  <a href="/first">1</a>
  <p><A HREF='/second'>2</A></p>
  <a name="anchor-without-href">x</a>
  <a href="mailto:x@example.com">mail</a>
  <a href="/first">again</a>
</body></html>
"""


def test_hrefs_in_document_order_including_duplicates():
    assert list(extract_links(PAGE)) == [
        "/first",
        "/second",
        "mailto:x@example.com",
        "/first",
    ]


def test_only_anchor_tags():
    assert "/style.css" not in list(extract_links(PAGE))


def test_lazy_and_restartable():
    links = extract_links(PAGE)
    assert next(links) == "/first"
    assert list(extract_links(PAGE))[0] == "/first"


def test_no_links():
    assert list(extract_links("<html><body>plain</body></html>")) == []
    assert list(extract_links("")) == []
