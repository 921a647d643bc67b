# File: tests/test_storage.py
import pytest

from site_corpus.storage import AppendFileStore, StoreError


def test_append_file_store_creates_directory_and_appends(tmp_path):
    store = AppendFileStore(tmp_path / "out" / "Pages")
    store.store("http://example.com", "<html>one</html>")
    store.store("http://example.com/a", "<html>two</html>")

    assert store.pages_path.read_text(encoding="utf-8") == "<html>one</html><html>two</html>"
    assert store.urls_path.read_text(encoding="utf-8").splitlines() == [
        "http://example.com",
        "http://example.com/a",
    ]


def test_append_file_store_wraps_os_errors(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a directory", encoding="utf-8")
    store = AppendFileStore(blocker / "Pages")
    with pytest.raises(StoreError):
        store.store("http://example.com", "<html></html>")
