# File: site_corpus/storage.py
"""site_corpus.storage: Хранилище скачанных страниц (корпус HTML + список URL)."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, Union

from site_corpus.logger import logger

__all__ = ["PageStore", "StoreError", "AppendFileStore"]


class StoreError(Exception):
    """Страницу не удалось сохранить."""


class PageStore(Protocol):
    def store(self, url: str, content: str) -> None: ...


class AppendFileStore:
    """
    Дописывает HTML всех страниц в один файл Pages.html, а URL построчно в URLRep.txt.

    Каталог создаётся при первой записи. Запись не атомарна: при падении
    процесса последняя запись может потеряться.
    """

    PAGES_FILE = "Pages.html"
    URLS_FILE = "URLRep.txt"

    def __init__(self, directory: Union[str, Path]) -> None:
        self.directory = Path(directory)

    @property
    def pages_path(self) -> Path:
        return self.directory / self.PAGES_FILE

    @property
    def urls_path(self) -> Path:
        return self.directory / self.URLS_FILE

    def store(self, url: str, content: str) -> None:
        """Сохраняет страницу; любые ошибки ввода-вывода превращаются в StoreError."""
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with self.pages_path.open("a", encoding="utf-8") as f:
                f.write(content)
            with self.urls_path.open("a", encoding="utf-8") as f:
                f.write(url + "\n")
        except OSError as exc:
            raise StoreError(f"Не удалось сохранить {url} в {self.directory}: {exc}") from exc
        logger.debug("Stored %s (%d chars)", url, len(content))
