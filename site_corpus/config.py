# === FILE: site_corpus/config.py ===
"""
Модуль для загрузки и валидации конфигурации краулера SiteCorpus.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator

from site_corpus.crawler.normalizer import canonical_seed


class CrawlerConfig(BaseModel):
    """Конфигурация для одного запуска обхода."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    seed_url: HttpUrl = Field(..., description="Стартовый URL обхода (http/https).")
    max_pages: int = Field(100, ge=1, description="Бюджет: сколько страниц сохранить.")
    timeout: float = Field(30.0, gt=0, description="Таймаут на один запрос (секунд).")
    user_agent: str = Field("SiteCorpusBot/1.0", min_length=1, description="Заголовок User-Agent.")
    request_delay: float = Field(0.05, ge=0, description="Пауза между запросами (секунд).")
    retry_times: int = Field(0, ge=0, description="Число повторов при 429/5xx.")
    respect_robots: bool = Field(True, description="Учитывать Disallow из robots.txt.")
    output_dir: Path = Field(Path("Pages"), description="Каталог для сохранённых страниц.")

    @field_validator("seed_url", mode="before")
    def _strip_whitespace(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v

    @property
    def seed(self) -> str:
        """Канонический seed URL (HttpUrl сам добавляет слеш к пустому пути)."""
        return canonical_seed(str(self.seed_url))


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def read_config_data(path: Union[str, Path, None]) -> dict[str, Any]:
    """
    Читает YAML или JSON в словарь без валидации.
    При path=None берётся configs/default.yaml; отсутствующий файл -> FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(_DEFAULT_CFG))
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")


def load_config(path: Union[str, Path, None]) -> CrawlerConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект CrawlerConfig.
    При отсутствии файла конфига бросает FileNotFoundError.
    """
    return CrawlerConfig(**read_config_data(path))


def build_config(path: Union[str, Path, None], **overrides: Any) -> CrawlerConfig:
    """
    Собирает конфиг для CLI: файл (если есть) плюс переопределения из командной строки.

    Значения None в overrides игнорируются. Если path не задан и
    configs/default.yaml отсутствует, конфиг строится только из overrides.
    """
    if path is None and not _DEFAULT_CFG.exists():
        data: dict[str, Any] = {}
    else:
        data = read_config_data(path)
    data.update({k: v for k, v in overrides.items() if v is not None})
    return CrawlerConfig(**data)


__all__ = ["CrawlerConfig", "load_config", "build_config", "read_config_data"]
