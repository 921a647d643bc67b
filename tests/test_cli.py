# File: tests/test_cli.py
"""Тесты для CLI с использованием click.testing.CliRunner.
Проверяют команды `crawl`, `config`, `--version`, а также обработку ошибок.
"""
import importlib
import json

import pytest
from click.testing import CliRunner

from site_corpus.cli import cli
from site_corpus.crawler.metrics import CrawlReport, RunMetrics
from site_corpus.logger import configure

cli_module = importlib.import_module("site_corpus.cli")


@pytest.fixture(autouse=True)
def restore_logging():
    """CLI переключает логгер на поток CliRunner; возвращаем обычный stdout."""
    yield
    configure()


@pytest.fixture(autouse=True)
def patch_start_crawl(monkeypatch):
    """Патчим start_crawl: отчёт-заглушка без сетевого обхода."""
    seen = {}

    async def fake_crawl(cfg):
        seen["config"] = cfg
        return CrawlReport(
            seed_url=cfg.seed,
            metrics=RunMetrics(pages_saved=2, urls_discovered=4, urls_admitted=1),
            seen_count=2,
            queued_count=0,
            elapsed=0.5,
            finished_by="exhausted",
        )

    monkeypatch.setattr(cli_module, "start_crawl", fake_crawl)
    return seen


@pytest.fixture()
def cfg_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "seed_url: https://example.com\nmax_pages: 10\nrequest_delay: 0\n",
        encoding="utf-8",
    )
    return path


def test_version_option():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "SiteCorpus" in result.output


def test_show_config(cfg_file):
    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "--limit", "3", "config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["seed_url"] == "https://example.com/"
    assert data["max_pages"] == 3


def test_crawl_prints_summary(cfg_file, patch_start_crawl):
    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "crawl"])
    assert result.exit_code == 0
    assert "Starting crawl: https://example.com" in result.output
    assert "Crawled pages:       2" in result.output
    assert patch_start_crawl["config"].max_pages == 10


def test_crawl_seed_without_config_file(tmp_path, monkeypatch, patch_start_crawl):
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(
        cli, ["--seed", "http://example.org", "--limit", "4", "crawl", "--output-dir", "corpus"]
    )
    assert result.exit_code == 0
    cfg = patch_start_crawl["config"]
    assert cfg.seed == "http://example.org"
    assert cfg.max_pages == 4
    assert str(cfg.output_dir) == "corpus"


def test_crawl_pretty_json_stdout(cfg_file):
    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "crawl", "--pretty"])
    assert result.exit_code == 0
    payload = result.output.split("\n", 1)[1]
    data = json.loads(payload)
    assert data["pages_saved"] == 2
    assert data["seed_url"] == "https://example.com"


def test_crawl_json_and_html_files(cfg_file, tmp_path):
    out_json = tmp_path / "out" / "report.json"
    out_html = tmp_path / "out" / "report.html"
    templates = tmp_path / "tpl"
    templates.mkdir()
    (templates / "report.html.j2").write_text(
        "<p>{{ report.pages_saved }} pages</p>", encoding="utf-8"
    )
    result = CliRunner().invoke(
        cli,
        [
            "--config", str(cfg_file), "crawl",
            "--json", str(out_json),
            "--html", str(out_html),
            "--template", str(templates),
        ],
    )
    assert result.exit_code == 0
    assert json.loads(out_json.read_text(encoding="utf-8"))["urls_discovered"] == 4
    assert out_html.read_text(encoding="utf-8") == "<p>2 pages</p>"


def test_invalid_config_exits_with_error(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(cli, ["crawl"])
    assert result.exit_code == 1
    assert "Ошибка загрузки конфигурации" in result.output



def test_crawl_has_no_run_wide_timeout(cfg_file):
    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "crawl", "--crawl-timeout", "5"])
    assert result.exit_code == 2
    assert "No such option" in result.output
