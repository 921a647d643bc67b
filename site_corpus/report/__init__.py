# File: site_corpus/report/__init__.py
"""site_corpus.report: Генерация отчётов об обходе (JSON и HTML), используется CLI."""

from site_corpus.report.html_report import render_html
from site_corpus.report.json_report import render_json

__all__ = ["render_json", "render_html"]
