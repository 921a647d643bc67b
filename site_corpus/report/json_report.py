# site_corpus/report/json_report.py

"""
Генерация JSON-отчёта для проекта SiteCorpus.

Сериализация объекта CrawlReport в файл.
"""
import json
from pathlib import Path

from site_corpus.crawler.metrics import CrawlReport


def render_json(report: CrawlReport, output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Сохраняет отчёт report в формате JSON по указанному пути.

    :param report: объект CrawlReport с итогами обхода
    :param output_path: путь к JSON-файлу
    :param pretty: отступ 2 (иначе компактная запись)
    :return: Path сохранённого файла

    Пример:
    ```python
    from site_corpus.report.json_report import render_json
    report_path = render_json(report, 'reports/report.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(report.as_dict(), f, ensure_ascii=False, indent=2 if pretty else None)

    return output
