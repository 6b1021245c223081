# creepy/report/json_report.py

"""
Генерация JSON-отчёта для проекта creepy.

Сериализация объекта CrawlOutcome в файл.
"""
import json
from pathlib import Path

from creepy.crawler.models import CrawlOutcome


def render_json(outcome: CrawlOutcome, output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Сохраняет outcome в формате JSON по указанному пути.

    :param outcome: результат обхода (hits, misses, unexhausted)
    :param output_path: путь к JSON-файлу
    :param pretty: отступ 2 вместо однострочного вывода
    :return: Path сохранённого файла
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(outcome.to_dict(), f, ensure_ascii=False, indent=2 if pretty else None)

    return output
