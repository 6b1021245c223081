# File: creepy/report/html_report.py
"""creepy.report.html_report: Генерация HTML-отчёта с помощью Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union

from jinja2 import BaseLoader, Environment, FileSystemLoader, select_autoescape

from creepy.crawler.models import CrawlOutcome

TEMPLATE_NAME = "report.html.j2"

_BUILTIN_TEMPLATE = """<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>creepy crawl report</title></head>
<body>
{% for title, urls in sections %}
<h2>{{ title }} ({{ urls|length }})</h2>
<ul>
{% for url in urls %}  <li><a href="{{ url }}">{{ url }}</a></li>
{% endfor %}</ul>
{% endfor %}
</body>
</html>
"""


def render_html(
    outcome: CrawlOutcome,
    output_path: Union[Path, str],
    template_dir: Optional[Union[Path, str]] = None,
) -> Path:
    """Рендерит HTML-отчёт и сохраняет его по указанному пути.

    Args:
        outcome: результат обхода.
        output_path: путь к итоговому HTML-файлу.
        template_dir: директория с шаблоном ``report.html.j2``;
            без неё используется встроенный шаблон.

    Returns:
        Path до сохранённого HTML-файла.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    if template_dir is not None:
        env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            autoescape=select_autoescape(["html", "xml", "j2"]),
        )
        template = env.get_template(TEMPLATE_NAME)
    else:
        env = Environment(loader=BaseLoader(), autoescape=True)
        template = env.from_string(_BUILTIN_TEMPLATE)

    context: dict[str, Any] = {
        "outcome": outcome,
        "sections": [
            ("Hits", outcome.hits),
            ("Misses", outcome.misses),
            ("Unexhausted", outcome.unexhausted),
        ],
    }

    output_path.write_text(template.render(**context), encoding="utf-8")
    return output_path
