"""creepy.report: Генерация отчётов (JSON и HTML) по результату обхода."""

from creepy.report.html_report import render_html
from creepy.report.json_report import render_json

__all__ = ["render_json", "render_html"]
