#!/usr/bin/env python3
"""
Точка входа для запуска краулера creepy через командную строку.

Команды:
  crawl      Обойти сайты по конфигу и вывести/сохранить hits, misses, unexhausted
  configure  Напечатать пример конфигурации (YAML)

Общие опции:
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stderr, если не указан)
  --log-format FORMAT Формат логирования

Команда crawl опции:
  --config PATH       Путь к конфигу YAML/JSON/TOML (обязательно)
  --json PATH         Сохранить JSON-отчёт в файл
  --html PATH         Сохранить HTML-отчёт в файл
  --template DIR      Папка с Jinja2-шаблоном report.html.j2
  --pretty            Преформатировать JSON-вывод (отступ 2)
  --scan-timeout SEC  Таймаут всего обхода (секунд)

Пример:
  creepy crawl --config creepy.yaml --json report.json
"""
import asyncio
import json
import sys
from pathlib import Path

import click
from jinja2 import TemplateError

from creepy import __version__
from creepy.config import default_config, dump_config, full_config, load_config
from creepy.crawler.models import ConfigurationError
from creepy.engine import Engine
from creepy.logger import DEFAULT_FORMAT, configure as configure_logging
from creepy.report.html_report import render_html
from creepy.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='creepy, version %(version)s')
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stderr, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT, show_default=True,
    help='Строка формата для логов'
)
def cli(log_level, log_file, log_format):
    """🐛 Creepy crawly web crawler."""
    configure_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format,
    )


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.option(
    '--config', '-c', 'config_path',
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Конфиг: стартовые URL, deny/allow, селекторы и т.д.'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить HTML-отчёт в файл'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Папка с Jinja2-шаблоном (встроенный шаблон, если не указана)'
)
@click.option(
    '--pretty', is_flag=True,
    help='Преформатировать JSON-вывод (отступ 2)'
)
@click.option(
    '--scan-timeout', 'scan_timeout',
    type=float,
    default=None,
    help='Таймаут всего обхода (секунд)'
)
def crawl(config_path, json_output, html_output, template_dir, pretty, scan_timeout):
    """Обойти сайты и вывести hits, misses и unexhausted."""
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')

    try:
        outcome = Engine(cfg, scan_timeout=scan_timeout).run()
    except ConfigurationError as e:
        print_error(f'Ошибка конфигурации: {e}')
    except asyncio.TimeoutError:
        print_error(f'Обход не завершён за {scan_timeout} секунд')

    # Если не сохраняем в файл — печатаем в stdout
    if not json_output and not html_output:
        click.echo(json.dumps(outcome.to_dict(), ensure_ascii=False, indent=2 if pretty else None))
        return

    if json_output:
        try:
            saved_json = render_json(outcome, json_output, pretty=pretty)
            click.echo(f'JSON report: {saved_json}')
        except OSError as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if html_output:
        try:
            saved_html = render_html(outcome, html_output, template_dir)
            click.echo(f'HTML report: {saved_html}')
        except (OSError, TemplateError) as e:
            print_error(f'Ошибка при сохранении HTML: {e}')


@cli.command('configure', context_settings=CONTEXT_SETTINGS)
@click.option('--default', 'kind', flag_value='default', default=True,
              help='Сгенерировать конфигурацию по умолчанию')
@click.option('--full', 'kind', flag_value='full',
              help='Сгенерировать полный пример конфигурации')
def configure(kind):
    """Напечатать пример конфигурации в YAML."""
    cfg = full_config() if kind == 'full' else default_config()
    click.echo(dump_config(cfg), nl=False)


if __name__ == "__main__":
    cli()
