# === FILE: butler/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска краулера Butler через командную строку.

Команды:
  crawl     Обойти разрешённые домены и записать отчёты
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к конфигу JSON/YAML (default: config.json)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования (e.g. "%(asctime)s %(levelname)s %(message)s")

Команда crawl опции:
  --report DIR        Каталог отчётов (default: report)
  --pool-size INT     Число воркеров (override pool_size)
  --crawl-timeout SEC Таймаут всего обхода (секунд)

Дополнительно:
  --version, -v       Показать версию Butler

Пример:
  butler --config config.json crawl --report report --pool-size 4
"""
import asyncio
import sys
from pathlib import Path

import click

from butler import __version__
from butler.config import load_config
from butler.logger import DEFAULT_FORMAT, init_logging
from butler.scanner import start_crawl

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='Butler, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default='config.json',
    show_default=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации JSON или YAML.'
)
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
    help='Путь к файлу логов (stdout, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд Butler CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.option(
    '--report', '-r', 'report_dir',
    default='report',
    show_default=True,
    type=click.Path(file_okay=False, path_type=Path),
    help='Каталог для отчётов (пересоздаётся при запуске)'
)
@click.option(
    '--pool-size', '-p', 'pool_size',
    type=click.IntRange(min=1),
    default=None,
    help='Число параллельных воркеров (override pool_size)'
)
@click.option(
    '--crawl-timeout', 'crawl_timeout',
    type=float,
    default=None,
    help='Таймаут всего обхода (секунд)'
)
@click.pass_context
def crawl(ctx, report_dir, pool_size, crawl_timeout):
    """Обойти разрешённые домены и сгенерировать отчёты."""
    cfg = ctx.obj['config']
    click.echo(f'Starting crawl of: {", ".join(cfg.domains)}')
    try:
        if crawl_timeout:
            stats = asyncio.run(
                asyncio.wait_for(start_crawl(cfg, report_dir, pool_size), timeout=crawl_timeout)
            )
        else:
            stats = asyncio.run(start_crawl(cfg, report_dir, pool_size))
    except asyncio.TimeoutError:
        print_error(f'Обход не завершён за {crawl_timeout} секунд')
    except Exception as e:
        print_error(f'Ошибка при обходе: {e}')

    click.echo(
        f'Crawled {stats.succeeded} pages, {stats.errors} errors, '
        f'{stats.ignored} ignored in {stats.elapsed:.2f}s'
    )
    click.echo(f'Reports: {report_dir}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
