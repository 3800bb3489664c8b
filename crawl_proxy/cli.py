#!/usr/bin/env python3
# === FILE: crawl_proxy/cli.py ===
"""
Точка входа для запуска прокси crawl_proxy через командную строку.

Команды:
  serve     Запустить HTTP-сервер (/crawl и /md)
  config    Показать итоговую конфигурацию

Общие опции:
  --config PATH       YAML/JSON-файл конфигурации (необязательно)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования

Команда serve опции:
  --host HOST         Интерфейс (override LISTEN_IP)
  --port PORT         Порт (override LISTEN_PORT)
  --endpoint URL      Эндпоинт crawl4ai (override CRAWL4AI_ENDPOINT)

Дополнительно:
  --version, -v       Показать версию

Пример:
  crawl-proxy --log-level DEBUG serve --port 8080 --endpoint http://localhost:11235/md
"""
import sys
from pathlib import Path

import click

from crawl_proxy import __version__
from crawl_proxy.config import load_config
from crawl_proxy.logger import DEFAULT_FORMAT, configure
from crawl_proxy.server import run

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _resolve_config(config_path, **overrides):
    try:
        return load_config(config_path, overrides=overrides)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='crawl-proxy, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
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
    """crawl4ai proxy: переводит запросы клиента в API crawl4ai."""
    configure(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


@cli.command('serve', context_settings=CONTEXT_SETTINGS)
@click.option('--host', 'listen_ip', default=None, help='Интерфейс для прослушивания')
@click.option('--port', '-p', 'listen_port', type=int, default=None, help='TCP-порт')
@click.option('--endpoint', '-e', 'crawl4ai_endpoint', default=None, help='URL эндпоинта crawl4ai')
@click.pass_context
def serve(ctx, listen_ip, listen_port, crawl4ai_endpoint):
    """Запустить сервер и обслуживать запросы до прерывания."""
    cfg = _resolve_config(
        ctx.obj['config_path'],
        listen_ip=listen_ip,
        listen_port=listen_port,
        crawl4ai_endpoint=crawl4ai_endpoint,
    )
    run(cfg)


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать итоговую конфигурацию в JSON."""
    cfg = _resolve_config(ctx.obj['config_path'])
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
