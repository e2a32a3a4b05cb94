#!/usr/bin/env python3
"""
Точка входа RichCards через командную строку.

Команды:
  render    Вывести JSON-LD документ NewsArticle для страницы из снимка вики
  annotate  Вставить JSON-LD в <head> готового HTML-файла
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON конфигу сайта (default: configs/site.yaml)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stderr, если не указан)

Дополнительно:
  --version, -v       Показать версию RichCards

Пример:
  rich-cards -c configs/site.yaml render "Main Page" --wiki wiki.yaml --pretty
"""
import json
import sys
from pathlib import Path

import click

from rich_cards import __version__
from rich_cards.article import ArticleMetadataBuilder
from rich_cards.config import load_config
from rich_cards.hooks import on_before_page_display
from rich_cards.logger import init_logging
from rich_cards.output import OutputPage
from rich_cards.parser.html_parser import inject_head_items, parse_html
from rich_cards.wiki import load_wiki

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _prepare(ctx, wiki_path, page_name):
    """Загружает снимок вики и готовит OutputPage для страницы."""
    cfg = ctx.obj['config']
    try:
        wiki = load_wiki(wiki_path)
    except Exception as e:
        print_error(f'Ошибка загрузки снимка вики: {e}')
    page = wiki.find_page(page_name)
    if page is None:
        print_error(f'Страница не найдена: {page_name}')
    out = OutputPage(page.to_title())
    builder = ArticleMetadataBuilder(cfg, wiki.revisions, wiki.files)
    return page, out, builder


def _title_from_html(title, site_name):
    """Отрезает суффикс « - <site_name>» из <title> страницы MediaWiki."""
    suffix = f' - {site_name}'
    if title.endswith(suffix):
        return title[: -len(suffix)]
    return title


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='RichCards, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default='configs/site.yaml',
    show_default=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации сайта (YAML или JSON).'
)
@click.option(
    '--log-level', 'log_level',
    default='WARNING', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stderr, если не указан)'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file):
    """Группа команд RichCards CLI."""
    init_logging(level=log_level, log_file=str(log_file) if log_file else None)
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('render', context_settings=CONTEXT_SETTINGS)
@click.argument('page_name')
@click.option(
    '--wiki', '-w', 'wiki_path',
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Снимок вики (YAML или JSON)'
)
@click.option('--pretty', is_flag=True, help='Преформатировать JSON-вывод (отступ 2)')
@click.pass_context
def render(ctx, page_name, wiki_path, pretty):
    """Вывести JSON-LD для страницы PAGE_NAME."""
    page, out, builder = _prepare(ctx, wiki_path, page_name)
    for image in page.images:
        out.add_image(image)
    if not builder.config.annotate_articles:
        return
    metadata = builder.build(out)
    if metadata is None:
        # не статья: вывода нет
        return
    indent = 2 if pretty else None
    click.echo(json.dumps(metadata.to_jsonld(), ensure_ascii=False, indent=indent))


@cli.command('annotate', context_settings=CONTEXT_SETTINGS)
@click.argument('html_path', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    '--wiki', '-w', 'wiki_path',
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Снимок вики (YAML или JSON)'
)
@click.option(
    '--page', '-p', 'page_name',
    default=None,
    help='Полное имя страницы (по умолчанию — заголовок из HTML)'
)
@click.option(
    '--output', '-o', 'output_path',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Куда сохранить HTML (stdout, если не указан)'
)
@click.pass_context
def annotate(ctx, html_path, wiki_path, page_name, output_path):
    """Вставить JSON-LD в <head> файла HTML_PATH."""
    html = html_path.read_text(encoding='utf-8')
    parsed = parse_html(html)
    if page_name is None:
        page_name = _title_from_html(parsed.title, ctx.obj['config'].site_name)
        if not page_name:
            print_error(f'Не удалось определить страницу по {html_path}, укажите --page')
    _, out, builder = _prepare(ctx, wiki_path, page_name)
    for image in parsed.images:
        out.add_image(image)

    on_before_page_display(out, builder)
    result = inject_head_items(html, out.head_items) if out.head_items else html

    if output_path is None:
        click.echo(result)
        return
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(result, encoding='utf-8')
    except OSError as e:
        print_error(f'Ошибка при сохранении HTML: {e}')
    click.echo(f'HTML: {output_path}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
