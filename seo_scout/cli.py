# === FILE: seo_scout/cli.py ===
#!/usr/bin/env python3
"""
Command-line entry point for the SEO Scout crawler.

Commands:
  crawl URL   Crawl a website for on-page SEO issues
  config      Show the effective crawler options

Global options:
  --config PATH       YAML/JSON file with crawler options (configs/default.yaml if present)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (console only when omitted)
  --log-format FORMAT Logging format string
  --verbose, -V       Shortcut for --log-level DEBUG

crawl options:
  --depth, -d N        Maximum crawl depth
  --limit, -l N        Maximum pages to crawl
  --concurrency, -c N  Concurrent requests
  --rate, -r N         Maximum requests per second
  --timeout SEC        Timeout per request
  --format, -f FMT     table, json or csv on stdout
  --json PATH          Also save the JSON report to a file
  --html PATH          Also save the HTML report to a file
  --template DIR       Folder with report.html.j2
  --pretty             Indent JSON output
  --crawl-timeout SEC  Abort when the whole crawl takes longer

Example:
  seo-scout crawl example.com --depth 2 --limit 50 --format json --pretty
"""
import asyncio
import sys
import time
from pathlib import Path

import click
from pydantic import ValidationError

from seo_scout import __version__
from seo_scout.config import load_config
from seo_scout.engine import start_crawl
from seo_scout.logger import LogConfig
from seo_scout.report.csv_report import render_csv
from seo_scout.report.html_report import render_html
from seo_scout.report.json_report import render_json
from seo_scout.report.table_report import render_table
from seo_scout.utils import format_duration, validate_url

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(f"✗ {message}", fg='red', err=True)
    sys.exit(1)


def info(message: str) -> None:
    click.echo(f"{click.style('ℹ', fg='blue')} {message}", err=True)


def success(message: str) -> None:
    click.echo(f"{click.style('✓', fg='green')} {message}", err=True)


def progress_printer(interval: float = 1.0):
    """Progress callback that rewrites one stderr line at most every *interval* seconds."""
    last = 0.0

    def _report(crawled: int, queued: int) -> None:
        nonlocal last
        now = time.monotonic()
        if now - last > interval:
            click.echo(f"\r  Crawled: {crawled} | Queued: {queued}    ", nl=False, err=True)
            last = now

    return _report


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SEO Scout, version %(version)s')
@click.option(
    '--config', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to a YAML/JSON file with crawler options.'
)
@click.option(
    '--log-level', 'log_level',
    default='WARNING', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file (console only when omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Format string for log records'
)
@click.option('--verbose', '-V', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format, verbose):
    """SEO Scout: crawl a website and report on-page SEO issues."""
    log_config = LogConfig.from_verbose(
        verbose,
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format,
    )
    try:
        options = load_config(config_path)
    except Exception as e:
        print_error(f'Failed to load configuration: {e}')
    ctx.ensure_object(dict)
    ctx.obj['options'] = options
    ctx.obj['log'] = log_config.apply()


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.option('--depth', '-d', type=int, default=None, help='Maximum crawl depth [3]')
@click.option('--limit', '-l', type=int, default=None, help='Maximum pages to crawl [100]')
@click.option('--concurrency', '-c', type=int, default=None, help='Concurrent requests [5]')
@click.option('--rate', '-r', type=float, default=None, help='Max requests per second [10]')
@click.option('--timeout', type=float, default=None, help='Timeout per request in seconds [10]')
@click.option(
    '--format', '-f', 'output_format',
    type=click.Choice(['table', 'json', 'csv']),
    default='table', show_default=True,
    help='Output format on stdout'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save the JSON report to a file'
)
@click.option(
    '--html', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save the HTML report to a file'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Folder with report.html.j2 (packaged template by default)'
)
@click.option('--pretty', is_flag=True, help='Indent JSON output by 2 spaces')
@click.option(
    '--crawl-timeout', 'crawl_timeout',
    type=float,
    default=None,
    help='Timeout for the whole crawl (seconds)'
)
@click.pass_context
def crawl(ctx, url, depth, limit, concurrency, rate, timeout, output_format,
          json_output, html_output, template_dir, pretty, crawl_timeout):
    """Crawl URL and report SEO issues."""
    try:
        url = validate_url(url)
    except ValueError as e:
        print_error(f'Invalid URL: {e}')

    try:
        options = ctx.obj['options'].with_overrides(
            max_depth=depth,
            max_pages=limit,
            concurrency=concurrency,
            requests_per_second=rate,
            timeout=timeout,
        )
    except ValidationError as e:
        print_error(f'Invalid option: {e}')

    info(f'Starting crawl of {url}')
    info(
        f'Depth: {options.max_depth}, Max pages: {options.max_pages}, '
        f'Concurrency: {options.concurrency}, Rate: {options.requests_per_second:g}/s'
    )

    started = time.monotonic()
    job = start_crawl(url, options, on_progress=progress_printer(), log=ctx.obj['log'])
    try:
        if crawl_timeout:
            report = asyncio.run(asyncio.wait_for(job, timeout=crawl_timeout))
        else:
            report = asyncio.run(job)
    except asyncio.TimeoutError:
        print_error(f'Crawl did not finish within {crawl_timeout} seconds')
    except Exception as e:
        print_error(f'Crawl failed: {e}')

    click.echo('\r' + ' ' * 50 + '\r', nl=False, err=True)
    success(
        f'Crawl complete! Analyzed {len(report.pages)} pages '
        f'in {format_duration(time.monotonic() - started)}.'
    )

    if output_format == 'json':
        click.echo(report.json(pretty=pretty))
    elif output_format == 'csv':
        click.echo(render_csv(report.pages), nl=False)
    else:
        click.echo(render_table(report.summary))

    if json_output:
        try:
            saved_json = render_json(report, json_output, pretty=pretty)
            info(f'JSON report: {saved_json}')
        except Exception as e:
            print_error(f'Failed to save JSON report: {e}')

    if html_output:
        try:
            saved_html = render_html(report, template_dir, html_output)
            info(f'HTML report: {saved_html}')
        except Exception as e:
            print_error(f'Failed to save HTML report: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Show the effective crawler options as JSON."""
    click.echo(ctx.obj['options'].model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
