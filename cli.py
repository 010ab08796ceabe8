#!/usr/bin/env python3
"""IndexNow Submitter: push changed URLs to IndexNow search engines."""

import sys
from pathlib import Path

import click
import requests
from rich.console import Console
from rich.table import Table
from rich import box

from indexnow.config import load_config
from indexnow.errors import ConfigError, ParseError, SubmissionError
from indexnow.log import setup_logging
from indexnow.submitter import IndexNowSubmitter

console = Console()


def _fmt_ms(ms: float) -> str:
    """Format latency: <1000ms as '420ms', >=1000ms as '1.4s'."""
    if ms < 1000:
        return f"{ms:.0f}ms"
    return f"{ms / 1000:.1f}s"


def _print_analytics(submitter: IndexNowSubmitter):
    stats = submitter.get_analytics()
    table = Table(title="IndexNow analytics", box=box.ROUNDED)
    table.add_column("Total", justify="right", style="bold")
    table.add_column("OK", justify="right", style="green")
    table.add_column("Failed", justify="right", style="red")
    table.add_column("Avg response", justify="right", style="cyan")
    table.add_row(
        f"{stats.total_submissions:,}",
        f"{stats.successful_submissions:,}",
        f"{stats.failed_submissions:,}",
        _fmt_ms(stats.average_response_time),
    )
    console.print(table)


def _make_submitter(ctx: click.Context) -> IndexNowSubmitter:
    obj = ctx.obj
    try:
        config = load_config(obj["config_path"], obj["overrides"])
    except ConfigError as e:
        console.print(f"[red]ERROR:[/] {e}")
        console.print("Pass --key/--host, set INDEXNOW_KEY/INDEXNOW_HOST, or add them to config.yaml.")
        sys.exit(2)
    return IndexNowSubmitter(config, client=obj.get("client"))


def _run(submitter: IndexNowSubmitter, action):
    try:
        action()
    except SubmissionError as e:
        console.print(f"[red]x[/] {e}")
        _print_analytics(submitter)
        sys.exit(1)
    except (ParseError, requests.RequestException) as e:
        console.print(f"[red]x[/] {e}")
        sys.exit(1)
    finally:
        submitter.close()
    _print_analytics(submitter)


# ─── CLI ─────────────────────────────────────────────────────────────────


@click.group()
@click.version_option("1.3.1", prog_name="indexnow-submitter")
@click.option("-e", "--engine", default=None, help="Search engine domain (default api.indexnow.org)")
@click.option("-k", "--key", default=None, help="IndexNow API key")
@click.option("-H", "--host", default=None, help="Your website host")
@click.option("-p", "--key-path", default=None, help="URL of the key verification file")
@click.option("-b", "--batch-size", type=int, default=None, help="URLs per request")
@click.option("-r", "--rate-limit", type=int, default=None, help="Delay between batches in milliseconds")
@click.option("-c", "--cache-ttl", type=int, default=None, help="Cache TTL in seconds")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), default=None,
              help="YAML config file (default ./config.yaml)")
@click.option("--log-file", default="indexnow.log", show_default=True, help="Log file; empty to disable")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
@click.pass_context
def cli(ctx, engine, key, host, key_path, batch_size, rate_limit, cache_ttl, config_path, log_file, verbose):
    """IndexNow Submitter: push changed URLs to IndexNow search engines."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["overrides"] = {
        "engine": engine,
        "key": key,
        "host": host,
        "key_path": key_path,
        "batch_size": batch_size,
        "rate_limit_delay": rate_limit,
        "cache_ttl": cache_ttl,
    }
    setup_logging("DEBUG" if verbose else "INFO", log_file or None)


@cli.command()
@click.argument("url")
@click.pass_context
def submit(ctx, url):
    """Submit a single URL."""
    submitter = _make_submitter(ctx)
    _run(submitter, lambda: submitter.submit_single_url(url))


@cli.command("submit-file")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def submit_file(ctx, file):
    """Submit URLs from a file, one per line."""
    submitter = _make_submitter(ctx)
    urls = [line.strip() for line in file.read_text(encoding="utf-8").splitlines() if line.strip()]
    console.print(f"\n[bold]IndexNow: {len(urls)} URLs from {file.name}[/]")
    _run(submitter, lambda: submitter.submit_urls(urls))


@cli.command("submit-sitemap")
@click.argument("url")
@click.option("-d", "--modified-since", type=click.DateTime(["%Y-%m-%d", "%Y-%m-%dT%H:%M:%S"]),
              default=None, help="Only submit URLs modified since this date (UTC)")
@click.pass_context
def submit_sitemap(ctx, url, modified_since):
    """Submit URLs from a sitemap."""
    submitter = _make_submitter(ctx)
    console.print(f"\n[bold]IndexNow: submitting sitemap URLs[/] {url}")
    _run(submitter, lambda: submitter.submit_from_sitemap(url, modified_since))


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
