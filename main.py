#!/usr/bin/env python3
"""
FeedTree - RSS to Element Tree Converter
========================================

Command line entry point.

Usage:
    python main.py --help                    # Show all commands
    python main.py parse feed.xml            # Parse a local feed document
    python main.py parse - < feed.xml        # Parse from stdin
    python main.py fetch @username           # Fetch and parse a Medium feed
    python main.py check-config              # Show effective configuration
"""

import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

# Add project root to Python path
sys.path.insert(0, str(Path(__file__).parent))

from feedtree.config.settings import get_settings
from feedtree.content.classify import count_blocks
from feedtree.fetching.feed_fetcher import FeedFetcher
from feedtree.models.feed import Feed
from feedtree.processing.pipeline import FeedParser
from feedtree.utils.exceptions import FeedTreeError, handle_exception
from feedtree.utils.logging import configure_application_logging, get_logger_for_component
from feedtree.utils.validators import validate_url

console = Console()
err_console = Console(stderr=True)


@click.group(invoke_without_command=True)
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, debug):
    """FeedTree - convert RSS feeds into typed element trees."""
    ctx.ensure_object(dict)

    try:
        settings = get_settings()
    except FeedTreeError as e:
        err_console.print(f"[bold red]❌ {e.user_message}[/bold red]")
        sys.exit(1)

    configure_application_logging(
        log_level="DEBUG" if debug else settings.get_effective_log_level(),
        log_file=settings.logging.file_path,
        enable_console=settings.logging.console_logging,
        structured_logging=settings.logging.structured_logging,
        max_file_size_mb=settings.logging.max_file_size_mb,
        backup_count=settings.logging.backup_count,
    )
    ctx.obj['settings'] = settings

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


def _emit(feed: Feed, output, indent: int, summary: bool) -> None:
    """Write the feed as JSON (stdout or file) or as a summary table."""
    if summary:
        table = Table(title=feed.title or "Feed")
        table.add_column("#", style="cyan", justify="right")
        table.add_column("Title", style="green")
        table.add_column("Published")
        table.add_column("Categories")
        table.add_column("Blocks", justify="right")

        for index, post in enumerate(feed.posts, 1):
            table.add_row(
                str(index),
                post.title,
                post.published,
                ", ".join(post.categories),
                str(count_blocks(post.content)),
            )

        console.print(table)
        return

    payload = feed.to_json(indent=indent if indent > 0 else None)
    if output:
        Path(output).write_text(payload + "\n", encoding="utf-8")
        err_console.print(f"[green]✅ Wrote {len(feed.posts)} posts to {output}[/green]")
    else:
        click.echo(payload)


def _fail(error: Exception, operation: str) -> None:
    logger = get_logger_for_component("cli")
    error = handle_exception(error, logger, operation)
    err_console.print(f"[bold red]❌ {error.user_message}[/bold red]")
    sys.exit(1)


@cli.command()
@click.argument('source', type=click.File('rb'))
@click.option('--output', '-o', type=click.Path(dir_okay=False), help='Write JSON to this file instead of stdout')
@click.option('--indent', default=2, show_default=True, help='JSON indentation (0 for compact)')
@click.option('--summary', is_flag=True, help='Print a table of posts instead of JSON')
@click.pass_context
def parse(ctx, source, output, indent, summary):
    """Parse a feed document from a file (or - for stdin)."""
    try:
        feed = FeedParser(ctx.obj['settings'].parser).parse(source.read(), source=getattr(source, "name", "<stdin>"))
        _emit(feed, output, indent, summary)
    except Exception as e:
        _fail(e, "parse feed")


@cli.command()
@click.argument('target')
@click.option('--output', '-o', type=click.Path(dir_okay=False), help='Write JSON to this file instead of stdout')
@click.option('--indent', default=2, show_default=True, help='JSON indentation (0 for compact)')
@click.option('--summary', is_flag=True, help='Print a table of posts instead of JSON')
@click.pass_context
def fetch(ctx, target, output, indent, summary):
    """Fetch and parse a feed by username (e.g. @someone) or full URL."""
    settings = ctx.obj['settings']
    try:
        with FeedFetcher(settings.fetch) as fetcher:
            url = target if validate_url(target) else fetcher.build_feed_url(target)
            data = fetcher.fetch_url(url)
        feed = FeedParser(settings.parser).parse(data, source=url)
        _emit(feed, output, indent, summary)
    except Exception as e:
        _fail(e, "fetch feed")


@cli.command()
@click.pass_context
def check_config(ctx):
    """Show the effective configuration."""
    settings = ctx.obj['settings']

    table = Table(title="FeedTree Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    for section_name in ("parser", "fetch", "logging"):
        section = getattr(settings, section_name)
        for key, value in section.model_dump(mode="json").items():
            table.add_row(f"{section_name}.{key}", str(value))

    table.add_row("debug", str(settings.debug))
    console.print(table)


if __name__ == '__main__':
    cli()
