"""KnowS tools CLI entrypoint."""

import asyncio
import json
import logging
import sys
from typing import Optional

import click
import structlog

from knows.config.settings import ConfigurationError, get_settings


def setup_logging(log_level: str) -> None:
    """Configure structured logging."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer() if log_level == "DEBUG" else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(level=log_level, stream=sys.stderr, format="%(message)s")


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    default=None,
    help="Set logging level",
)
@click.pass_context
def cli(ctx: click.Context, log_level: Optional[str]) -> None:
    """KnowS Tools - clinical evidence tools for agents."""
    ctx.ensure_object(dict)

    settings = get_settings()
    effective_log_level = log_level or settings.log_level

    setup_logging(effective_log_level)
    ctx.obj["settings"] = settings


def _load_toolkit(ctx: click.Context):
    from knows.tools import build_toolkit

    try:
        return build_toolkit(ctx.obj["settings"])
    except ConfigurationError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)


@cli.command("tools")
@click.pass_context
def list_tools(ctx: click.Context) -> None:
    """List the available tools."""
    toolkit = _load_toolkit(ctx)

    for tool in toolkit:
        click.echo(f"{tool.name}")
        click.echo(f"   {tool.description}")


@cli.command()
@click.argument("name")
@click.pass_context
def describe(ctx: click.Context, name: str) -> None:
    """Show the input schema of a tool."""
    toolkit = _load_toolkit(ctx)

    try:
        tool = toolkit.get(name)
    except KeyError as e:
        click.echo(f"Error: {e.args[0]}", err=True)
        sys.exit(1)

    click.echo(json.dumps(tool.parameters, indent=2))


@cli.command()
@click.argument("name")
@click.argument("arguments", default="{}")
@click.option(
    "--timeout",
    type=float,
    default=None,
    help="Deadline in seconds for the whole call",
)
@click.pass_context
def call(
    ctx: click.Context,
    name: str,
    arguments: str,
    timeout: Optional[float],
) -> None:
    """Call a tool with a JSON object of arguments.

    Example:
        knows call knows_ai_search '{"question": "Adjuvant therapy for stage III colon cancer?"}'
    """
    try:
        args = json.loads(arguments)
    except ValueError as e:
        click.echo(f"Error: arguments must be JSON: {e}", err=True)
        sys.exit(1)

    if not isinstance(args, dict):
        click.echo("Error: arguments must be a JSON object", err=True)
        sys.exit(1)

    toolkit = _load_toolkit(ctx)

    try:
        tool = toolkit.get(name)
    except KeyError as e:
        click.echo(f"Error: {e.args[0]}", err=True)
        sys.exit(1)

    async def run_call():
        async with toolkit:
            return await tool.execute(args, timeout=timeout)

    result = asyncio.run(run_call())

    if result.is_error:
        click.echo(f"Error: {result.content}", err=True)
        sys.exit(1)

    click.echo(json.dumps(result.json_data(), indent=2, ensure_ascii=False))


@cli.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration."""
    settings = ctx.obj["settings"]

    click.echo("KnowS Tools Configuration")
    click.echo("=" * 40)
    click.echo(f"Environment: {settings.environment}")
    click.echo(f"Log Level: {settings.log_level}")
    click.echo(f"API Base URL: {settings.api_base_url or '✗ Not set'}")
    click.echo(f"API Key: {'✓ Set' if settings.api_key else '✗ Not set'}")
    click.echo()
    click.echo("Requests:")
    click.echo(f"  Timeout: {settings.request_timeout}s")
    click.echo(f"  Max Retries: {settings.max_retries}")
    click.echo(f"  Retry Backoff: {settings.retry_backoff}s")
    click.echo(f"  Batch Concurrency: {settings.batch_concurrency}")
    click.echo()
    click.echo("Detail Cache:")
    click.echo(f"  TTL: {settings.cache_ttl}s")
    click.echo(f"  Max Entries: {settings.cache_max_entries}")
    click.echo(f"  Default Data Scope: {', '.join(settings.default_data_scope) or 'all'}")


@cli.command()
def version() -> None:
    """Show version information."""
    from knows import __version__

    click.echo(f"KnowS Tools v{__version__}")


def main() -> None:
    """Main entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
