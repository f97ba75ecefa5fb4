"""stockagent CLI - Command Line Interface."""

import asyncio
import sys

import click
from loguru import logger

from stockagent import __version__
from stockagent.agentic.streaming.formatters import tag

USAGE = "Usage: stockagent <TICKER>"
EXAMPLE = "Example: stockagent AAPL"


def configure_logging(level: str) -> None:
    """Send diagnostic logs to stderr so they stay out of the transcript."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


@click.command()
@click.argument("ticker", required=False)
@click.version_option(__version__)
def cli(ticker: str | None):
    """
    Research a stock ticker with a supervised multi-agent run.

    A coordinator delegates web research and report writing to sub-agents,
    then has the Wayfound supervisor grade the session and revises the
    report until the grade is A- or better.

    Examples:
        stockagent AAPL
        stockagent NVDA
    """
    if not ticker:
        click.echo(USAGE, err=True)
        click.echo(EXAMPLE, err=True)
        sys.exit(1)

    from stockagent.agentic.runner import run_research
    from stockagent.settings import settings

    configure_logging(settings.log_level)

    try:
        asyncio.run(run_research(ticker, config=settings))
    except Exception as e:
        click.echo()
        click.echo(tag("ERROR") + str(e), err=True)
        logger.exception(f"Research run for {ticker} failed")
        sys.exit(1)


if __name__ == "__main__":
    cli()
