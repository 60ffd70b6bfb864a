"""CLI entry point for the job-application tracker."""

import logging

import click
from dotenv import load_dotenv

from jobtrack.config import Settings

logger = logging.getLogger(__name__)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log progress at INFO level.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Job tracker — log postings to Notion and sync statuses from email."""
    load_dotenv()
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
    )
    ctx.obj = Settings.from_env()


# Import and register commands after cli is defined to avoid circular imports.
from jobtrack.cli.commands import log, sync, view  # noqa: E402

cli.add_command(log)
cli.add_command(sync)
cli.add_command(view)
