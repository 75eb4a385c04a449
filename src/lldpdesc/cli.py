"""
lldpdesc CLI - Main entry point for the command-line interface.
"""

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from lldpdesc import __version__

console = Console()

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def configure_logging(level: str) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(version=__version__, prog_name="lldpdesc")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    envvar="LLDPDESC_LOG_LEVEL",
    help="Logging level (default: WARNING)",
)
@click.pass_context
def main(ctx: click.Context, log_level: str) -> None:
    """lldpdesc - LLDP driven interface descriptions over gNMI

    Reads LLDP neighbor state from a device and labels each local
    interface with the neighbor connected to it.
    """
    configure_logging(log_level.upper())
    ctx.ensure_object(dict)
    ctx.obj["console"] = console


from lldpdesc.neighbors.cli import sync, show

main.add_command(sync)
main.add_command(show)


if __name__ == "__main__":
    main()
