"""CLI entry point for teamgate.

Commands:
  check   — decide whether a PR has enough approvals from a team and report it
  roster  — list the current members of a team
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from teamgate_cli.commands.check import check_cmd
from teamgate_cli.commands.roster import roster_cmd

console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(
    version=importlib.metadata.version("teamgate"),
    prog_name="teamgate",
)
@click.option(
    "--config",
    "config_path",
    default=".teamgate.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="TEAMGATE_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Require approvals from members of a GitHub team before a PR passes."""
    _configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


main.add_command(check_cmd)
main.add_command(roster_cmd)
