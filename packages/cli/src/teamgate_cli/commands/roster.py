"""roster command — list the members of a team."""

from __future__ import annotations

import click
from rich.console import Console

from teamgate_core.errors import TeamGateError
from teamgate_core.gh.pull_request import fetch_team_roster, get_client

console = Console()


@click.command("roster")
@click.option("--team", "team_name", required=True, help="Team slug.")
@click.option("--org", default=None, help="Organisation that owns the team. Defaults to `org` in the config file.")
@click.pass_context
def roster_cmd(ctx, team_name: str, org: str | None):
    """Show who currently counts as a member of a team.

    Useful for confirming that the token can see the team before wiring
    `teamgate check` into a workflow.
    """
    from teamgate_cli.auth import resolve_github_token
    from teamgate_core.config import load_config

    if not org:
        try:
            org = load_config((ctx.obj or {}).get("config_path", ".teamgate.yml")).get("org")
        except TeamGateError as e:
            raise click.ClickException(str(e)) from e
    if not org:
        raise click.UsageError("No organisation given. Pass --org or set `org` in the config file.")

    token = resolve_github_token()
    if not token:
        raise click.UsageError("No GitHub token found. Set GITHUB_TOKEN or run `gh auth login` first.")

    try:
        members = fetch_team_roster(get_client(token), org, team_name)
    except TeamGateError as e:
        raise click.ClickException(str(e)) from e

    if not members:
        console.print(f"[yellow]{org}/{team_name} has no members.[/yellow]")
        return

    console.print(f"[bold]{org}/{team_name}[/bold] — {len(members)} member(s)")
    for login in sorted(members):
        console.print(f"  @{login}")
