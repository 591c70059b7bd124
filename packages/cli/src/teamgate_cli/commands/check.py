"""check command — evaluate team approvals on a pull request and report the result."""

from __future__ import annotations

import os

import click
from rich.console import Console
from rich.table import Table

from teamgate_core.checker import CheckSummary, run_check
from teamgate_core.errors import NoPullRequestContext, TeamGateError
from teamgate_core.gh.event import load_event_context
from teamgate_core.gh.pull_request import get_client, get_repo
from teamgate_core.models import PullRequestContext, ReviewState
from teamgate_report.models import StatusRecord

console = Console()

_STATE_STYLE = {
    ReviewState.APPROVED: "green",
    ReviewState.CHANGES_REQUESTED: "red",
    ReviewState.COMMENTED: "yellow",
    ReviewState.DISMISSED: "dim",
}


def _summary_to_record(summary: CheckSummary) -> StatusRecord:
    """Map a CheckSummary returned by run_check() to a StatusRecord for the reporters."""
    return StatusRecord(
        repo=summary.repo,
        pr_number=summary.pr_number,
        head_sha=summary.head_sha,
        team=summary.team,
        required=summary.required,
        approval_count=summary.approval_count,
        satisfied=summary.satisfied,
        checked_at=summary.checked_at,
        approvers=summary.approvers,
        latest_states={login: state.value for login, state in summary.latest_states.items()},
    )


def _build_reporters(config: dict, repo_obj, dry_run: bool) -> list:
    """Instantiate the reporters named in config["report"].

    report: [status] → CommitStatusReporter (commit status on the PR head)
    report: [output] → ActionOutputReporter ($GITHUB_OUTPUT / $GITHUB_STEP_SUMMARY)
    --dry-run        → NoOpReporter only
    """
    from teamgate_report.noop import NoOpReporter

    if dry_run:
        return [NoOpReporter()]

    reporters = []
    for name in config.get("report", []):
        if name == "status":
            from teamgate_report.commit_status import CommitStatusReporter

            reporters.append(CommitStatusReporter(repo_obj, context=config["status_context"], target_url=_run_url()))
        elif name == "output":
            from teamgate_report.action_output import ActionOutputReporter

            reporters.append(ActionOutputReporter())
    return reporters or [NoOpReporter()]


def _run_url() -> str | None:
    server = os.environ.get("GITHUB_SERVER_URL")
    repo = os.environ.get("GITHUB_REPOSITORY")
    run_id = os.environ.get("GITHUB_RUN_ID")
    if server and repo and run_id:
        return f"{server}/{repo}/actions/runs/{run_id}"
    return None


def _print_states(summary: CheckSummary) -> None:
    if not summary.latest_states:
        console.print(f"[yellow]No reviews from members of {summary.org}/{summary.team}.[/yellow]")
        return

    table = Table(
        title=f"Team reviews — {summary.repo}#{summary.pr_number}", show_header=True, header_style="bold cyan"
    )
    table.add_column("Reviewer", style="bold")
    table.add_column("Latest state", width=20)

    for login, state in sorted(summary.latest_states.items()):
        style = _STATE_STYLE.get(state, "white")
        table.add_row(f"@{login}", f"[{style}]{state.value}[/{style}]")

    console.print(table)


@click.command("check")
@click.option("--repo", default=None, help="GitHub repository in owner/name format. Defaults to the event payload.")
@click.option("--pr", "pr_number", type=int, default=None, help="Pull request number. Requires --repo.")
@click.option(
    "--event-path",
    default=None,
    envvar="GITHUB_EVENT_PATH",
    help="Path to the GitHub Actions event payload.",
)
@click.option("--team", "team_name", default=None, help="Team slug whose approvals count. Overrides config file.")
@click.option("--org", default=None, help="Organisation that owns the team. Defaults to the repository owner.")
@click.option(
    "--required-approvals",
    default=None,
    help="Minimum number of distinct team approvals. Overrides config file.",
)
@click.option("--dry-run", is_flag=True, help="Evaluate and print the result without reporting it to GitHub.")
@click.pass_context
def check_cmd(
    ctx,
    repo: str | None,
    pr_number: int | None,
    event_path: str | None,
    team_name: str | None,
    org: str | None,
    required_approvals: str | None,
    dry_run: bool,
):
    """Check that enough members of a team approved a pull request.

    Counts each team member once, by their most recent review. The result
    is reported as a commit status and as GitHub Actions step outputs.

    \b
    Required environment variables:
      GITHUB_TOKEN         GitHub token with read:org scope (or use gh CLI)
    """
    from teamgate_cli.auth import resolve_github_token
    from teamgate_core.config import load_config, validate_config

    config_path = (ctx.obj or {}).get("config_path", ".teamgate.yml")

    try:
        if pr_number is not None:
            if not repo:
                raise click.UsageError("--pr requires --repo.")
            context = PullRequestContext(repo=repo, number=pr_number)
        else:
            context = load_event_context(event_path, repository=repo)
    except NoPullRequestContext:
        console.print("No pull request found.")
        return
    except TeamGateError as e:
        raise click.ClickException(str(e)) from e

    try:
        config = load_config(
            config_path,
            cli_overrides={"team_name": team_name, "org": org, "required_approvals": required_approvals},
        )
        validate_config(config)
    except TeamGateError as e:
        raise click.ClickException(str(e)) from e

    token = resolve_github_token()
    if not token:
        raise click.UsageError(
            "No GitHub token found. Set GITHUB_TOKEN or run `gh auth login` first.\n"
            "Create a token at https://github.com/settings/tokens"
        )
    config["github_token"] = token

    reporters = []
    try:
        client = get_client(token)
        this_repo = get_repo(context.repo, client=client)
        summary = run_check(context, config, client=client, repo_obj=this_repo)
        _print_states(summary)

        record = _summary_to_record(summary)
        reporters = _build_reporters(config, this_repo, dry_run)
        for reporter in reporters:
            reporter.report(record)
    except TeamGateError as e:
        raise click.ClickException(str(e)) from e
    finally:
        for reporter in reporters:
            reporter.close()

    if dry_run:
        console.print(f"[dim]Dry run: {record.state} status not reported.[/dim]")

    if not summary.satisfied and config.get("fail_on_unsatisfied"):
        ctx.exit(1)
