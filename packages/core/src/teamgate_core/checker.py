"""Core team-approval check orchestration."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

from rich.console import Console

from teamgate_core.config import validate_config
from teamgate_core.evaluator import count_approval_events, evaluate
from teamgate_core.gh.pull_request import fetch_reviews, fetch_team_roster, get_client, get_pull, get_repo
from teamgate_core.models import PullRequestContext, ReviewState

console = Console()
logger = logging.getLogger(__name__)


@dataclass
class CheckSummary:
    """Result returned by run_check — carries enough data for the CLI to report it.

    Decoupled from teamgate_report so teamgate_core has no dependency on the
    reporting layer. The CLI converts this to a StatusRecord before reporting.
    """

    repo: str
    pr_number: int
    head_sha: str | None
    org: str
    team: str
    required: int
    approval_count: int
    satisfied: bool
    roster_size: int = 0
    latest_states: dict[str, ReviewState] = field(default_factory=dict)
    checked_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    @property
    def approvers(self) -> list[str]:
        return sorted(login for login, state in self.latest_states.items() if state is ReviewState.APPROVED)


def run_check(context: PullRequestContext, config: dict, client=None, repo_obj=None) -> CheckSummary:
    """Fetch reviews and team members for a PR and decide whether enough of the team approved.

    Configuration is validated before anything is fetched. Every GitHub
    failure propagates as a TeamGateError; nothing is retried.
    """
    validate_config(config)
    team = config["team_name"]
    org = config.get("org") or context.owner
    required = config["required_approvals"]

    client = client if client is not None else get_client(config["github_token"])
    repo = repo_obj if repo_obj is not None else get_repo(context.repo, client=client)

    pr = get_pull(repo, context.number)
    head_sha = context.head_sha or pr.head.sha

    reviews = fetch_reviews(pr)
    roster = fetch_team_roster(client, org, team)
    logger.debug(
        "Fetched %d review(s) on %s#%d and %d member(s) of %s/%s",
        len(reviews),
        context.repo,
        context.number,
        len(roster),
        org,
        team,
    )

    result = evaluate(reviews, roster, required)
    events = count_approval_events(reviews, roster)
    if events > result.approval_count:
        logger.debug("%d team approval submission(s) reduce to %d current approver(s).", events, result.approval_count)

    if result.satisfied:
        console.print(
            f"[green]Success: {result.approval_count} approvals from team {team} met the requirement "
            f"({required}).[/green]"
        )
    else:
        console.print(
            f"[red]Failed: Only {result.approval_count} approvals from team {team} received "
            f"({required} required).[/red]"
        )

    return CheckSummary(
        repo=context.repo,
        pr_number=context.number,
        head_sha=head_sha,
        org=org,
        team=team,
        required=required,
        approval_count=result.approval_count,
        satisfied=result.satisfied,
        roster_size=len(roster),
        latest_states=result.latest_states,
    )
