from __future__ import annotations

import logging

from github import Github, GithubException
from requests.exceptions import RequestException

from teamgate_core.errors import TeamNotFound, UpstreamUnavailable
from teamgate_core.models import Review, ReviewState

logger = logging.getLogger(__name__)


def get_client(token: str) -> Github:
    return Github(token)


def get_repo(repo_name: str, token: str | None = None, client: Github | None = None):
    client = client if client is not None else get_client(token)
    try:
        return client.get_repo(repo_name)
    except (GithubException, RequestException) as e:
        raise UpstreamUnavailable(f"Could not load repository {repo_name}: {e}") from e


def get_pull(repo, pr_number: int):
    try:
        return repo.get_pull(pr_number)
    except (GithubException, RequestException) as e:
        raise UpstreamUnavailable(f"Could not load PR #{pr_number}: {e}") from e


def fetch_reviews(pr) -> list[Review]:
    """Return every review submitted on the PR, in the order GitHub lists them (oldest first)."""
    reviews = []
    try:
        for raw in pr.get_reviews():
            # Reviews by deleted accounts come back with no user.
            if raw.user is None:
                logger.debug("Skipping review %s with no user.", getattr(raw, "id", "?"))
                continue
            reviews.append(
                Review(reviewer=raw.user.login, state=ReviewState.parse(raw.state), submitted_at=raw.submitted_at)
            )
    except (GithubException, RequestException) as e:
        raise UpstreamUnavailable(f"Could not fetch reviews for PR #{pr.number}: {e}") from e
    return reviews


def fetch_team_roster(client: Github, org: str, team_slug: str) -> frozenset[str]:
    """Return the logins of every member of ``org/team_slug``, including child-team members."""
    try:
        team = client.get_organization(org).get_team_by_slug(team_slug)
        return frozenset(member.login for member in team.get_members())
    except GithubException as e:
        if e.status == 404:
            raise TeamNotFound(org, team_slug) from e
        raise UpstreamUnavailable(f"Could not fetch members of {org}/{team_slug}: {e}") from e
    except RequestException as e:
        raise UpstreamUnavailable(f"Could not fetch members of {org}/{team_slug}: {e}") from e
