"""Commit status reporter.

Publishes the result as a status on the pull request's head commit, which
branch protection can require like any other check.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from github import GithubException
from requests.exceptions import RequestException

from teamgate_core.errors import UpstreamUnavailable
from teamgate_report.base import BaseReporter

if TYPE_CHECKING:
    from teamgate_report.models import StatusRecord

logger = logging.getLogger(__name__)

DEFAULT_CONTEXT = "teamgate/team-approval"
_MAX_DESCRIPTION = 140  # GitHub rejects longer status descriptions


class CommitStatusReporter(BaseReporter):
    """Sets a success/failure commit status on the PR head SHA.

    Args:
        repo: PyGithub Repository the pull request belongs to.
        context: Status context label shown in the PR checks list.
        target_url: Optional link attached to the status (e.g. the workflow run).
    """

    def __init__(self, repo, context: str = DEFAULT_CONTEXT, target_url: str | None = None):
        self._repo = repo
        self._context = context
        self._target_url = target_url

    def report(self, record: StatusRecord) -> None:
        if not record.head_sha:
            raise UpstreamUnavailable(f"PR #{record.pr_number} has no head SHA to attach a status to.")

        kwargs = {
            "state": record.state,
            "description": record.description[:_MAX_DESCRIPTION],
            "context": self._context,
        }
        if self._target_url:
            kwargs["target_url"] = self._target_url

        try:
            self._repo.get_commit(record.head_sha).create_status(**kwargs)
        except (GithubException, RequestException) as e:
            raise UpstreamUnavailable(f"Could not set commit status on {record.head_sha[:7]}: {e}") from e
        logger.debug("Set %s status %r on %s", record.state, self._context, record.head_sha[:7])
