"""Resolve the pull request a run applies to from the GitHub Actions event payload."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from teamgate_core.errors import InvalidConfiguration, NoPullRequestContext
from teamgate_core.models import PullRequestContext

logger = logging.getLogger(__name__)


def load_event_context(event_path: str | None = None, repository: str | None = None) -> PullRequestContext:
    """Read the event JSON written by the Actions runner and return its pull request.

    ``event_path`` defaults to GITHUB_EVENT_PATH. An explicit ``repository``
    wins over the payload's, which wins over GITHUB_REPOSITORY. Raises
    NoPullRequestContext when the event has no ``pull_request`` payload (for
    example a push or a manual dispatch).
    """
    event_path = event_path or os.environ.get("GITHUB_EVENT_PATH")
    if not event_path:
        raise InvalidConfiguration("No event payload: pass --repo and --pr, or set GITHUB_EVENT_PATH.")

    path = Path(event_path)
    try:
        payload = json.loads(path.read_text())
    except FileNotFoundError:
        raise InvalidConfiguration(f"Event payload not found: {event_path}") from None
    except json.JSONDecodeError as e:
        raise InvalidConfiguration(f"Event payload at {event_path} is not valid JSON: {e}") from e

    pull_request = payload.get("pull_request") if isinstance(payload, dict) else None
    if not pull_request:
        raise NoPullRequestContext("No pull request found in the event payload.")

    repository_payload = payload.get("repository")
    payload_repo = repository_payload.get("full_name") if isinstance(repository_payload, dict) else None
    repo = repository or payload_repo or os.environ.get("GITHUB_REPOSITORY")
    if not repo:
        raise InvalidConfiguration("Could not determine the repository from the event or GITHUB_REPOSITORY.")

    if not isinstance(pull_request, dict):
        raise InvalidConfiguration(f"Event payload at {event_path} has a malformed pull_request entry.")
    try:
        number = int(pull_request["number"])
    except (KeyError, TypeError, ValueError):
        raise InvalidConfiguration(f"Event payload at {event_path} has no valid pull request number.") from None

    head = pull_request.get("head")
    context = PullRequestContext(
        repo=repo,
        number=number,
        head_sha=head.get("sha") if isinstance(head, dict) else None,
    )
    logger.debug("Resolved %s#%d from %s", context.repo, context.number, event_path)
    return context
