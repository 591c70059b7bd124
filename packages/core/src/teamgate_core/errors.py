"""Error taxonomy for team approval checks.

Every error is fatal to a single run except NoPullRequestContext, which the
CLI treats as an intentional early exit.
"""

from __future__ import annotations


class TeamGateError(Exception):
    """Base class for all teamgate errors."""


class UpstreamUnavailable(TeamGateError):
    """A GitHub call failed (network, auth, rate limit) or a report could not be written."""


class TeamNotFound(TeamGateError):
    """The named team or its organisation does not exist or is not visible to the token."""

    def __init__(self, org: str, team: str):
        self.org = org
        self.team = team
        super().__init__(f"Team {team!r} not found in organisation {org!r} (or not visible to this token).")


class InvalidConfiguration(TeamGateError):
    """Configuration is missing or malformed. Raised before any GitHub call."""


class NoPullRequestContext(TeamGateError):
    """The triggering event carries no pull request payload."""
