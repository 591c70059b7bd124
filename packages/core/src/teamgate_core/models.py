"""Review and evaluation data models.

Plain dataclasses built fresh on every run and discarded afterwards. The
GitHub layer converts PyGithub objects into these so the evaluator never
touches the network.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class ReviewState(str, Enum):
    APPROVED = "APPROVED"
    CHANGES_REQUESTED = "CHANGES_REQUESTED"
    COMMENTED = "COMMENTED"
    DISMISSED = "DISMISSED"
    PENDING = "PENDING"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, raw: str | None) -> ReviewState:
        """Map a raw API state string to a ReviewState, falling back to UNKNOWN."""
        try:
            return cls((raw or "").upper())
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class Review:
    """A single review submission on a pull request."""

    reviewer: str
    state: ReviewState
    submitted_at: datetime | None = None


@dataclass
class EvaluationResult:
    approval_count: int
    required: int
    satisfied: bool
    latest_states: dict[str, ReviewState] = field(default_factory=dict)


@dataclass(frozen=True)
class PullRequestContext:
    """The pull request a check runs against."""

    repo: str  # "owner/name"
    number: int
    head_sha: str | None = None

    @property
    def owner(self) -> str:
        return self.repo.split("/", 1)[0]
