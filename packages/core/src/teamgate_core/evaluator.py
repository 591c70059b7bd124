"""Approval evaluation — pure functions over reviews and a team roster."""

from __future__ import annotations

from collections.abc import Iterable

from teamgate_core.models import EvaluationResult, Review, ReviewState


def is_reviewer_in_team(reviewer: str, roster: Iterable[str]) -> bool:
    return reviewer in roster


def latest_states(reviews: Iterable[Review], roster: Iterable[str]) -> dict[str, ReviewState]:
    """Return the most recent review state for each roster member who reviewed.

    Reviews are folded left to right, so a later entry for the same reviewer
    replaces an earlier one regardless of its timestamp. Reviews from people
    outside the roster are ignored.
    """
    members = frozenset(roster)
    states: dict[str, ReviewState] = {}
    for review in reviews:
        if is_reviewer_in_team(review.reviewer, members):
            states[review.reviewer] = review.state
    return states


def approval_count(reviews: Iterable[Review], roster: Iterable[str]) -> int:
    """Count distinct roster members whose latest review is an approval."""
    return sum(1 for state in latest_states(reviews, roster).values() if state is ReviewState.APPROVED)


def count_approval_events(reviews: Iterable[Review], roster: Iterable[str]) -> int:
    """Count every APPROVED submission by a roster member, without deduplication."""
    members = frozenset(roster)
    return sum(1 for r in reviews if r.state is ReviewState.APPROVED and is_reviewer_in_team(r.reviewer, members))


def is_satisfied(required: int, actual: int) -> bool:
    return actual >= required


def evaluate(reviews: Iterable[Review], roster: Iterable[str], required: int) -> EvaluationResult:
    reviews = list(reviews)
    states = latest_states(reviews, roster)
    count = sum(1 for state in states.values() if state is ReviewState.APPROVED)
    return EvaluationResult(
        approval_count=count,
        required=required,
        satisfied=is_satisfied(required, count),
        latest_states=states,
    )
