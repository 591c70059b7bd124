"""Status record model.

Decoupled from teamgate_core so reporters can be used independently and
teamgate_core has no knowledge of where results end up.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class StatusRecord:
    """The outcome of one team-approval check, as handed to reporters.

    Created by the CLI layer after run_check() returns a CheckSummary.
    """

    repo: str
    pr_number: int
    head_sha: str | None
    team: str
    required: int
    approval_count: int
    satisfied: bool
    checked_at: str  # ISO-8601 UTC timestamp
    approvers: list[str] = field(default_factory=list)
    latest_states: dict[str, str] = field(default_factory=dict)

    @property
    def state(self) -> str:
        return "success" if self.satisfied else "failure"

    @property
    def description(self) -> str:
        return f"{self.approval_count}/{self.required} approvals from {self.team}"
