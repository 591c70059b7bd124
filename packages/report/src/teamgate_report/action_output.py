"""GitHub Actions output reporter.

Writes step outputs to $GITHUB_OUTPUT so later steps can branch on the
result, and a Markdown table to $GITHUB_STEP_SUMMARY for the run page.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

from teamgate_core.errors import UpstreamUnavailable
from teamgate_report.base import BaseReporter

if TYPE_CHECKING:
    from teamgate_report.models import StatusRecord

logger = logging.getLogger(__name__)


class ActionOutputReporter(BaseReporter):
    """Appends outputs and a job summary for the current Actions step.

    Paths default to GITHUB_OUTPUT and GITHUB_STEP_SUMMARY. Either may be
    unset (local runs); the corresponding write is then skipped.
    """

    def __init__(self, output_path: str | None = None, summary_path: str | None = None):
        self._output_path = output_path or os.environ.get("GITHUB_OUTPUT")
        self._summary_path = summary_path or os.environ.get("GITHUB_STEP_SUMMARY")

    def report(self, record: StatusRecord) -> None:
        if self._output_path:
            outputs = {
                "approved": "true" if record.satisfied else "false",
                "approval-count": str(record.approval_count),
                "required-approvals": str(record.required),
            }
            self._append(self._output_path, "".join(f"{k}={v}\n" for k, v in outputs.items()))
        else:
            logger.debug("GITHUB_OUTPUT not set; skipping step outputs.")

        if self._summary_path:
            self._append(self._summary_path, _render_summary(record))

    @staticmethod
    def _append(path: str, text: str) -> None:
        try:
            with open(Path(path), "a", encoding="utf-8") as f:
                f.write(text)
        except OSError as e:
            raise UpstreamUnavailable(f"Could not write to {path}: {e}") from e


def _render_summary(record: StatusRecord) -> str:
    icon = "✅" if record.satisfied else "❌"
    lines = [
        f"### {icon} Team approval: {record.description}",
        "",
        f"{record.repo}#{record.pr_number} requires {record.required} approval(s) from `{record.team}`.",
        "",
    ]
    if record.approvers:
        lines += [f"Approved by: {', '.join('@' + login for login in record.approvers)}", ""]
    if record.latest_states:
        lines += ["| Reviewer | Latest state |", "| --- | --- |"]
        lines += [f"| @{login} | {state} |" for login, state in sorted(record.latest_states.items())]
    else:
        lines.append("_No reviews from team members yet._")
    return "\n".join(lines) + "\n\n"
