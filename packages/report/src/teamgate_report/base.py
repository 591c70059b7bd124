"""Abstract reporter interface.

The CLI depends on BaseReporter, not on a concrete sink, so commit statuses,
Actions outputs and dry runs are interchangeable.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from teamgate_report.models import StatusRecord


class BaseReporter(ABC):
    """Pluggable sink for a check result.

    Implementations raise UpstreamUnavailable when the result cannot be
    delivered; the CLI treats that as a failed run.
    """

    @abstractmethod
    def report(self, record: StatusRecord) -> None:
        """Deliver a check result."""

    def close(self) -> None:
        """Release any resources held by the reporter.

        Default is a no-op so callers can always call close() safely.
        """
