"""No-op reporter — used for dry runs."""

from __future__ import annotations

from typing import TYPE_CHECKING

from teamgate_report.base import BaseReporter

if TYPE_CHECKING:
    from teamgate_report.models import StatusRecord


class NoOpReporter(BaseReporter):
    """Discards every record."""

    def report(self, record: StatusRecord) -> None:
        pass  # intentional no-op
