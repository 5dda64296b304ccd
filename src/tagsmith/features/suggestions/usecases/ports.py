"""Summary: Ports defining suggestion use case dependencies.
Why: Decouple the agent from concrete persistence so tests and swaps stay simple."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from ..domain.models import SuggestionsReport


@runtime_checkable
class ReportStorePort(Protocol):
    """Port for persisting and reloading suggestions reports."""

    def report_path_for(self, file_path: Path) -> Path:
        """Return where the report for ``file_path`` is stored."""
        ...

    def save(self, report: SuggestionsReport) -> Path:
        """Persist ``report`` and return the artifact path."""
        ...

    def load(self, path: Path) -> SuggestionsReport:
        """Read a report written by any process or version."""
        ...


__all__ = ["ReportStorePort"]
