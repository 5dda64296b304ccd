"""JSON file store for suggestions reports.

Where: src/tagsmith/features/suggestions/adapters/json_report_store.py
What: Persist reports as ``<stem>.suggestions.json`` and load them back.
Why: The report is the hand-off between ``suggest`` and ``apply``; any later
     process (or a human with an editor) may be the one reading it.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Final, override

from tagsmith.config.file_ops import write_text_atomic
from tagsmith.features.apply.domain.library_layout import LibraryLayout
from tagsmith.platform.filesystem import ensure_parent_directory
from tagsmith.platform.logging import logger
from tagsmith.shared.errors import FileReadError, ReportParseError, WriteFailureError

from ..domain.models import SuggestionsReport
from ..domain.serialization import report_from_dict, report_to_dict
from ..usecases.ports import ReportStorePort

REPORT_SUFFIX: Final[str] = ".suggestions.json"


class JsonReportStore(ReportStorePort):
    """Filesystem adapter implementing :class:`ReportStorePort`."""

    def __init__(self, suggestions_dir: Path | None = None) -> None:
        self._suggestions_dir: Path | None = suggestions_dir

    @override
    def report_path_for(self, file_path: Path) -> Path:
        directory = self._suggestions_dir
        if directory is None:
            directory = LibraryLayout.for_source(file_path).suggestions_dir
        return directory / f"{file_path.stem}{REPORT_SUFFIX}"

    @override
    def save(self, report: SuggestionsReport) -> Path:
        target = self.report_path_for(Path(report.file_path))
        payload = json.dumps(report_to_dict(report), indent=2, ensure_ascii=False)
        _ = ensure_parent_directory(target)
        try:
            write_text_atomic(target, payload + "\n")
        except OSError as exc:
            raise WriteFailureError(f"Cannot write report {target}: {exc}") from exc
        logger.debug("Suggestions report written to %s", target)
        return target

    @override
    def load(self, path: Path) -> SuggestionsReport:
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise FileReadError(f"Report not found: {path}") from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise FileReadError(f"Cannot read report {path}: {exc}") from exc

        try:
            data: object = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ReportParseError(f"{path} is not valid JSON: {exc}") from exc
        return report_from_dict(data)


__all__ = ["JsonReportStore", "REPORT_SUFFIX"]
