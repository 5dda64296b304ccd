"""Summary: Assemble a SuggestionsReport from a snapshot and a parsed reply.
Why: Keep report construction pure so persistence stays an adapter concern."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from ..domain.models import ParsedReply, SuggestionsReport
from tagsmith.shared.track_metadata import TrackMetadata

Clock = Callable[[], datetime]


def _local_now() -> datetime:
    return datetime.now().astimezone()


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 with seconds precision, keeping any UTC offset."""

    return moment.isoformat(timespec="seconds")


def build_report(
    file_path: Path | str,
    metadata: TrackMetadata,
    parsed: ParsedReply,
    *,
    clock: Clock | None = None,
) -> SuggestionsReport:
    """Bundle one analysis into a report stamped with the capture time."""

    moment = (clock or _local_now)()
    return SuggestionsReport(
        file_path=str(file_path),
        timestamp=format_timestamp(moment),
        current_metadata=metadata,
        suggestions=parsed.suggestions,
        raw_analysis=parsed.narrative,
    )


__all__ = ["Clock", "build_report", "format_timestamp"]
