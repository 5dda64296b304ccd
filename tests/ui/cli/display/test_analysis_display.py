"""tests/ui/cli/display/test_analysis_display.py
What: Validate the metadata panel status line and the suggestion table.
Why: Users decide whether to run ``suggest`` from these cues.
"""

from __future__ import annotations

from pathlib import Path

from rich.console import Console

from tagsmith.features.suggestions.domain.models import Confidence, MetadataSuggestion
from tagsmith.shared.track_metadata import TagField, TrackMetadata
from tagsmith.ui.cli.display.analysis import AnalysisDisplay


def _display() -> tuple[AnalysisDisplay, Console]:
    console = Console(record=True, width=120, color_system=None)
    return AnalysisDisplay(console=console), console


def test_missing_critical_fields_are_flagged() -> None:
    display, console = _display()

    display.show_metadata(Path("track.flac"), TrackMetadata(title="Friend of the Devil"))

    output = console.export_text()
    assert "Issues detected: missing Artist" in output
    assert "appears complete" not in output


def test_optional_gaps_are_listed(grateful_dead_metadata: TrackMetadata) -> None:
    display, console = _display()

    display.show_metadata(Path("02 Friend of the Devil.flac"), grateful_dead_metadata)

    output = console.export_text()
    assert "Incomplete: missing Year, Genre" in output
    assert "Issues detected" not in output


def test_complete_metadata_is_reported() -> None:
    display, console = _display()
    complete = TrackMetadata(
        title="Friend of the Devil",
        artist="Grateful Dead",
        album="American Beauty",
        year=1970,
        genre="Folk Rock",
        track_number=2,
    )

    display.show_metadata(Path("02 Friend of the Devil.flac"), complete)

    assert "Metadata appears complete" in console.export_text()


def test_suggestion_table_lists_each_change() -> None:
    display, console = _display()
    suggestion = MetadataSuggestion(
        field=TagField.YEAR,
        current_value=None,
        suggested_value="1970",
        confidence=Confidence.HIGH,
        reason="album released in 1970",
    )

    display.show_suggestions([suggestion])

    output = console.export_text()
    assert "1970" in output
    assert "High" in output
    assert "(missing)" in output
