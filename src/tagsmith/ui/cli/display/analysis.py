"""src/tagsmith/ui/cli/display/analysis.py
What: Render metadata snapshots, model commentary, and suggestion tables.
Why: Let users review what the model proposes before anything is written.
"""

from collections.abc import Sequence
from pathlib import Path
from typing import Final, final

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from tagsmith.features.suggestions.domain.models import Confidence, MetadataSuggestion
from tagsmith.features.suggestions.usecases.prompt_builder import field_title
from tagsmith.shared.track_metadata import TagField, TrackMetadata

CONFIDENCE_STYLES: Final[dict[Confidence, str]] = {
    Confidence.HIGH: "green",
    Confidence.MEDIUM: "yellow",
    Confidence.LOW: "red",
}
MISSING_MARKER: Final[str] = "[dim](missing)[/dim]"


@final
class AnalysisDisplay:
    """Handles analysis output in CLI."""

    console: Console

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def show_metadata(self, file_path: Path, metadata: TrackMetadata) -> None:
        """Print the current tags as a panel titled with the file name."""

        lines: list[str] = []
        for tag_field in TagField:
            value = metadata.value_of(tag_field)
            rendered = escape(value) if value is not None else MISSING_MARKER
            lines.append(f"[bold]{field_title(tag_field)}:[/bold] {rendered}")
        self.console.print(
            Panel("\n".join(lines), title=f"🎵 {escape(file_path.name)}", expand=False)
        )
        self.console.print(self._status_line(metadata))

    @staticmethod
    def _status_line(metadata: TrackMetadata) -> str:
        missing = metadata.missing_fields()
        if metadata.has_missing_critical_fields():
            names = ", ".join(field_title(f) for f in missing if f in metadata.CRITICAL_FIELDS)
            return f"[red]⚠️  Issues detected: missing {names}[/red]"
        if missing:
            names = ", ".join(field_title(f) for f in missing)
            return f"[yellow]Incomplete: missing {names}[/yellow]"
        return "[green]✓ Metadata appears complete[/green]"

    def show_narrative(self, narrative: str, provider: str) -> None:
        if not narrative.strip():
            return
        self.console.print(f"\n[bold cyan]{escape(provider)} analysis:[/bold cyan]")
        self.console.print(escape(narrative.strip()))

    def show_suggestions(self, suggestions: Sequence[MetadataSuggestion]) -> None:
        """Print a numbered table of suggestions, or a note when there are none."""

        if not suggestions:
            self.console.print("\n[green]No changes suggested.[/green]")
            return

        table = Table(title="Suggestions", show_lines=False)
        table.add_column("#", justify="right", style="dim")
        table.add_column("Field", style="bold")
        table.add_column("Current")
        table.add_column("Suggested", style="cyan")
        table.add_column("Confidence")
        table.add_column("Reason", overflow="fold")

        for index, suggestion in enumerate(suggestions, start=1):
            current = (
                escape(suggestion.current_value)
                if suggestion.current_value is not None
                else MISSING_MARKER
            )
            style = CONFIDENCE_STYLES[suggestion.confidence]
            table.add_row(
                str(index),
                field_title(suggestion.field),
                current,
                escape(suggestion.suggested_value),
                f"[{style}]{suggestion.confidence.value}[/{style}]",
                escape(suggestion.reason),
            )
        self.console.print()
        self.console.print(table)

    def show_report_path(self, report_path: Path) -> None:
        self.console.print(f"\n💾 Report saved: [magenta]{escape(str(report_path))}[/magenta]")
