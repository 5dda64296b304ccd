"""Display utilities for apply command results."""

from __future__ import annotations

from typing import final

from rich.console import Console
from rich.markup import escape

from tagsmith.features.apply.domain.models import ApplyResult
from tagsmith.features.suggestions.usecases.prompt_builder import field_title


@final
class ApplyResultDisplay:
    """Render apply outcomes in the CLI."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def show_result(self, result: ApplyResult, *, quiet: bool = False) -> None:
        """Print a summary of the applied and skipped suggestions."""

        if quiet:
            self.console.print(
                str(result.destination_path), markup=False, highlight=False, soft_wrap=True
            )
            return

        self.console.print("\n[bold]Apply Summary:[/bold]")
        self.console.print(f"Original (unchanged): {escape(str(result.source_path))}")
        self.console.print(f"[green]Updated copy: {escape(str(result.destination_path))}[/green]")
        self.console.print(f"[green]Applied: {len(result.applied)}[/green]")
        for suggestion in result.applied:
            self.console.print(
                f"[green]  • {field_title(suggestion.field)}: "
                f"{escape(suggestion.current_value or '(missing)')} → "
                f"{escape(suggestion.suggested_value)}[/green]"
            )
        if result.skipped:
            self.console.print(f"[yellow]Skipped: {len(result.skipped)}[/yellow]")
            for suggestion in result.skipped:
                self.console.print(
                    f"[yellow]  • {field_title(suggestion.field)}: "
                    f"{escape(suggestion.suggested_value)} ({suggestion.confidence.value})[/yellow]"
                )
