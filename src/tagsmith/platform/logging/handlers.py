"""Rich console handler for workflow events.

Where: platform/logging/handlers.py
What: Render ``workflow.*`` log records with icons, colours, and compact paths.
Why: Keep console formatting out of the use cases that emit the events.
"""

from __future__ import annotations

import logging
from pathlib import PurePath, PurePosixPath, PureWindowsPath
from typing import Any, ClassVar, override

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text


class WorkflowRichHandler(RichHandler):
    """Rich handler that styles workflow events and renders paths compactly."""

    _EVENT_STYLES: ClassVar[dict[str, tuple[str, str, str]]] = {
        "workflow.read": ("📖", "cyan", "Reading tags from "),
        "workflow.model.request": ("🤖", "blue", "Asking "),
        "workflow.analyze.complete": ("🔍", "green", "Analysis complete for "),
        "workflow.suggest.saved": ("💾", "green", "Suggestions saved to "),
        "workflow.apply.start": ("🛠️", "magenta", "Applying suggestions to "),
        "workflow.apply.complete": ("🎉", "green", "Wrote "),
        "workflow.error": ("❌", "red", "Failed "),
    }
    _PATH_SEGMENT_LIMIT: ClassVar[int] = 3

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs["show_time"] = False
        kwargs["show_path"] = False
        kwargs["show_level"] = False
        kwargs["rich_tracebacks"] = True
        kwargs["markup"] = False
        super().__init__(*args, **kwargs)

    def _format_path(self, path: str) -> Text:
        """Render the last few segments of ``path`` with magenta separators."""

        pure_path: PurePath = (
            PureWindowsPath(path) if "\\" in path else PurePosixPath(path)
        )
        separator = "\\" if isinstance(pure_path, PureWindowsPath) else "/"
        parts = [part for part in pure_path.parts if part and part != pure_path.anchor]

        prefix = pure_path.anchor
        if len(parts) > self._PATH_SEGMENT_LIMIT:
            parts = parts[-self._PATH_SEGMENT_LIMIT:]
            prefix = "…" + separator
        rendered = prefix + separator.join(parts) if parts or prefix else "."

        text = Text()
        for char in rendered:
            color = "magenta" if char in {separator, "…"} else "white"
            _ = text.append(char, style=Style(color=color))
        return text

    def _render_workflow_message(self, record: logging.LogRecord) -> Text | None:
        event = getattr(record, "workflow_event", None)
        if not isinstance(event, str):
            return None

        icon, color, prefix = self._EVENT_STYLES.get(event, ("ℹ️", "blue", ""))
        text = Text()
        _ = text.append(f"{icon} ", style=Style(color=color, bold=True))
        body = Text(style=Style(color=color))
        _ = body.append(prefix)

        if event == "workflow.model.request":
            provider = getattr(record, "provider", None) or "model"
            model = getattr(record, "model", None)
            _ = body.append(f"{provider} ({model})" if model else str(provider))
            _ = text.append_text(body)
            return text

        path = getattr(record, "path", None)
        if path:
            _ = body.append_text(self._format_path(str(path)))

        details: list[str] = []
        count = getattr(record, "suggestion_count", None)
        if isinstance(count, int):
            details.append(f"{count} suggestion{'s' if count != 1 else ''}")
        error_message = getattr(record, "error_message", None)
        if error_message:
            details.append(str(error_message))
        if details:
            _ = body.append(" (" + ", ".join(details) + ")")

        _ = text.append_text(body)
        return text

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        """Render message with custom styling for workflow events."""

        workflow_text = self._render_workflow_message(record)
        if workflow_text is not None:
            return workflow_text
        return super().render_message(record, message)


__all__ = ["WorkflowRichHandler"]
