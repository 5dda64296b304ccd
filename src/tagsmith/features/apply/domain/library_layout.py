"""Where derived artifacts live relative to an original audio file.

Where: src/tagsmith/features/apply/domain/library_layout.py
What: Resolve the originals, suggestions, and updated directories for a source.
Why: Derived output must never land in the originals location.

Layout rules, applied to the source file's parent directory ``P``:

- ``P`` named ``originals``: ``suggestions`` and ``updated`` are siblings of ``P``.
- ``P`` named ``public``: ``suggestions`` and ``updated`` are children of ``P``.
- Anything else: ``suggestions`` and ``updated`` are children of ``P``.

Explicitly configured directories always win.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Final

from tagsmith.shared.errors import WriteFailureError

ORIGINALS_DIRNAME: Final[str] = "originals"
SUGGESTIONS_DIRNAME: Final[str] = "suggestions"
UPDATED_DIRNAME: Final[str] = "updated"


def _absolute(path: Path) -> Path:
    return path.expanduser().resolve()


@dataclass(frozen=True, slots=True)
class LibraryLayout:
    """Resolved directories for one source file."""

    originals_dir: Path
    suggestions_dir: Path
    updated_dir: Path

    @classmethod
    def for_source(
        cls,
        source: Path,
        *,
        suggestions_dir: Path | None = None,
        updated_dir: Path | None = None,
    ) -> "LibraryLayout":
        parent = _absolute(source).parent
        if parent.name == ORIGINALS_DIRNAME:
            base = parent.parent
        else:
            base = parent

        return cls(
            originals_dir=parent,
            suggestions_dir=_absolute(suggestions_dir) if suggestions_dir else base / SUGGESTIONS_DIRNAME,
            updated_dir=_absolute(updated_dir) if updated_dir else base / UPDATED_DIRNAME,
        )

    def assert_writable_destination(self, destination: Path) -> None:
        """Refuse destinations inside the originals location.

        Raises:
            WriteFailureError: If ``destination`` sits directly in the source's
                directory, or anywhere below a directory named ``originals``.
        """

        target_dir = _absolute(destination).parent
        if target_dir == self.originals_dir:
            raise WriteFailureError(
                f"Refusing to write {destination}: it is in the originals directory"
            )
        if self.originals_dir.name == ORIGINALS_DIRNAME and target_dir.is_relative_to(
            self.originals_dir
        ):
            raise WriteFailureError(
                f"Refusing to write {destination}: it is inside {self.originals_dir}"
            )


__all__ = [
    "LibraryLayout",
    "ORIGINALS_DIRNAME",
    "SUGGESTIONS_DIRNAME",
    "UPDATED_DIRNAME",
]
