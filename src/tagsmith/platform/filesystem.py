"""Summary: Small filesystem helpers shared by stores and the apply engine.
Why: Keep directory creation and its error translation in one place."""

from __future__ import annotations

from pathlib import Path

from tagsmith.shared.errors import WriteFailureError


def ensure_directory(path: Path) -> Path:
    """Create ``path`` (and parents) if needed and return it.

    Raises:
        WriteFailureError: If the directory cannot be created.
    """

    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise WriteFailureError(f"Cannot create directory {path}: {exc}") from exc
    return path


def ensure_parent_directory(path: Path) -> Path:
    """Ensure the parent directory of ``path`` exists and return it."""

    return ensure_directory(path.parent)


__all__ = ["ensure_directory", "ensure_parent_directory"]
