"""Summary: Ports for reading and writing audio tags.
Why: Workflows depend on these abstractions so tag libraries stay swappable."""

from __future__ import annotations

from collections.abc import Collection
from pathlib import Path
from typing import Protocol, runtime_checkable

from tagsmith.shared.track_metadata import TagField, TrackMetadata


@runtime_checkable
class TagReaderPort(Protocol):
    """Port for taking a metadata snapshot of an audio file."""

    def read(self, path: Path) -> TrackMetadata:
        """Return the file's current metadata without modifying it."""
        ...


@runtime_checkable
class TagWriterPort(Protocol):
    """Port for writing metadata into an audio file in place."""

    def write(
        self,
        path: Path,
        metadata: TrackMetadata,
        fields: Collection[TagField] | None = None,
    ) -> None:
        """Store ``metadata`` in ``path``; only ever called on working copies.

        When ``fields`` is given, only those tags are touched and every other
        tag in the file keeps its original raw value.
        """
        ...


__all__ = ["TagReaderPort", "TagWriterPort"]
