"""Read TrackMetadata snapshots with mutagen.

Where: src/tagsmith/features/tags/adapters/mutagen_reader.py
What: Implement TagReaderPort for MP3, FLAC, M4A, Ogg Vorbis and Opus files.
Why: The snapshot must be taken without ever opening the source for writing.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, cast

import mutagen
from mutagen import MutagenError

from tagsmith.platform.logging import logger
from tagsmith.shared.errors import FileReadError, MetadataParseError
from tagsmith.shared.tag_values import safe_get_first
from tagsmith.shared.track_metadata import TrackMetadata

from ..usecases.ports import TagReaderPort
from ._mutagen_keys import EASY_KEYS, SUPPORTED_EXTENSIONS


def _first_text(tags: Any, key: str) -> str | None:
    try:
        value: object = tags.get(key)
    except (KeyError, ValueError):
        return None
    if isinstance(value, list):
        return safe_get_first(data=[str(item) for item in cast(list[object], value)]) or None
    if isinstance(value, str):
        return value
    return None


class MutagenTagReader(TagReaderPort):
    """Read tags through mutagen's format-independent "easy" interface."""

    def read(self, path: Path) -> TrackMetadata:
        if not path.is_file():
            raise FileReadError(f"Audio file not found: {path}")
        if path.suffix.lower() not in SUPPORTED_EXTENSIONS:
            supported = ", ".join(sorted(SUPPORTED_EXTENSIONS))
            raise FileReadError(f"Unsupported file type {path.suffix!r} (supported: {supported})")

        try:
            audio = mutagen.File(path, easy=True)
        except MutagenError as exc:
            raise MetadataParseError(f"Cannot read tags from {path}: {exc}") from exc
        except OSError as exc:
            raise FileReadError(f"Cannot open {path}: {exc}") from exc

        if audio is None:
            raise MetadataParseError(f"Unrecognised audio container: {path}")

        tags = audio.tags
        if tags is None:
            logger.debug("No tag container in %s", path)
            return TrackMetadata()

        values = {
            tag_field.value: _first_text(tags, key) for tag_field, key in EASY_KEYS.items()
        }
        metadata = TrackMetadata(**values)
        logger.debug("Read metadata from %s: %s", path, metadata)
        return metadata


__all__ = ["MutagenTagReader"]
