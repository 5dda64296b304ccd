"""Summary: Write TrackMetadata into an audio file with mutagen.
Why: The apply engine hands this writer a private working copy, never the source."""

from __future__ import annotations

from collections.abc import Collection
from pathlib import Path

import mutagen
from mutagen import MutagenError

from tagsmith.platform.logging import logger
from tagsmith.shared.errors import MetadataParseError
from tagsmith.shared.track_metadata import TagField, TrackMetadata

from ..usecases.ports import TagWriterPort
from ._mutagen_keys import EASY_KEYS


class MutagenTagWriter(TagWriterPort):
    """Set the requested fields and save; every other tag is left as found."""

    def write(
        self,
        path: Path,
        metadata: TrackMetadata,
        fields: Collection[TagField] | None = None,
    ) -> None:
        selected = tuple(EASY_KEYS) if fields is None else tuple(fields)
        try:
            audio = mutagen.File(path, easy=True)
            if audio is None:
                raise MetadataParseError(f"Unrecognised audio container: {path}")
            if audio.tags is None:
                audio.add_tags()

            for tag_field in selected:
                value = metadata.value_of(tag_field)
                if value is not None:
                    audio[EASY_KEYS[tag_field]] = [value]

            audio.save()
        except (MutagenError, OSError, KeyError, ValueError) as exc:
            raise MetadataParseError(f"Cannot write tags to {path}: {exc}") from exc

        logger.debug("Wrote %d tag(s) to %s", len(selected), path)


__all__ = ["MutagenTagWriter"]
