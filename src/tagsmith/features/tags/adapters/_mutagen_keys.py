"""Mapping between tag fields and mutagen "easy" keys.

Where: src/tagsmith/features/tags/adapters/_mutagen_keys.py
What: One key table shared by the reader and the writer.
Why: EasyID3, EasyMP4 and Vorbis comments expose the same lowercase keys.
"""

from __future__ import annotations

from typing import Final

from tagsmith.shared.track_metadata import TagField

SUPPORTED_EXTENSIONS: Final[frozenset[str]] = frozenset({".mp3", ".flac", ".m4a", ".ogg", ".opus"})

EASY_KEYS: Final[dict[TagField, str]] = {
    TagField.TITLE: "title",
    TagField.ARTIST: "artist",
    TagField.ALBUM: "album",
    TagField.YEAR: "date",
    TagField.GENRE: "genre",
    TagField.TRACK_NUMBER: "tracknumber",
}

__all__ = ["EASY_KEYS", "SUPPORTED_EXTENSIONS"]
