# Where: tagsmith.shared.track_metadata
# What: Canonical TrackMetadata snapshot and the TagField vocabulary.
# Why: One immutable representation shared by reader, parser, report, and apply.

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, ClassVar, Final

from .tag_values import clean_text, parse_track_number, parse_year


class TagField(str, Enum):
    """Metadata fields the suggestion pipeline knows how to read and edit."""

    TITLE = "title"
    ARTIST = "artist"
    ALBUM = "album"
    YEAR = "year"
    GENRE = "genre"
    TRACK_NUMBER = "track_number"

    @property
    def label(self) -> str:
        """Upper-case token used in prompts, e.g. ``TRACK_NUMBER``."""
        return self.name

    @property
    def is_numeric(self) -> bool:
        return self in (TagField.YEAR, TagField.TRACK_NUMBER)

    @staticmethod
    def from_label(value: str) -> "TagField | None":
        """Resolve a free-form label (``"Track #"``, ``"YEAR"``) to a field."""

        normalized = " ".join(value.strip().lower().replace("_", " ").split())
        return _FIELD_ALIASES.get(normalized)


_FIELD_ALIASES: Final[dict[str, TagField]] = {
    "title": TagField.TITLE,
    "track title": TagField.TITLE,
    "song title": TagField.TITLE,
    "artist": TagField.ARTIST,
    "album": TagField.ALBUM,
    "year": TagField.YEAR,
    "date": TagField.YEAR,
    "release year": TagField.YEAR,
    "genre": TagField.GENRE,
    "track number": TagField.TRACK_NUMBER,
    "track no": TagField.TRACK_NUMBER,
    "track no.": TagField.TRACK_NUMBER,
    "track #": TagField.TRACK_NUMBER,
    "tracknumber": TagField.TRACK_NUMBER,
    "track": TagField.TRACK_NUMBER,
}


@dataclass(frozen=True, slots=True)
class TrackMetadata:
    """Immutable metadata snapshot for a music track.

    Blank text normalises to ``None`` so that absence has exactly one
    representation; ``year`` and ``track_number`` are always ``int | None``.
    """

    title: str | None = None
    artist: str | None = None
    album: str | None = None
    year: int | None = None
    genre: str | None = None
    track_number: int | None = None

    CRITICAL_FIELDS: ClassVar[tuple[TagField, ...]] = (TagField.ARTIST, TagField.TITLE)

    def __post_init__(self) -> None:
        for tag_field in TagField:
            raw = getattr(self, tag_field.value)
            object.__setattr__(self, tag_field.value, _normalize(tag_field, raw))

    def value_of(self, tag_field: TagField) -> str | None:
        """Return the display string for ``tag_field`` or ``None`` if absent."""

        value = getattr(self, tag_field.value)
        return None if value is None else str(value)

    def with_value(self, tag_field: TagField, text: str) -> "TrackMetadata":
        """Return a copy with ``tag_field`` replaced by ``text``.

        Raises:
            ValueError: If ``text`` cannot be stored in a numeric field.
        """

        normalized = _normalize(tag_field, text)
        if normalized is None:
            raise ValueError(f"Cannot store {text!r} in {tag_field.value}")
        return replace(self, **{tag_field.value: normalized})

    def missing_fields(self) -> list[TagField]:
        return [tag_field for tag_field in TagField if getattr(self, tag_field.value) is None]

    def has_missing_critical_fields(self) -> bool:
        return any(getattr(self, f.value) is None for f in self.CRITICAL_FIELDS)

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the durable JSON shape (absent fields as ``None``)."""

        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TrackMetadata":
        """Build a snapshot from a mapping, ignoring unknown keys."""

        known = {tag_field.value for tag_field in TagField}
        return cls(**{key: value for key, value in data.items() if key in known})


def _normalize(tag_field: TagField, raw: object) -> str | int | None:
    if isinstance(raw, bool):
        raw = str(raw)
    if tag_field.is_numeric:
        if isinstance(raw, int):
            return raw if raw > 0 else None
        text = clean_text(raw)
        if text is None:
            return None
        number = parse_year(text) if tag_field is TagField.YEAR else parse_track_number(text)
        return number if number else None
    return clean_text(raw)


__all__ = ["TagField", "TrackMetadata"]
