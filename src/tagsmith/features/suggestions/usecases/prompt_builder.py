"""Render a metadata snapshot into the model prompt.

Where: src/tagsmith/features/suggestions/usecases/prompt_builder.py
What: Build the assessment request plus the line-oriented suggestions contract.
Why: The reply parser relies on the delimiter and line shape requested here,
     so both sides share the constants defined in this module.
"""

from __future__ import annotations

from typing import Final

from tagsmith.shared.track_metadata import TagField, TrackMetadata

UNKNOWN_MARKER: Final[str] = "Unknown"
SUGGESTIONS_DELIMITER: Final[str] = "SUGGESTIONS:"
NO_SUGGESTIONS_MARKER: Final[str] = "NONE"

_FIELD_TITLES: Final[dict[TagField, str]] = {
    TagField.TITLE: "Title",
    TagField.ARTIST: "Artist",
    TagField.ALBUM: "Album",
    TagField.YEAR: "Year",
    TagField.GENRE: "Genre",
    TagField.TRACK_NUMBER: "Track Number",
}

_SYSTEM_PROMPT: Final[str] = """\
You are a music metadata expert. Review the tags of the audio file below.

1. Assessment: evaluate the quality and completeness of the metadata.
2. Issues: identify missing, incorrect, or suspicious values.
3. Corrections: describe which values you would change or add, and why.

Be concise but thorough. Only suggest values you have good reason to believe."""


def field_title(tag_field: TagField) -> str:
    return _FIELD_TITLES[tag_field]


def render_metadata(metadata: TrackMetadata) -> str:
    """Human-readable dump of all fields, absent ones shown as ``Unknown``."""

    lines = [
        f"- {_FIELD_TITLES[tag_field]}: {metadata.value_of(tag_field) or UNKNOWN_MARKER}"
        for tag_field in TagField
    ]
    missing = metadata.missing_fields()
    lines.append("")
    lines.append(
        "Missing fields: "
        + (", ".join(_FIELD_TITLES[f] for f in missing) if missing else "None")
    )
    return "\n".join(lines)


def _reply_format() -> str:
    field_tokens = ", ".join(tag_field.label for tag_field in TagField)
    return f"""\
Reply in two parts.

First, write your assessment as plain prose.

Then write a line containing only {SUGGESTIONS_DELIMITER}
Below it, write one line per proposed change, exactly in this shape:
FIELD: value | confidence | reason

- FIELD is one of: {field_tokens}
- confidence is one of: High, Medium, Low
- reason is a short justification

Example:
{SUGGESTIONS_DELIMITER}
YEAR: 1970 | High | album released in 1970

If nothing should change, write {NO_SUGGESTIONS_MARKER} under {SUGGESTIONS_DELIMITER}"""


def build_prompt(metadata: TrackMetadata, *, file_name: str | None = None) -> str:
    """Build the full prompt for one track.

    Args:
        metadata: Snapshot read from the file.
        file_name: Optional file name, which often carries track hints.

    Returns:
        str: Prompt text ready for ``ModelGateway.generate``.
    """

    sections = [_SYSTEM_PROMPT]
    if file_name:
        sections.append(f"File: {file_name}")
    sections.append("Current Metadata:\n" + render_metadata(metadata))
    sections.append(_reply_format())
    return "\n\n".join(sections)


__all__ = [
    "NO_SUGGESTIONS_MARKER",
    "SUGGESTIONS_DELIMITER",
    "UNKNOWN_MARKER",
    "build_prompt",
    "field_title",
    "render_metadata",
]
