"""Tag value helpers.

Where: src/tagsmith/shared/tag_values.py
What: Pure helpers for coercing raw tag text into the canonical field types.
Why: Reader, snapshot normalisation, and merge all need identical parsing rules.
"""

from __future__ import annotations

__all__ = [
    "clean_text",
    "parse_slash_separated",
    "parse_year",
    "parse_track_number",
    "safe_get_first",
]


def safe_get_first(data: list[str] | None, default: str = "") -> str:
    """Safely get the first element from a list or return the default."""
    return data[0] if data else default


def clean_text(value: object) -> str | None:
    """Return stripped text, or ``None`` when the value is absent or blank."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_slash_separated(value: str) -> tuple[int | None, int | None]:
    """Parse a string in 'number/total' format.

    Returns a tuple (number, total) or (None, None) if conversion fails.
    """
    parts: list[str] = value.strip().split(sep="/") if value else []
    num: int | None = int(parts[0]) if parts and parts[0].strip().isdigit() else None
    total: int | None = (
        int(parts[1]) if len(parts) > 1 and parts[1].strip().isdigit() else None
    )
    return num, total


def parse_year(date_str: str) -> int | None:
    """Parse a year from a string (expects the first 4 characters to be digits)."""
    date_str = date_str.strip() if date_str else ""
    return int(date_str[:4]) if len(date_str) >= 4 and date_str[:4].isdigit() else None


def parse_track_number(value: str) -> int | None:
    """Parse a track number from ``"2"``, ``"02"`` or ``"2/12"``."""
    num, _ = parse_slash_separated(value)
    return num
