"""Data structures describing model-produced tag suggestions."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Final

from tagsmith.shared.track_metadata import TagField, TrackMetadata

_CONFIDENCE_WORD: Final[re.Pattern[str]] = re.compile(r"\b(high|medium|low)\b", re.IGNORECASE)


class Confidence(str, Enum):
    """How sure the model claims to be about a suggestion."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @property
    def rank(self) -> int:
        """Policy ordering for filters; not a score."""
        return _RANKS[self]

    @staticmethod
    def from_text(text: str | None) -> "Confidence":
        """Return the first confidence word found in ``text``, else ``LOW``."""

        match = _CONFIDENCE_WORD.search(text or "")
        if match is None:
            return Confidence.LOW
        return Confidence.parse(match.group(1))

    @staticmethod
    def find(text: str | None) -> "Confidence | None":
        """Like ``from_text`` but ``None`` when no confidence word is present."""

        match = _CONFIDENCE_WORD.search(text or "")
        return Confidence.parse(match.group(1)) if match else None

    @staticmethod
    def parse(value: str) -> "Confidence":
        """Translate a stored or user-supplied value into the matching level."""

        normalized = value.strip().lower()
        for level in Confidence:
            if level.value.lower() == normalized:
                return level
        valid = ", ".join(level.value for level in Confidence)
        raise ValueError(f"Unsupported confidence '{value}'. Valid options: {valid}")


_RANKS: Final[dict[Confidence, int]] = {
    Confidence.LOW: 0,
    Confidence.MEDIUM: 1,
    Confidence.HIGH: 2,
}


@dataclass(slots=True, frozen=True)
class MetadataSuggestion:
    """A proposed change to one metadata field."""

    field: TagField
    current_value: str | None
    suggested_value: str
    confidence: Confidence = Confidence.LOW
    reason: str = ""

    def __post_init__(self) -> None:
        if not self.suggested_value.strip():
            raise ValueError("suggested_value must not be empty")


@dataclass(slots=True, frozen=True)
class ParsedReply:
    """Narrative and structured suggestions extracted from a model reply."""

    narrative: str
    suggestions: tuple[MetadataSuggestion, ...] = ()


@dataclass(slots=True, frozen=True)
class SuggestionsReport:
    """Persisted bundle of snapshot, narrative, and suggestions for one file."""

    file_path: str
    timestamp: str
    current_metadata: TrackMetadata
    suggestions: tuple[MetadataSuggestion, ...] = ()
    raw_analysis: str = ""


__all__ = [
    "Confidence",
    "MetadataSuggestion",
    "ParsedReply",
    "SuggestionsReport",
]
