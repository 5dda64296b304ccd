"""Summary: Value objects and suggestion filters for the apply workflow.
Why: Let callers choose which suggestions to accept without touching the engine."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path

from tagsmith.features.suggestions.domain.models import Confidence, MetadataSuggestion
from tagsmith.shared.track_metadata import TagField, TrackMetadata

SuggestionFilter = Callable[[MetadataSuggestion], bool]


def accept_all(_suggestion: MetadataSuggestion) -> bool:
    """Default policy: every suggestion in the report is accepted."""
    return True


def confidence_at_least(level: Confidence) -> SuggestionFilter:
    """Accept suggestions whose confidence ranks at or above ``level``."""

    def _accept(suggestion: MetadataSuggestion) -> bool:
        return suggestion.confidence.rank >= level.rank

    return _accept


def only_fields(tag_fields: Iterable[TagField]) -> SuggestionFilter:
    allowed = frozenset(tag_fields)

    def _accept(suggestion: MetadataSuggestion) -> bool:
        return suggestion.field in allowed

    return _accept


def all_of(*filters: SuggestionFilter) -> SuggestionFilter:
    """Combine filters; a suggestion must pass every one of them."""

    def _accept(suggestion: MetadataSuggestion) -> bool:
        return all(check(suggestion) for check in filters)

    return _accept


@dataclass(slots=True, frozen=True)
class MergeOutcome:
    """New snapshot plus the suggestions that did and did not make it in.

    ``changed_fields`` lists, in suggestion order, the fields whose stored
    value differs from the input snapshot; only these are written to disk.
    """

    metadata: TrackMetadata
    applied: tuple[MetadataSuggestion, ...] = ()
    skipped: tuple[MetadataSuggestion, ...] = ()
    changed_fields: tuple[TagField, ...] = ()


@dataclass(slots=True, frozen=True)
class ApplyResult:
    """Outcome of one apply run; the source hashes prove it was not modified."""

    source_path: Path
    destination_path: Path
    metadata: TrackMetadata
    applied: tuple[MetadataSuggestion, ...] = ()
    skipped: tuple[MetadataSuggestion, ...] = ()
    source_hash_before: str = ""
    source_hash_after: str = ""

    @property
    def source_unchanged(self) -> bool:
        return self.source_hash_before == self.source_hash_after


__all__ = [
    "ApplyResult",
    "MergeOutcome",
    "SuggestionFilter",
    "accept_all",
    "all_of",
    "confidence_at_least",
    "only_fields",
]
