"""Fold accepted suggestions into a metadata snapshot."""

from __future__ import annotations

from collections.abc import Iterable

from tagsmith.features.suggestions.domain.models import MetadataSuggestion
from tagsmith.platform.logging import logger
from tagsmith.shared.track_metadata import TrackMetadata

from ..domain.models import MergeOutcome


def merge_suggestions(
    metadata: TrackMetadata, suggestions: Iterable[MetadataSuggestion]
) -> MergeOutcome:
    """Return a new snapshot with each suggestion applied in order.

    ``metadata`` is never modified. A suggestion whose value cannot be stored
    (e.g. ``"early seventies"`` for the year) is skipped, not fatal.
    """

    merged = metadata
    applied: list[MetadataSuggestion] = []
    skipped: list[MetadataSuggestion] = []

    for suggestion in suggestions:
        try:
            merged = merged.with_value(suggestion.field, suggestion.suggested_value)
        except ValueError:
            logger.warning(
                "Skipping %s suggestion %r: not a valid value for this field",
                suggestion.field.value,
                suggestion.suggested_value,
            )
            skipped.append(suggestion)
            continue
        applied.append(suggestion)

    changed = tuple(
        dict.fromkeys(
            suggestion.field
            for suggestion in applied
            if merged.value_of(suggestion.field) != metadata.value_of(suggestion.field)
        )
    )
    return MergeOutcome(
        metadata=merged,
        applied=tuple(applied),
        skipped=tuple(skipped),
        changed_fields=changed,
    )


__all__ = ["merge_suggestions"]
