"""Apply domain: library layout, filters, and result types."""

from .library_layout import LibraryLayout
from .models import (
    ApplyResult,
    MergeOutcome,
    SuggestionFilter,
    accept_all,
    all_of,
    confidence_at_least,
    only_fields,
)

__all__ = [
    "ApplyResult",
    "LibraryLayout",
    "MergeOutcome",
    "SuggestionFilter",
    "accept_all",
    "all_of",
    "confidence_at_least",
    "only_fields",
]
