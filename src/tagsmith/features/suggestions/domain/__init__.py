"""Domain values for model-produced tag suggestions."""

from .models import Confidence, MetadataSuggestion, ParsedReply, SuggestionsReport
from .serialization import report_from_dict, report_to_dict

__all__ = [
    "Confidence",
    "MetadataSuggestion",
    "ParsedReply",
    "SuggestionsReport",
    "report_from_dict",
    "report_to_dict",
]
