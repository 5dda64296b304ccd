"""Apply use cases: merging suggestions and producing updated copies."""

from .file_operations import calculate_file_hash, find_available_path
from .merge import merge_suggestions
from .safe_apply import SafeApplyEngine

__all__ = [
    "SafeApplyEngine",
    "calculate_file_hash",
    "find_available_path",
    "merge_suggestions",
]
