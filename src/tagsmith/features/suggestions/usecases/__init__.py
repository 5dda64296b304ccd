"""Use cases for building prompts, parsing replies, and assembling reports."""

from .ports import ReportStorePort
from .prompt_builder import SUGGESTIONS_DELIMITER, UNKNOWN_MARKER, build_prompt
from .reply_parser import parse_reply, split_reply
from .report_builder import build_report

__all__ = [
    "ReportStorePort",
    "SUGGESTIONS_DELIMITER",
    "UNKNOWN_MARKER",
    "build_prompt",
    "build_report",
    "parse_reply",
    "split_reply",
]
