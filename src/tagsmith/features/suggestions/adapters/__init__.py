"""Adapters bridging suggestion use cases to the filesystem."""

from .json_report_store import REPORT_SUFFIX, JsonReportStore

__all__ = ["JsonReportStore", "REPORT_SUFFIX"]
