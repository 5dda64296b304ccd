# Where: tagsmith.shared.__init__
# What: Provide a concise import surface for shared dataclasses and errors.
# Why: Encourage consistent reuse of shared helpers across features.

"""Shared cross-cutting utilities exposed at the package level."""

from .errors import (
    ConfigError,
    FileReadError,
    MetadataParseError,
    ModelRequestError,
    ModelTimeoutError,
    ReportParseError,
    TagsmithError,
    WriteFailureError,
)
from .track_metadata import TagField, TrackMetadata

__all__ = [
    "ConfigError",
    "FileReadError",
    "MetadataParseError",
    "ModelRequestError",
    "ModelTimeoutError",
    "ReportParseError",
    "TagField",
    "TagsmithError",
    "TrackMetadata",
    "WriteFailureError",
]
