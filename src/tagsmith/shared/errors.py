"""Summary: Error hierarchy surfaced by the tag suggestion workflows.
Why: Give the CLI one base class to catch while keeping each failure kind distinct."""

from __future__ import annotations

from typing import ClassVar


class TagsmithError(Exception):
    """Base class for failures that terminate a workflow."""

    kind: ClassVar[str] = "Error"

    def __str__(self) -> str:
        message = super().__str__()
        return f"{self.kind}: {message}" if message else self.kind


class FileReadError(TagsmithError):
    """Source file (audio or report) is missing or unreadable."""

    kind = "FileRead"


class MetadataParseError(TagsmithError):
    """Tag data could not be read or written by the tag library."""

    kind = "MetadataParse"


class ModelRequestError(TagsmithError):
    """Model backend unreachable, failing, or replying with an unusable body."""

    kind = "RequestFailure"


class ModelTimeoutError(TagsmithError):
    """Model backend did not answer within the bounded wait."""

    kind = "Timeout"


class ReportParseError(TagsmithError):
    """Persisted suggestions artifact violates the JSON contract."""

    kind = "ReportParse"


class WriteFailureError(TagsmithError):
    """Destination file or artifact could not be created."""

    kind = "WriteFailure"


class ConfigError(TagsmithError):
    """Invalid configuration or unknown backend selection."""

    kind = "Config"


__all__ = [
    "ConfigError",
    "FileReadError",
    "MetadataParseError",
    "ModelRequestError",
    "ModelTimeoutError",
    "ReportParseError",
    "TagsmithError",
    "WriteFailureError",
]
