"""Tag use case ports."""

from .ports import TagReaderPort, TagWriterPort

__all__ = ["TagReaderPort", "TagWriterPort"]
