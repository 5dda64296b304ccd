"""Mutagen-backed tag adapters."""

from ._mutagen_keys import SUPPORTED_EXTENSIONS
from .mutagen_reader import MutagenTagReader
from .mutagen_writer import MutagenTagWriter

__all__ = ["MutagenTagReader", "MutagenTagWriter", "SUPPORTED_EXTENSIONS"]
