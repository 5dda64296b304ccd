"""Command line argument options."""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, final

from tagsmith.config.settings import RuntimeSettings
from tagsmith.features.suggestions.domain.models import Confidence
from tagsmith.shared.track_metadata import TagField


@final
@dataclass(slots=True)
class AnalyzeArgs:
    """Command line arguments for the ``analyze`` subcommand."""

    command: Literal["analyze"]
    file_path: Path
    settings: RuntimeSettings
    verbose: bool
    quiet: bool


@final
@dataclass(slots=True)
class SuggestArgs:
    """Command line arguments for the ``suggest`` subcommand."""

    command: Literal["suggest"]
    file_path: Path
    settings: RuntimeSettings
    verbose: bool
    quiet: bool


@final
@dataclass(slots=True)
class ApplyArgs:
    """Command line arguments for the ``apply`` subcommand."""

    command: Literal["apply"]
    report_path: Path
    settings: RuntimeSettings
    verbose: bool
    quiet: bool
    min_confidence: Confidence | None = None
    fields: tuple[TagField, ...] = ()


CLIArgs = AnalyzeArgs | SuggestArgs | ApplyArgs

__all__ = ["AnalyzeArgs", "ApplyArgs", "CLIArgs", "SuggestArgs"]
