"""Command line argument parser."""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import final

from tagsmith import __version__
from tagsmith.config.settings import RuntimeSettings, load_settings
from tagsmith.features.suggestions.domain.models import Confidence
from tagsmith.platform.llm.registry import available_providers
from tagsmith.platform.logging import DEFAULT_LOG_FILE, logger, setup_logger
from tagsmith.shared.track_metadata import TagField
from tagsmith.ui.cli.args.options import AnalyzeArgs, ApplyArgs, CLIArgs, SuggestArgs


def _positive_seconds(value: str) -> float:
    try:
        seconds = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number of seconds: {value!r}") from exc
    if seconds <= 0:
        raise argparse.ArgumentTypeError("timeout must be greater than zero")
    return seconds


def _confidence(value: str) -> Confidence:
    try:
        return Confidence.parse(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _tag_field(value: str) -> TagField:
    tag_field = TagField.from_label(value)
    if tag_field is None:
        valid = ", ".join(f.value for f in TagField)
        raise argparse.ArgumentTypeError(f"unknown field {value!r} (valid: {valid})")
    return tag_field


@final
class ArgumentParser:
    """Command line argument parser."""

    @staticmethod
    def create_parser() -> argparse.ArgumentParser:
        """Create argument parser.

        Returns:
            argparse.ArgumentParser: Configured argument parser.
        """
        parser = argparse.ArgumentParser(
            prog="tagsmith",
            description=(
                "tagsmith - Ask a locally hosted language model to review audio tags, "
                "save its suggestions, and apply them to a copy of the file."
            ),
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        _ = parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

        subparsers = parser.add_subparsers(dest="command", required=True)

        analyze_parser = subparsers.add_parser(
            "analyze",
            help="Show the model's analysis and suggestions without writing anything",
        )
        _ = analyze_parser.add_argument(
            "file_path",
            type=str,
            help="Audio file to analyze",
            metavar="FILE",
        )
        ArgumentParser._add_shared_options(analyze_parser)

        suggest_parser = subparsers.add_parser(
            "suggest",
            help="Analyze a file and save the suggestions as a JSON report",
        )
        _ = suggest_parser.add_argument(
            "file_path",
            type=str,
            help="Audio file to analyze",
            metavar="FILE",
        )
        _ = suggest_parser.add_argument(
            "--suggestions-dir",
            type=str,
            help="Directory for the report (defaults next to the audio file)",
            metavar="DIR",
        )
        ArgumentParser._add_shared_options(suggest_parser)

        apply_parser = subparsers.add_parser(
            "apply",
            help="Write a report's suggestions into an updated copy of the audio file",
        )
        _ = apply_parser.add_argument(
            "report_path",
            type=str,
            help="Suggestions report produced by 'suggest'",
            metavar="REPORT",
        )
        _ = apply_parser.add_argument(
            "--min-confidence",
            type=_confidence,
            help="Only apply suggestions at or above this confidence (Low, Medium, High)",
            metavar="LEVEL",
        )
        _ = apply_parser.add_argument(
            "--field",
            dest="fields",
            type=_tag_field,
            action="append",
            default=[],
            help="Only apply suggestions for this field (repeatable)",
            metavar="FIELD",
        )
        _ = apply_parser.add_argument(
            "--updated-dir",
            type=str,
            help="Directory for the updated copy (defaults next to the audio file)",
            metavar="DIR",
        )
        ArgumentParser._add_shared_options(apply_parser)

        return parser

    @staticmethod
    def _add_shared_options(parser: argparse.ArgumentParser) -> None:
        """Options every subcommand accepts; unset values fall back to the config file."""

        _ = parser.add_argument(
            "--model",
            type=str,
            help="Model identifier passed to the backend",
        )
        _ = parser.add_argument(
            "--server-url",
            "--ollama-url",
            dest="server_url",
            type=str,
            help="Address of the model server, e.g. http://localhost:11434",
            metavar="URL",
        )
        _ = parser.add_argument(
            "--provider",
            type=str,
            help=f"Model backend ({', '.join(available_providers())})",
        )
        _ = parser.add_argument(
            "--timeout",
            type=_positive_seconds,
            help="Seconds to wait for the model reply",
            metavar="SECONDS",
        )
        verbosity = parser.add_mutually_exclusive_group()
        _ = verbosity.add_argument(
            "--verbose",
            action="store_true",
            help="Show detailed processing information",
        )
        _ = verbosity.add_argument(
            "--quiet",
            action="store_true",
            help="Suppress all output except errors and results",
        )

    @staticmethod
    def process_args(args_list: Sequence[str] | None = None) -> CLIArgs:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).

        Returns:
            Args: Processed command line arguments.

        Raises:
            ConfigError: If the configuration file is invalid.
            SystemExit: On usage errors (exit code 2).
        """
        parser = ArgumentParser.create_parser()
        parsed_args = parser.parse_args(args_list)

        # Set log level based on verbosity flags
        is_quiet = bool(getattr(parsed_args, "quiet", False))
        is_verbose = bool(getattr(parsed_args, "verbose", False))

        if is_quiet:
            log_level = logging.ERROR
        elif is_verbose:
            log_level = logging.DEBUG
        else:
            log_level = logging.INFO

        settings = ArgumentParser._resolve_settings(parsed_args)
        log_file_path = settings.log_file or DEFAULT_LOG_FILE
        _ = setup_logger(log_file=log_file_path, console_level=log_level)

        command: str = parsed_args.command

        if command == "analyze":
            return AnalyzeArgs(
                command="analyze",
                file_path=Path(parsed_args.file_path),
                settings=settings,
                verbose=is_verbose,
                quiet=is_quiet,
            )

        if command == "suggest":
            return SuggestArgs(
                command="suggest",
                file_path=Path(parsed_args.file_path),
                settings=settings,
                verbose=is_verbose,
                quiet=is_quiet,
            )

        if command == "apply":
            return ApplyArgs(
                command="apply",
                report_path=Path(parsed_args.report_path),
                settings=settings,
                verbose=is_verbose,
                quiet=is_quiet,
                min_confidence=parsed_args.min_confidence,
                fields=tuple(dict.fromkeys(parsed_args.fields)),
            )

        logger.error("Unsupported command: %s", command)
        sys.exit(2)

    @staticmethod
    def _resolve_settings(parsed_args: argparse.Namespace) -> RuntimeSettings:
        """Load persisted settings and let explicit flags win."""

        suggestions_dir = getattr(parsed_args, "suggestions_dir", None)
        updated_dir = getattr(parsed_args, "updated_dir", None)
        provider = parsed_args.provider

        return load_settings().with_overrides(
            model=parsed_args.model,
            server_url=parsed_args.server_url.rstrip("/") if parsed_args.server_url else None,
            provider=provider.strip().lower() if provider else None,
            request_timeout=parsed_args.timeout,
            suggestions_dir=Path(suggestions_dir).expanduser() if suggestions_dir else None,
            updated_dir=Path(updated_dir).expanduser() if updated_dir else None,
        )


__all__ = ["ArgumentParser"]
