"""Command line interface for tagsmith."""

import sys
from collections.abc import Sequence
from typing import final

from tagsmith.platform.logging import logger
from tagsmith.shared.errors import TagsmithError
from tagsmith.ui.cli.args import ArgumentParser
from tagsmith.ui.cli.args.options import AnalyzeArgs, ApplyArgs, CLIArgs, SuggestArgs
from tagsmith.ui.cli.commands import AnalyzeCommand, ApplyCommand, SuggestCommand


@final
class CommandProcessor:
    """Command line interface processor."""

    @staticmethod
    def process_command(args_list: Sequence[str] | None = None) -> None:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).
        """
        try:
            args: CLIArgs = ArgumentParser.process_args(args_list)

            if isinstance(args, AnalyzeArgs):
                _ = AnalyzeCommand(args).execute()
                return

            if isinstance(args, SuggestArgs):
                _ = SuggestCommand(args).execute()
                return

            assert isinstance(args, ApplyArgs)
            _ = ApplyCommand(args).execute()
            return

        except KeyboardInterrupt:
            logger.info("\nOperation cancelled by user")
            sys.exit(130)
        except TagsmithError as e:
            logger.error("%s", e)
            sys.exit(1)
        except Exception as e:
            logger.error("An unexpected error occurred: %s", str(e))
            sys.exit(1)


def main(args_list: Sequence[str] | None = None) -> int:
    """Main entry point.

    Returns:
        int: Process exit code (0 on success). Failures leave through
        ``sys.exit(...)`` inside command processing, so this return is only
        reached when the workflow completed.
    """
    CommandProcessor.process_command(args_list)
    return 0
