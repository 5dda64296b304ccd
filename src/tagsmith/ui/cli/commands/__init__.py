"""Command execution package for CLI."""

from tagsmith.ui.cli.commands.executor import CommandExecutor
from tagsmith.ui.cli.commands.analyze import AnalyzeCommand
from tagsmith.ui.cli.commands.suggest import SuggestCommand
from tagsmith.ui.cli.commands.apply import ApplyCommand

__all__ = [
    "AnalyzeCommand",
    "ApplyCommand",
    "CommandExecutor",
    "SuggestCommand",
]
