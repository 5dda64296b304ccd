"""Command line argument handling package."""

from tagsmith.ui.cli.args.parser import ArgumentParser
from tagsmith.ui.cli.args.options import AnalyzeArgs, ApplyArgs, CLIArgs, SuggestArgs

__all__ = ["AnalyzeArgs", "ApplyArgs", "ArgumentParser", "CLIArgs", "SuggestArgs"]
