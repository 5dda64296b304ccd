"""Command line interface package."""

from tagsmith.ui.cli.cli import CommandProcessor, main

__all__ = ["CommandProcessor", "main"]
