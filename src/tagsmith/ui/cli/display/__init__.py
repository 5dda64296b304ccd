"""Display management for CLI interface."""

from tagsmith.ui.cli.display.analysis import AnalysisDisplay
from tagsmith.ui.cli.display.apply_result import ApplyResultDisplay

__all__ = ["AnalysisDisplay", "ApplyResultDisplay"]
