"""src/tagsmith/ui/cli/commands/analyze.py
What: Run the read-only analyze workflow for one file via the CLI.
Why: Let users see the model's view of their tags with zero side effects.
"""

from typing import override

from tagsmith.application.services.agent_service import AnalysisResult
from tagsmith.ui.cli.args.options import AnalyzeArgs
from tagsmith.ui.cli.commands.executor import AgentFactory, CommandExecutor
from tagsmith.ui.cli.display.analysis import AnalysisDisplay


class AnalyzeCommand(CommandExecutor[AnalyzeArgs, AnalysisResult]):
    """Command for analyzing a single file."""

    def __init__(self, args: AnalyzeArgs, *, agent_factory: AgentFactory | None = None) -> None:
        super().__init__(args, agent_factory=agent_factory)
        self.display = AnalysisDisplay()

    @override
    def execute(self) -> AnalysisResult:
        result = self.agent.analyze(self.args.file_path)
        if not self.args.quiet:
            self.display.show_metadata(result.file_path, result.metadata)
            self.display.show_narrative(result.narrative, result.provider)
        self.display.show_suggestions(result.suggestions)
        return result
