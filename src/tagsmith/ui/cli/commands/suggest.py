"""src/tagsmith/ui/cli/commands/suggest.py
What: Run the suggest workflow and report where the JSON artifact landed.
Why: The saved report is what a later ``apply`` run consumes.
"""

from typing import override

from tagsmith.application.services.agent_service import SuggestResult
from tagsmith.ui.cli.args.options import SuggestArgs
from tagsmith.ui.cli.commands.executor import AgentFactory, CommandExecutor
from tagsmith.ui.cli.display.analysis import AnalysisDisplay


class SuggestCommand(CommandExecutor[SuggestArgs, SuggestResult]):
    """Command for analyzing a file and saving its suggestions report."""

    def __init__(self, args: SuggestArgs, *, agent_factory: AgentFactory | None = None) -> None:
        super().__init__(args, agent_factory=agent_factory)
        self.display = AnalysisDisplay()

    @override
    def execute(self) -> SuggestResult:
        result = self.agent.suggest(self.args.file_path)
        analysis = result.analysis
        if not self.args.quiet:
            self.display.show_metadata(analysis.file_path, analysis.metadata)
            self.display.show_narrative(analysis.narrative, analysis.provider)
        self.display.show_suggestions(analysis.suggestions)
        self.display.show_report_path(result.report_path)
        return result
