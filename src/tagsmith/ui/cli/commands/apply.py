"""Apply command implementation for the CLI."""

from __future__ import annotations

from typing import override

from tagsmith.features.apply.domain.models import (
    ApplyResult,
    SuggestionFilter,
    all_of,
    confidence_at_least,
    only_fields,
)
from tagsmith.ui.cli.args.options import ApplyArgs
from tagsmith.ui.cli.commands.executor import AgentFactory, CommandExecutor
from tagsmith.ui.cli.display.apply_result import ApplyResultDisplay


class ApplyCommand(CommandExecutor[ApplyArgs, ApplyResult]):
    """Command that writes a report's suggestions into an updated copy."""

    def __init__(self, args: ApplyArgs, *, agent_factory: AgentFactory | None = None) -> None:
        super().__init__(args, agent_factory=agent_factory)
        self.display = ApplyResultDisplay()

    @override
    def suggestion_filter(self) -> SuggestionFilter | None:
        filters: list[SuggestionFilter] = []
        if self.args.min_confidence is not None:
            filters.append(confidence_at_least(self.args.min_confidence))
        if self.args.fields:
            filters.append(only_fields(self.args.fields))
        if not filters:
            return None
        return filters[0] if len(filters) == 1 else all_of(*filters)

    @override
    def execute(self) -> ApplyResult:
        result = self.agent.apply(self.args.report_path)
        self.display.show_result(result, quiet=self.args.quiet)
        return result
