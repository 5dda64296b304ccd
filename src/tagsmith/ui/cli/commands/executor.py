"""src/tagsmith/ui/cli/commands/executor.py
What: Provide shared wiring for CLI command executors.
Why: Reuse agent construction and presentation helpers across commands.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Generic, TypeVar

from tagsmith.application.services.agent_service import MetadataAgent, build_agent
from tagsmith.config.settings import RuntimeSettings
from tagsmith.features.apply.domain.models import SuggestionFilter
from tagsmith.ui.cli.args.options import CLIArgs

AgentFactory = Callable[..., MetadataAgent]

ArgsT = TypeVar("ArgsT", bound=CLIArgs)
ResultT = TypeVar("ResultT")


class CommandExecutor(ABC, Generic[ArgsT, ResultT]):
    """Base class for command execution."""

    args: ArgsT
    agent: MetadataAgent

    def __init__(self, args: ArgsT, *, agent_factory: AgentFactory | None = None) -> None:
        """Initialize command executor.

        Args:
            args: Command line arguments.
            agent_factory: Builds the agent from runtime settings; tests inject doubles.
        """
        self.args = args
        factory = agent_factory or build_agent
        self.agent = factory(self.args.settings, suggestion_filter=self.suggestion_filter())

    def suggestion_filter(self) -> SuggestionFilter | None:
        """Filter handed to the apply engine; only ``apply`` narrows it."""
        return None

    @property
    def settings(self) -> RuntimeSettings:
        return self.args.settings

    @abstractmethod
    def execute(self) -> ResultT:
        """Execute the command and return the workflow result."""
        pass
