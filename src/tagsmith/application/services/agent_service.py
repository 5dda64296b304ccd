"""Application service running the analyze, suggest, and apply workflows.

This layer wires the tag reader, prompt builder, model gateway, reply parser,
report store, and apply engine together so that the CLI (or any other UI)
only has to pick a workflow and display its result.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import final

from tagsmith.config.settings import RuntimeSettings
from tagsmith.features.apply.domain.models import ApplyResult, SuggestionFilter, accept_all
from tagsmith.features.apply.usecases.safe_apply import SafeApplyEngine
from tagsmith.features.suggestions.adapters.json_report_store import JsonReportStore
from tagsmith.features.suggestions.domain.models import (
    MetadataSuggestion,
    ParsedReply,
    SuggestionsReport,
)
from tagsmith.features.suggestions.usecases.ports import ReportStorePort
from tagsmith.features.suggestions.usecases.prompt_builder import build_prompt
from tagsmith.features.suggestions.usecases.reply_parser import parse_reply
from tagsmith.features.suggestions.usecases.report_builder import Clock, build_report
from tagsmith.features.tags.adapters.mutagen_reader import MutagenTagReader
from tagsmith.features.tags.adapters.mutagen_writer import MutagenTagWriter
from tagsmith.features.tags.usecases.ports import TagReaderPort, TagWriterPort
from tagsmith.platform.llm.gateway import ModelGateway
from tagsmith.platform.llm.registry import build_gateway
from tagsmith.platform.logging import logger
from tagsmith.shared.errors import TagsmithError
from tagsmith.shared.track_metadata import TrackMetadata


@dataclass(frozen=True)
class AnalysisResult:
    """Outcome of ``analyze``: nothing has been written anywhere.

    Attributes:
        file_path: Audio file that was analysed.
        metadata: Snapshot the prompt was built from.
        narrative: Model commentary preceding the suggestions section.
        suggestions: Parsed suggestions in reply order.
        provider: Human-readable backend name, e.g. ``"Ollama"``.
    """

    file_path: Path
    metadata: TrackMetadata
    narrative: str
    suggestions: tuple[MetadataSuggestion, ...]
    provider: str


@dataclass(frozen=True)
class SuggestResult:
    """Outcome of ``suggest``: the analysis plus the persisted report."""

    analysis: AnalysisResult
    report: SuggestionsReport
    report_path: Path


@final
class MetadataAgent:
    """Run the three workflows against injected ports.

    Errors from any step propagate unchanged after a ``workflow.error`` event
    is logged; no step is retried.
    """

    def __init__(
        self,
        gateway: ModelGateway,
        *,
        reader: TagReaderPort,
        report_store: ReportStorePort,
        apply_engine: SafeApplyEngine,
        clock: Clock | None = None,
    ) -> None:
        self._gateway: ModelGateway = gateway
        self._reader: TagReaderPort = reader
        self._report_store: ReportStorePort = report_store
        self._apply_engine: SafeApplyEngine = apply_engine
        self._clock: Clock | None = clock

    def analyze(self, file_path: Path) -> AnalysisResult:
        """Read tags, ask the model, and parse its reply; writes nothing."""

        try:
            return self._analyze(file_path)
        except TagsmithError as exc:
            self._log_error(file_path, exc)
            raise

    def suggest(self, file_path: Path) -> SuggestResult:
        """Analyze ``file_path`` and persist the result as a suggestions report."""

        try:
            analysis = self._analyze(file_path)
            report = build_report(
                analysis.file_path,
                analysis.metadata,
                _as_parsed(analysis),
                clock=self._clock,
            )
            report_path = self._report_store.save(report)
        except TagsmithError as exc:
            self._log_error(file_path, exc)
            raise

        logger.info(
            "Suggestions saved to %s",
            report_path,
            extra={
                "workflow_event": "workflow.suggest.saved",
                "path": str(report_path),
                "suggestion_count": len(report.suggestions),
            },
        )
        return SuggestResult(analysis=analysis, report=report, report_path=report_path)

    def apply(
        self,
        report_path: Path,
        *,
        suggestion_filter: SuggestionFilter | None = None,
    ) -> ApplyResult:
        """Load a report written by any earlier ``suggest`` run and apply it."""

        try:
            report = self._report_store.load(report_path)
            logger.info(
                "Applying suggestions to %s",
                report.file_path,
                extra={
                    "workflow_event": "workflow.apply.start",
                    "path": report.file_path,
                    "suggestion_count": len(report.suggestions),
                },
            )
            result = self._apply_engine.apply(report, suggestion_filter=suggestion_filter)
        except TagsmithError as exc:
            self._log_error(report_path, exc)
            raise

        logger.info(
            "Wrote %s",
            result.destination_path,
            extra={
                "workflow_event": "workflow.apply.complete",
                "path": str(result.destination_path),
                "suggestion_count": len(result.applied),
            },
        )
        return result

    def _analyze(self, file_path: Path) -> AnalysisResult:
        # Reports outlive the working directory they were produced in.
        file_path = file_path.expanduser().resolve()
        logger.info(
            "Reading tags from %s",
            file_path,
            extra={"workflow_event": "workflow.read", "path": str(file_path)},
        )
        metadata = self._reader.read(file_path)
        prompt = build_prompt(metadata, file_name=file_path.name)

        provider = self._gateway.provider_name()
        logger.info(
            "Asking %s",
            provider,
            extra={
                "workflow_event": "workflow.model.request",
                "provider": provider,
                "model": getattr(self._gateway, "model", None),
            },
        )
        reply = self._gateway.generate(prompt)
        parsed = parse_reply(reply, metadata)

        logger.info(
            "Analysis complete for %s",
            file_path,
            extra={
                "workflow_event": "workflow.analyze.complete",
                "path": str(file_path),
                "suggestion_count": len(parsed.suggestions),
            },
        )
        return AnalysisResult(
            file_path=file_path,
            metadata=metadata,
            narrative=parsed.narrative,
            suggestions=parsed.suggestions,
            provider=provider,
        )

    @staticmethod
    def _log_error(path: Path | str, exc: TagsmithError) -> None:
        logger.debug(
            "Workflow failed for %s",
            path,
            extra={
                "workflow_event": "workflow.error",
                "path": str(path),
                "error_message": str(exc),
            },
        )


def _as_parsed(analysis: AnalysisResult) -> ParsedReply:
    return ParsedReply(narrative=analysis.narrative, suggestions=analysis.suggestions)


def build_agent(
    settings: RuntimeSettings,
    *,
    suggestion_filter: SuggestionFilter | None = None,
    reader: TagReaderPort | None = None,
    writer: TagWriterPort | None = None,
    gateway: ModelGateway | None = None,
) -> MetadataAgent:
    """Wire a ``MetadataAgent`` with the default adapters for ``settings``.

    Raises:
        ConfigError: If ``settings.provider`` names no registered backend.
    """

    resolved_gateway = gateway or build_gateway(
        settings.provider,
        base_url=settings.server_url,
        model=settings.model,
        timeout=settings.request_timeout,
        connect_timeout=settings.connect_timeout,
    )
    engine = SafeApplyEngine(
        writer or MutagenTagWriter(),
        updated_dir=settings.updated_dir,
        suggestion_filter=suggestion_filter or accept_all,
        chunk_size=settings.file_hash_chunk_size,
    )
    return MetadataAgent(
        resolved_gateway,
        reader=reader or MutagenTagReader(),
        report_store=JsonReportStore(settings.suggestions_dir),
        apply_engine=engine,
    )


__all__ = ["AnalysisResult", "MetadataAgent", "SuggestResult", "build_agent"]
