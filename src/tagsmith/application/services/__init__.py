"""Application services consumed by the UIs."""

from .agent_service import AnalysisResult, MetadataAgent, SuggestResult, build_agent

__all__ = ["AnalysisResult", "MetadataAgent", "SuggestResult", "build_agent"]
