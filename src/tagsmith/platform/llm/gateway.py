"""Where: src/tagsmith/platform/llm/gateway.py
What: Capability protocol every language-model backend satisfies.
Why: Parser and agent depend on prompt-in/text-out only, never on a backend type.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ModelGateway(Protocol):
    """Send one prompt to a language model and return its plain-text reply."""

    def generate(self, prompt: str) -> str:
        """Return the model's reply.

        Raises:
            ModelRequestError: Backend unreachable, non-success status, or unusable body.
            ModelTimeoutError: No reply within the bounded wait.
        """
        ...

    def provider_name(self) -> str:
        """Human-readable backend name, e.g. ``"Ollama"``."""
        ...


__all__ = ["ModelGateway"]
