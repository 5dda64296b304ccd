"""Summary: Select a ModelGateway backend by provider name at startup.
Why: New backends register here without touching the parser or the agent."""

from __future__ import annotations

from collections.abc import Callable
from typing import Final

from tagsmith.shared.errors import ConfigError

from .gateway import ModelGateway
from .ollama import OllamaGateway

GatewayFactory = Callable[[str, str, float, float], ModelGateway]


def _build_ollama(base_url: str, model: str, timeout: float, connect_timeout: float) -> ModelGateway:
    return OllamaGateway(base_url, model, timeout=timeout, connect_timeout=connect_timeout)


_BACKENDS: Final[dict[str, GatewayFactory]] = {
    "ollama": _build_ollama,
}


def available_providers() -> list[str]:
    return sorted(_BACKENDS)


def build_gateway(
    provider: str,
    *,
    base_url: str,
    model: str,
    timeout: float,
    connect_timeout: float,
) -> ModelGateway:
    """Construct the backend registered under ``provider``.

    Raises:
        ConfigError: If no backend is registered under that name.
    """

    factory = _BACKENDS.get(provider.strip().lower())
    if factory is None:
        valid = ", ".join(available_providers())
        raise ConfigError(f"Unsupported model provider '{provider}'. Valid options: {valid}")
    return factory(base_url, model, timeout, connect_timeout)


__all__ = ["GatewayFactory", "available_providers", "build_gateway"]
