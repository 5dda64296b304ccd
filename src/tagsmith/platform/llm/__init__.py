"""Language-model gateway package.

Exposes the ``ModelGateway`` capability protocol, the Ollama backend, and the
startup-time backend registry.
"""

from .gateway import ModelGateway
from .ollama import OllamaGateway
from .registry import available_providers, build_gateway

__all__ = ["ModelGateway", "OllamaGateway", "available_providers", "build_gateway"]
