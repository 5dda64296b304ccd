"""Where: src/tagsmith/platform/llm/ollama.py
What: ModelGateway backed by a local Ollama server's ``/api/generate`` endpoint.
Why: Keep HTTP concerns (timeouts, status handling, body decoding) out of the agent.
"""

from __future__ import annotations

from typing import Any, Final

import requests

from tagsmith.platform.logging import logger
from tagsmith.shared.errors import ModelRequestError, ModelTimeoutError

_GENERATE_PATH: Final[str] = "/api/generate"
_ERROR_BODY_LIMIT: Final[int] = 300


def _http_post_json(
    url: str, payload: dict[str, Any], timeout: tuple[float, float]
) -> requests.Response:
    """Thin wrapper kept for tests patching the HTTP boundary."""

    return requests.post(url, json=payload, timeout=timeout)


class OllamaGateway:
    """Single request/response exchange with an Ollama server, no retries."""

    def __init__(
        self,
        base_url: str,
        model: str,
        *,
        timeout: float = 120.0,
        connect_timeout: float = 5.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self.connect_timeout = connect_timeout

    def provider_name(self) -> str:
        return "Ollama"

    def generate(self, prompt: str) -> str:
        url = f"{self.base_url}{_GENERATE_PATH}"
        payload = {"model": self.model, "prompt": prompt, "stream": False}
        logger.debug("POST %s (model=%s, prompt=%d chars)", url, self.model, len(prompt))

        try:
            response = _http_post_json(url, payload, (self.connect_timeout, self.timeout))
        except requests.Timeout as exc:
            raise ModelTimeoutError(
                f"No reply from Ollama at {self.base_url} within {self.timeout:.0f}s"
            ) from exc
        except requests.RequestException as exc:
            raise ModelRequestError(
                f"Failed to connect to Ollama at {self.base_url}. Is Ollama running? ({exc})"
            ) from exc

        status = int(response.status_code)
        if not 200 <= status < 300:
            body = (response.text or "").strip()[:_ERROR_BODY_LIMIT]
            raise ModelRequestError(
                f"Ollama request failed with status {status}" + (f": {body}" if body else "")
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise ModelRequestError(f"Ollama returned a non-JSON body: {exc}") from exc

        reply = data.get("response") if isinstance(data, dict) else None
        if not isinstance(reply, str):
            raise ModelRequestError("Ollama reply did not contain a 'response' string")

        logger.debug("Ollama replied with %d chars", len(reply))
        return reply


__all__ = ["OllamaGateway"]
