"""Tests for the Ollama model gateway and backend registry."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest
import requests
from pytest_mock import MockerFixture

from tagsmith.platform.llm import ModelGateway, OllamaGateway, available_providers, build_gateway
from tagsmith.shared.errors import ConfigError, ModelRequestError, ModelTimeoutError

_POST = "tagsmith.platform.llm.ollama._http_post_json"


def _response(status: int = 200, payload: Any = None, text: str = "") -> MagicMock:
    response = MagicMock()
    response.status_code = status
    response.text = text
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    return response


def test_generate_posts_non_streaming_request(mocker: MockerFixture) -> None:
    post = mocker.patch(_POST, return_value=_response(payload={"response": "All good."}))
    gateway = OllamaGateway("http://localhost:11434/", "llama3.2", timeout=30.0, connect_timeout=2.0)

    assert gateway.generate("prompt text") == "All good."

    post.assert_called_once_with(
        "http://localhost:11434/api/generate",
        {"model": "llama3.2", "prompt": "prompt text", "stream": False},
        (2.0, 30.0),
    )


def test_gateway_satisfies_capability_protocol() -> None:
    gateway = OllamaGateway("http://localhost:11434", "llama3.2")

    assert isinstance(gateway, ModelGateway)
    assert gateway.provider_name() == "Ollama"


def test_timeout_maps_to_model_timeout_error(mocker: MockerFixture) -> None:
    _ = mocker.patch(_POST, side_effect=requests.Timeout("read timed out"))

    with pytest.raises(ModelTimeoutError):
        _ = OllamaGateway("http://localhost:11434", "llama3.2").generate("p")


def test_connection_failure_maps_to_request_error(mocker: MockerFixture) -> None:
    _ = mocker.patch(_POST, side_effect=requests.ConnectionError("refused"))

    with pytest.raises(ModelRequestError, match="Is Ollama running"):
        _ = OllamaGateway("http://localhost:11434", "llama3.2").generate("p")


def test_error_status_includes_truncated_body(mocker: MockerFixture) -> None:
    _ = mocker.patch(_POST, return_value=_response(status=404, text="model not found " * 50))

    with pytest.raises(ModelRequestError, match="status 404") as excinfo:
        _ = OllamaGateway("http://localhost:11434", "missing").generate("p")

    assert len(str(excinfo.value)) < 400


@pytest.mark.parametrize(
    "payload",
    [ValueError("not json"), {"done": True}, {"response": 42}, ["response"]],
)
def test_unusable_bodies_raise_request_error(mocker: MockerFixture, payload: Any) -> None:
    _ = mocker.patch(_POST, return_value=_response(payload=payload))

    with pytest.raises(ModelRequestError):
        _ = OllamaGateway("http://localhost:11434", "llama3.2").generate("p")


def test_registry_builds_ollama_case_insensitively() -> None:
    gateway = build_gateway(
        " Ollama ",
        base_url="http://gpu-box:11434",
        model="mistral",
        timeout=10.0,
        connect_timeout=1.0,
    )

    assert isinstance(gateway, OllamaGateway)
    assert gateway.base_url == "http://gpu-box:11434"
    assert gateway.model == "mistral"
    assert "ollama" in available_providers()


def test_registry_rejects_unknown_provider() -> None:
    with pytest.raises(ConfigError, match="Valid options: ollama"):
        _ = build_gateway(
            "openai", base_url="x", model="gpt", timeout=1.0, connect_timeout=1.0
        )
