"""Where: src/tagsmith/config/settings.py
What: Derived runtime settings sourced from persisted configuration.
Why: Expose validated values to feature layers without file I/O.
Assumptions: - Config defaults remain compatible with current runtime expectations.
Trade-offs: - Validation is limited to simple boundary checks; bad values fall back to defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Final

from tagsmith.config.config import (
    CONNECT_TIMEOUT_DEFAULT,
    DEFAULT_MODEL,
    DEFAULT_PROVIDER,
    DEFAULT_SERVER_URL,
    FILE_HASH_CHUNK_SIZE_DEFAULT,
    REQUEST_TIMEOUT_DEFAULT,
    Config,
)
from tagsmith.platform.logging import logger

# Chunk size used by hashing helpers when no runtime settings are supplied.
FILE_HASH_CHUNK_SIZE: Final[int] = FILE_HASH_CHUNK_SIZE_DEFAULT


@dataclass(frozen=True, slots=True)
class RuntimeSettings:
    """Validated settings for one invocation."""

    provider: str = DEFAULT_PROVIDER
    model: str = DEFAULT_MODEL
    server_url: str = DEFAULT_SERVER_URL
    request_timeout: float = REQUEST_TIMEOUT_DEFAULT
    connect_timeout: float = CONNECT_TIMEOUT_DEFAULT
    log_file: Path | None = None
    suggestions_dir: Path | None = None
    updated_dir: Path | None = None
    file_hash_chunk_size: int = FILE_HASH_CHUNK_SIZE_DEFAULT

    def with_overrides(self, **overrides: object) -> "RuntimeSettings":
        """Return a copy with non-``None`` overrides applied (CLI flags win)."""

        present = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **present) if present else self


def _positive_float(name: str, value: object, default: float) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0:
        return float(value)
    logger.warning("Ignoring invalid %s=%r; using %s", name, value, default)
    return default


def _non_empty(name: str, value: object, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    logger.warning("Ignoring empty %s; using %s", name, default)
    return default


def settings_from_config(config: Config) -> RuntimeSettings:
    """Validate a loaded ``Config`` into ``RuntimeSettings``."""

    chunk_size = config.file_hash_chunk_size
    if not isinstance(chunk_size, int) or isinstance(chunk_size, bool) or chunk_size <= 0:
        logger.warning("Ignoring invalid file_hash_chunk_size=%r", chunk_size)
        chunk_size = FILE_HASH_CHUNK_SIZE_DEFAULT

    return RuntimeSettings(
        provider=_non_empty("provider", config.provider, DEFAULT_PROVIDER).lower(),
        model=_non_empty("model", config.model, DEFAULT_MODEL),
        server_url=_non_empty("server_url", config.server_url, DEFAULT_SERVER_URL).rstrip("/"),
        request_timeout=_positive_float(
            "request_timeout", config.request_timeout, REQUEST_TIMEOUT_DEFAULT
        ),
        connect_timeout=_positive_float(
            "connect_timeout", config.connect_timeout, CONNECT_TIMEOUT_DEFAULT
        ),
        log_file=config.log_file,
        suggestions_dir=config.suggestions_dir,
        updated_dir=config.updated_dir,
        file_hash_chunk_size=chunk_size,
    )


def load_settings() -> RuntimeSettings:
    """Load the persisted configuration and derive runtime settings."""

    return settings_from_config(Config.load())


__all__ = [
    "FILE_HASH_CHUNK_SIZE",
    "RuntimeSettings",
    "load_settings",
    "settings_from_config",
]
