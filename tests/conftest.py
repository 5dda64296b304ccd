"""Shared pytest fixtures for tagsmith tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from tagsmith.features.suggestions.domain.models import (
    Confidence,
    MetadataSuggestion,
    SuggestionsReport,
)
from tagsmith.shared.track_metadata import TagField, TrackMetadata


def _streaminfo_block() -> bytes:
    """STREAMINFO for 44.1 kHz stereo 16-bit audio with zero samples."""

    packed = (44100 << 44) | ((2 - 1) << 41) | ((16 - 1) << 36)
    body = (
        (4096).to_bytes(2, "big")
        + (4096).to_bytes(2, "big")
        + (0).to_bytes(3, "big")
        + (0).to_bytes(3, "big")
        + packed.to_bytes(8, "big")
        + bytes(16)
    )
    # Last-metadata-block flag set, block type 0, 24-bit length.
    return b"\x80" + len(body).to_bytes(3, "big") + body


@pytest.fixture
def make_flac(tmp_path: Path) -> Callable[..., Path]:
    """Return a factory writing a minimal, tag-less FLAC file."""

    def _make(name: str = "02 Friend of the Devil.flac", directory: Path | None = None) -> Path:
        target_dir = directory or tmp_path
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / name
        _ = path.write_bytes(b"fLaC" + _streaminfo_block())
        return path

    return _make


@pytest.fixture
def grateful_dead_metadata() -> TrackMetadata:
    return TrackMetadata(
        title="Friend of the Devil",
        artist="Grateful Dead",
        album="American Beauty",
        track_number=2,
    )


@pytest.fixture
def make_report(grateful_dead_metadata: TrackMetadata) -> Callable[..., SuggestionsReport]:
    """Build a report for ``source`` with the canonical year and genre suggestions."""

    def _make(
        source: Path,
        suggestions: tuple[MetadataSuggestion, ...] | None = None,
    ) -> SuggestionsReport:
        if suggestions is None:
            suggestions = (
                MetadataSuggestion(
                    field=TagField.YEAR,
                    current_value=None,
                    suggested_value="1970",
                    confidence=Confidence.HIGH,
                    reason="album released in 1970",
                ),
                MetadataSuggestion(
                    field=TagField.GENRE,
                    current_value=None,
                    suggested_value="Folk Rock",
                    confidence=Confidence.HIGH,
                    reason="stylistic fit",
                ),
            )
        return SuggestionsReport(
            file_path=str(source),
            timestamp="2024-05-01T12:00:00+00:00",
            current_metadata=grateful_dead_metadata,
            suggestions=suggestions,
            raw_analysis="Year and genre are missing.",
        )

    return _make


@pytest.fixture
def portable_repo_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point config discovery at a temporary repository root and reset the singleton."""

    _ = (tmp_path / "pyproject.toml").write_text("[project]\nname='tmp'\n")
    monkeypatch.delenv("TAGSMITH_CONFIG", raising=False)
    monkeypatch.delenv("TAGSMITH_LOG_DIR", raising=False)

    import tagsmith.config.config as config_module
    import tagsmith.config.paths as paths

    def _fake_detect_repo_root(_start: Path | None = None) -> Path:
        return tmp_path

    monkeypatch.setattr(paths, "_detect_repo_root", _fake_detect_repo_root, raising=True)

    original_instance = config_module.Config._instance  # pyright: ignore[reportPrivateUsage]
    original_loaded_from = config_module.Config._loaded_from  # pyright: ignore[reportPrivateUsage]
    config_module.Config._instance = None  # pyright: ignore[reportPrivateUsage]
    config_module.Config._loaded_from = None  # pyright: ignore[reportPrivateUsage]
    try:
        yield tmp_path
    finally:
        config_module.Config._instance = original_instance  # pyright: ignore[reportPrivateUsage]
        config_module.Config._loaded_from = original_loaded_from  # pyright: ignore[reportPrivateUsage]
