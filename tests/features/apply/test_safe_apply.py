"""
Summary: Verify the apply engine never modifies or overwrites existing files.
Why: Originals are irreplaceable; every failure path must leave them byte-identical.
"""

from __future__ import annotations

import errno
import hashlib
from collections.abc import Callable, Collection
from pathlib import Path

import pytest

from tagsmith.features.apply.domain.models import confidence_at_least, only_fields
from tagsmith.features.apply.usecases import safe_apply
from tagsmith.features.apply.usecases.safe_apply import SafeApplyEngine
from tagsmith.features.suggestions.domain.models import (
    Confidence,
    MetadataSuggestion,
    SuggestionsReport,
)
from tagsmith.shared.errors import FileReadError, MetadataParseError, WriteFailureError
from tagsmith.shared.track_metadata import TagField, TrackMetadata

SOURCE_BYTES = b"ID3\x03\x00fake audio payload" * 64


class RecordingWriter:
    """Writer double that appends a marker so copies differ from the source."""

    def __init__(self) -> None:
        self.calls: list[tuple[Path, TrackMetadata]] = []
        self.fields: list[tuple[TagField, ...]] = []

    def write(
        self,
        path: Path,
        metadata: TrackMetadata,
        fields: Collection[TagField] | None = None,
    ) -> None:
        self.calls.append((path, metadata))
        self.fields.append(tuple(fields or ()))
        with open(path, "ab") as handle:
            _ = handle.write(f"|{metadata.year}|{metadata.genre}".encode())


class FailingWriter:
    def write(
        self,
        path: Path,
        metadata: TrackMetadata,
        fields: Collection[TagField] | None = None,
    ) -> None:
        _ = (metadata, fields)
        _ = path.write_bytes(b"half written")
        raise MetadataParseError("tag container is corrupt")


def _sha(path: Path) -> str:
    return hashlib.sha256(path.read_bytes()).hexdigest()


@pytest.fixture
def source(tmp_path: Path) -> Path:
    originals = tmp_path / "public" / "originals"
    originals.mkdir(parents=True)
    path = originals / "02 Friend of the Devil.mp3"
    _ = path.write_bytes(SOURCE_BYTES)
    return path


def test_apply_writes_new_file_and_leaves_source_untouched(
    source: Path, make_report: Callable[..., SuggestionsReport]
) -> None:
    before = _sha(source)
    writer = RecordingWriter()

    result = SafeApplyEngine(writer).apply(make_report(source))

    assert _sha(source) == before
    assert result.source_unchanged
    assert result.source_hash_before == before
    assert result.destination_path == source.parent.parent.resolve() / "updated" / source.name
    assert result.destination_path.read_bytes() == SOURCE_BYTES + b"|1970|Folk Rock"
    assert result.metadata.year == 1970
    assert result.metadata.genre == "Folk Rock"
    assert result.metadata.title == "Friend of the Devil"
    assert [s.field for s in result.applied] == [TagField.YEAR, TagField.GENRE]
    written_path, _ = writer.calls[0]
    assert written_path != source
    assert written_path.parent == result.destination_path.parent


def test_apply_leaves_no_temporary_files(
    source: Path, make_report: Callable[..., SuggestionsReport]
) -> None:
    result = SafeApplyEngine(RecordingWriter()).apply(make_report(source))

    assert [p.name for p in result.destination_path.parent.iterdir()] == [source.name]


def test_repeated_apply_never_overwrites(
    source: Path, make_report: Callable[..., SuggestionsReport]
) -> None:
    engine = SafeApplyEngine(RecordingWriter())
    first = engine.apply(make_report(source))
    first_bytes = first.destination_path.read_bytes()

    other = make_report(
        source,
        suggestions=(
            MetadataSuggestion(
                field=TagField.GENRE,
                current_value=None,
                suggested_value="Americana",
                confidence=Confidence.MEDIUM,
            ),
        ),
    )
    second = engine.apply(other)

    assert second.destination_path != first.destination_path
    assert second.destination_path.name == "02 Friend of the Devil (1).mp3"
    assert first.destination_path.read_bytes() == first_bytes
    assert second.destination_path.read_bytes().endswith(b"|None|Americana")


def test_writer_failure_leaves_nothing_behind(
    source: Path, make_report: Callable[..., SuggestionsReport]
) -> None:
    before = _sha(source)

    with pytest.raises(WriteFailureError, match="corrupt"):
        _ = SafeApplyEngine(FailingWriter()).apply(make_report(source))

    assert _sha(source) == before
    updated_dir = source.parent.parent / "updated"
    assert list(updated_dir.iterdir()) == []


def test_missing_source_raises_file_read_error(
    tmp_path: Path, make_report: Callable[..., SuggestionsReport]
) -> None:
    with pytest.raises(FileReadError):
        _ = SafeApplyEngine(RecordingWriter()).apply(make_report(tmp_path / "gone.mp3"))


def test_filters_narrow_applied_suggestions(
    source: Path, make_report: Callable[..., SuggestionsReport]
) -> None:
    report = make_report(source)

    result = SafeApplyEngine(RecordingWriter()).apply(
        report, suggestion_filter=only_fields([TagField.GENRE])
    )

    assert [s.field for s in result.applied] == [TagField.GENRE]
    assert [s.field for s in result.skipped] == [TagField.YEAR]
    assert result.metadata.year is None


def test_engine_default_filter_is_used_without_override(
    source: Path, make_report: Callable[..., SuggestionsReport]
) -> None:
    engine = SafeApplyEngine(RecordingWriter(), suggestion_filter=confidence_at_least(Confidence.HIGH))
    low = MetadataSuggestion(
        field=TagField.ALBUM,
        current_value="American Beauty",
        suggested_value="American Beauty (Remastered)",
        confidence=Confidence.LOW,
    )

    result = engine.apply(make_report(source, suggestions=(low,)))

    assert result.applied == ()
    assert result.skipped == (low,)
    assert result.metadata.album == "American Beauty"


def test_configured_updated_dir_is_used(
    tmp_path: Path, source: Path, make_report: Callable[..., SuggestionsReport]
) -> None:
    out_dir = tmp_path / "out"

    result = SafeApplyEngine(RecordingWriter(), updated_dir=out_dir).apply(make_report(source))

    assert result.destination_path == out_dir.resolve() / source.name


def test_updated_dir_pointing_at_originals_is_refused(
    source: Path, make_report: Callable[..., SuggestionsReport]
) -> None:
    engine = SafeApplyEngine(RecordingWriter(), updated_dir=source.parent)

    with pytest.raises(WriteFailureError):
        _ = engine.apply(make_report(source))

    assert sorted(p.name for p in source.parent.iterdir()) == [source.name]


def test_falls_back_to_rename_without_hard_links(
    monkeypatch: pytest.MonkeyPatch,
    source: Path,
    make_report: Callable[..., SuggestionsReport],
) -> None:
    def _no_links(_src: Path, _dst: Path) -> None:
        raise OSError(errno.EPERM, "Operation not permitted")

    monkeypatch.setattr(safe_apply.os, "link", _no_links)

    result = SafeApplyEngine(RecordingWriter()).apply(make_report(source))

    assert result.destination_path.read_bytes().endswith(b"|1970|Folk Rock")
    assert [p.name for p in result.destination_path.parent.iterdir()] == [source.name]


def test_concurrent_claim_moves_to_next_name(
    monkeypatch: pytest.MonkeyPatch,
    source: Path,
    make_report: Callable[..., SuggestionsReport],
) -> None:
    """A name taken between probing and linking is skipped, not overwritten."""

    real_link = safe_apply.os.link
    raced: list[Path] = []

    def _racing_link(src: Path, dst: Path) -> None:
        if not raced:
            raced.append(Path(dst))
            _ = Path(dst).write_bytes(b"someone else")
        real_link(src, dst)

    monkeypatch.setattr(safe_apply.os, "link", _racing_link)

    result = SafeApplyEngine(RecordingWriter()).apply(make_report(source))

    assert raced[0].read_bytes() == b"someone else"
    assert result.destination_path.name == "02 Friend of the Devil (1).mp3"


def test_writer_receives_only_changed_fields(
    source: Path, make_report: Callable[..., SuggestionsReport]
) -> None:
    restated = MetadataSuggestion(
        field=TagField.TITLE,
        current_value="Friend of the Devil",
        suggested_value="Friend of the Devil",
        confidence=Confidence.HIGH,
    )
    genre = MetadataSuggestion(
        field=TagField.GENRE,
        current_value=None,
        suggested_value="Folk Rock",
        confidence=Confidence.HIGH,
    )
    writer = RecordingWriter()

    result = SafeApplyEngine(writer).apply(make_report(source, suggestions=(restated, genre)))

    assert writer.fields == [(TagField.GENRE,)]
    assert [s.field for s in result.applied] == [TagField.TITLE, TagField.GENRE]


def test_source_changed_during_apply_removes_destination(
    source: Path, make_report: Callable[..., SuggestionsReport]
) -> None:
    class TamperingWriter:
        def write(
            self,
            path: Path,
            metadata: TrackMetadata,
            fields: Collection[TagField] | None = None,
        ) -> None:
            _ = (path, metadata, fields)
            with open(source, "ab") as handle:
                _ = handle.write(b"changed elsewhere")

    with pytest.raises(WriteFailureError, match="changed during apply"):
        _ = SafeApplyEngine(TamperingWriter()).apply(make_report(source))

    assert list((source.parent.parent / "updated").iterdir()) == []
