"""Safe apply engine.

Where: src/tagsmith/features/apply/usecases/safe_apply.py
What: Produce an updated copy of an audio file with accepted suggestions merged in.
Why: The source is only ever opened read-only and the destination name is never
     overwritten; a failed run leaves nothing behind but the untouched source.

Sequence: hash source -> filter and merge -> copy to a hidden temp file in the
updated directory -> write only the changed tags into the temp file -> claim a
free destination name -> remove the temp file -> hash source again (and drop the
destination if the source moved underneath us).
"""

from __future__ import annotations

import errno
import os
import shutil
import tempfile
from pathlib import Path
from typing import Final

from tagsmith.config.settings import FILE_HASH_CHUNK_SIZE
from tagsmith.features.suggestions.domain.models import MetadataSuggestion, SuggestionsReport
from tagsmith.features.tags.usecases.ports import TagWriterPort
from tagsmith.platform.filesystem import ensure_directory
from tagsmith.platform.logging import logger
from tagsmith.shared.errors import FileReadError, MetadataParseError, WriteFailureError

from ..domain.library_layout import LibraryLayout
from ..domain.models import ApplyResult, SuggestionFilter, accept_all
from .file_operations import calculate_file_hash, find_available_path
from .merge import merge_suggestions

# Filesystems without hard link support report one of these.
_LINK_UNSUPPORTED: Final[frozenset[int]] = frozenset(
    {errno.EPERM, errno.EXDEV, errno.EMLINK, errno.ENOSYS, errno.ENOTSUP, errno.EOPNOTSUPP}
)


class SafeApplyEngine:
    """Write merged metadata into a new file, never into the source."""

    def __init__(
        self,
        writer: TagWriterPort,
        *,
        updated_dir: Path | None = None,
        suggestion_filter: SuggestionFilter = accept_all,
        chunk_size: int = FILE_HASH_CHUNK_SIZE,
    ) -> None:
        self._writer: TagWriterPort = writer
        self._updated_dir: Path | None = updated_dir
        self._filter: SuggestionFilter = suggestion_filter
        self._chunk_size: int = chunk_size

    def apply(
        self,
        report: SuggestionsReport,
        *,
        suggestion_filter: SuggestionFilter | None = None,
    ) -> ApplyResult:
        """Apply the report's accepted suggestions to a copy of its source file.

        Args:
            report: Loaded suggestions report; its ``file_path`` is the source.
            suggestion_filter: Per-call override of the engine's filter.

        Returns:
            ApplyResult: Destination path, merged metadata, and source hashes.

        Raises:
            FileReadError: If the source is missing or unreadable.
            WriteFailureError: If the updated copy cannot be produced, or the
                source changed while the copy was being made.
        """

        source = Path(report.file_path)
        if not source.is_file():
            raise FileReadError(f"Source audio file not found: {source}")

        hash_before = self._hash(source)

        accept = suggestion_filter or self._filter
        accepted: list[MetadataSuggestion] = []
        rejected: list[MetadataSuggestion] = []
        for suggestion in report.suggestions:
            (accepted if accept(suggestion) else rejected).append(suggestion)
        if rejected:
            logger.debug("Filtered out %d suggestion(s)", len(rejected))

        outcome = merge_suggestions(report.current_metadata, accepted)

        layout = LibraryLayout.for_source(source, updated_dir=self._updated_dir)
        target = layout.updated_dir / source.name
        layout.assert_writable_destination(target)
        _ = ensure_directory(layout.updated_dir)

        temp_path = self._copy_to_temp(source, layout.updated_dir)
        try:
            try:
                self._writer.write(temp_path, outcome.metadata, outcome.changed_fields)
            except MetadataParseError as exc:
                raise WriteFailureError(f"Tag writer failed for {source.name}: {exc}") from exc
            destination = self._claim_destination(temp_path, target)
        finally:
            temp_path.unlink(missing_ok=True)

        hash_after = self._hash(source)
        if hash_after != hash_before:
            destination.unlink(missing_ok=True)
            raise WriteFailureError(f"Source file changed during apply: {source}")

        logger.debug("Updated copy of %s written to %s", source, destination)
        return ApplyResult(
            source_path=source,
            destination_path=destination,
            metadata=outcome.metadata,
            applied=outcome.applied,
            skipped=(*rejected, *outcome.skipped),
            source_hash_before=hash_before,
            source_hash_after=hash_after,
        )

    def _hash(self, path: Path) -> str:
        try:
            return calculate_file_hash(path, chunk_size=self._chunk_size)
        except OSError as exc:
            raise FileReadError(f"Cannot read {path}: {exc}") from exc

    @staticmethod
    def _copy_to_temp(source: Path, directory: Path) -> Path:
        """Copy ``source`` byte for byte into a hidden file in ``directory``."""

        try:
            fd, temp_name = tempfile.mkstemp(
                prefix=f".{source.stem}.", suffix=source.suffix, dir=directory
            )
        except OSError as exc:
            raise WriteFailureError(f"Cannot create a working copy in {directory}: {exc}") from exc

        temp_path = Path(temp_name)
        try:
            with open(source, "rb") as src, os.fdopen(fd, "wb") as dst:
                shutil.copyfileobj(src, dst)
        except OSError as exc:
            temp_path.unlink(missing_ok=True)
            raise WriteFailureError(f"Cannot copy {source} to {temp_path}: {exc}") from exc
        return temp_path

    @staticmethod
    def _claim_destination(temp_path: Path, target: Path) -> Path:
        """Give the finished temp file a free name without replacing anything."""

        candidate = find_available_path(target)
        while True:
            try:
                os.link(temp_path, candidate)
                return candidate
            except FileExistsError:
                logger.debug("Destination %s was taken concurrently; retrying", candidate)
                candidate = find_available_path(target)
            except OSError as exc:
                if exc.errno not in _LINK_UNSUPPORTED:
                    raise WriteFailureError(f"Cannot create {candidate}: {exc}") from exc
                return SafeApplyEngine._rename_into_place(temp_path, target, candidate)

    @staticmethod
    def _rename_into_place(temp_path: Path, target: Path, candidate: Path) -> Path:
        if candidate.exists():
            candidate = find_available_path(target)
        try:
            os.rename(temp_path, candidate)
        except OSError as exc:
            raise WriteFailureError(f"Cannot create {candidate}: {exc}") from exc
        return candidate


__all__ = ["SafeApplyEngine"]
