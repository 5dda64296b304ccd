"""Summary: Hashing and destination naming helpers for the apply workflow.
Why: Keep filesystem probing isolated so the engine reads as a sequence of steps."""

from __future__ import annotations

import hashlib
from pathlib import Path

from tagsmith.config.settings import FILE_HASH_CHUNK_SIZE


def calculate_file_hash(file_path: Path, *, chunk_size: int = FILE_HASH_CHUNK_SIZE) -> str:
    """Calculate SHA-256 hash of a file."""

    sha256_hash = hashlib.sha256()
    with open(file_path, "rb") as handle:
        for byte_block in iter(lambda: handle.read(chunk_size), b""):
            sha256_hash.update(byte_block)
    return sha256_hash.hexdigest()


def numbered_candidate(target_path: Path, counter: int) -> Path:
    """Return ``stem (counter).ext`` next to ``target_path``."""

    return target_path.parent / f"{target_path.stem} ({counter}){target_path.suffix}"


def find_available_path(target_path: Path, *, start: int = 1) -> Path:
    """Find an available file path by appending a number if needed."""

    if not target_path.exists():
        return target_path

    counter = start
    while True:
        candidate = numbered_candidate(target_path, counter)
        if not candidate.exists():
            return candidate
        counter += 1


__all__ = ["calculate_file_hash", "find_available_path", "numbered_candidate"]
