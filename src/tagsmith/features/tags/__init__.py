"""Tag I/O feature: read snapshots from and write metadata to audio files."""
