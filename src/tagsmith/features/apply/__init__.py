"""Apply feature: write accepted suggestions into fresh copies of audio files."""
