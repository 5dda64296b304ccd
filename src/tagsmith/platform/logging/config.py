"""Logger bootstrap for the tagsmith package.

Where: platform/logging/config.py
What: Build the stderr Rich handler and the optional rotating log file, then
      expose the shared ``tagsmith`` logger.
Why: Workflow output shares the terminal with report text on stdout, so the
     console sink must never write to stdout.
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path
from typing import Final

from rich.console import Console

from tagsmith.config.paths import default_log_file

from .handlers import WorkflowRichHandler

LOGGER_NAME: Final[str] = "tagsmith"
DEFAULT_LOG_FILE: Final[Path] = default_log_file()

_FILE_FORMAT: Final[str] = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_MAX_LOG_BYTES: Final[int] = 10 * 1024 * 1024
_LOG_BACKUPS: Final[int] = 5


def _console_handler(level: int, console: Console | None) -> logging.Handler:
    handler = WorkflowRichHandler(console=console or Console(stderr=True, soft_wrap=True))
    handler.setLevel(level)
    return handler


def _file_handler(log_file: Path, level: int) -> logging.Handler:
    """Rotating UTF-8 file sink; parent directories are created on demand."""

    target = log_file.expanduser().resolve()
    target.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        target,
        maxBytes=_MAX_LOG_BYTES,
        backupCount=_LOG_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FILE_FORMAT))
    return handler


def setup_logger(
    log_file: Path | None = None,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    *,
    console: Console | None = None,
) -> logging.Logger:
    """(Re)configure the ``tagsmith`` logger.

    Existing handlers are closed and replaced, so calling this again (as the
    CLI does once settings are known) never duplicates output.

    Args:
        log_file: Optional rotating log file; ``None`` keeps logging console-only.
        console_level: Threshold for the Rich console handler.
        file_level: Threshold for the file handler.
        console: Console to render into; defaults to a stderr console.
    """

    configured = logging.getLogger(LOGGER_NAME)
    configured.setLevel(logging.DEBUG)

    while configured.handlers:
        stale = configured.handlers.pop()
        stale.close()

    configured.addHandler(_console_handler(console_level, console))
    if log_file is not None:
        configured.addHandler(_file_handler(Path(log_file), file_level))
    return configured


logger: Final[logging.Logger] = setup_logger()


__all__ = ["DEFAULT_LOG_FILE", "LOGGER_NAME", "logger", "setup_logger"]
