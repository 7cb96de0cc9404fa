"""Utility functions for dreamjournal."""

import sys
from pathlib import Path

from loguru import logger


def ensure_dir(path: Path) -> Path:
    """Ensure a directory exists, creating it if necessary."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_path() -> Path:
    """Get the dreamjournal data directory (~/.dreamjournal)."""
    return ensure_dir(Path.home() / ".dreamjournal")


def expand_path(value: str) -> Path:
    """
    Expand a configured path.

    Relative paths are resolved against the data directory so that a bare
    file name such as "dreams.json" lands in ~/.dreamjournal.
    """
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = get_data_path() / path
    return path


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
    rotation: str = "1 MB",
) -> None:
    """
    Configure loguru sinks.

    Args:
        level: Minimum level for the sink.
        log_file: When set, log to this file only (the terminal belongs to curses).
            When None, log to stderr.
        rotation: Rotation policy for the file sink.
    """
    logger.remove()
    if log_file is None:
        logger.add(sys.stderr, level=level)
        return

    ensure_dir(log_file.parent)
    logger.add(log_file, level=level, rotation=rotation, encoding="utf-8")
