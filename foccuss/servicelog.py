"""Append-only log file shared by the monitor and the background service."""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path

from foccuss.database import default_data_dir

LOG_FILE_NAME = "foccuss_service.log"


def default_log_path() -> Path:
    """Return the location of the service log in the application data directory."""
    return default_data_dir() / LOG_FILE_NAME


def _timestamp(moment: datetime) -> str:
    return f"{moment:%Y-%m-%d %H:%M:%S}.{moment.microsecond // 1000:03d}"


def log_to_file(message: str, path: str | os.PathLike | None = None) -> None:
    """Append a timestamped line to the log file.

    Failures to create or write the file are ignored, so logging never
    interrupts the caller.
    """
    target = Path(path) if path is not None else default_log_path()
    line = f"{_timestamp(datetime.now())} - {message}\n"
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("a", encoding="utf-8") as handle:
            handle.write(line)
    except OSError:
        return