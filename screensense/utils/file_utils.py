"""File utility functions for the screensense detector."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from ..core.errors import ReportWriteError
from ..core.logger import log


def ensure_directory(directory_path: str | Path) -> Path:
    """Ensure a directory exists, creating it if necessary.

    Args:
        directory_path: Path to the directory.

    Returns:
        Absolute path to the directory.

    Raises:
        ReportWriteError: If the directory cannot be created.
    """
    path = Path(directory_path).resolve()
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ReportWriteError(path, str(e)) from e
    return path


def write_text_atomic(filepath: str | Path, content: str, logger: Any = log) -> Path:
    """Write *content* to *filepath* via a temp file and ``os.replace``.

    Readers never observe a half-written file, and the temp file is removed
    if anything goes wrong.

    Args:
        filepath: Destination file path.
        content: Text to write (UTF-8).
        logger: Sink for the write trace.

    Returns:
        The destination path.

    Raises:
        ReportWriteError: If the file cannot be written.
    """
    target = Path(filepath)
    directory = ensure_directory(target.parent)

    tmp_path: str | None = None
    try:
        fd, tmp_path = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=directory)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp_path, target)
        tmp_path = None
    except OSError as e:
        logger.error(f"Failed to write {target}: {e}")
        raise ReportWriteError(target, str(e)) from e
    finally:
        if tmp_path is not None and os.path.exists(tmp_path):
            os.unlink(tmp_path)

    logger.debug(f"Data saved to {target}")
    return target


def save_json(data: Any, filepath: str | Path, indent: int = 2, logger: Any = log) -> Path:
    """Save data to a JSON file atomically.

    Args:
        data: Data to save.
        filepath: Path to the JSON file.
        indent: JSON indentation level.
        logger: Sink for the write trace.

    Returns:
        The destination path.
    """
    content = json.dumps(data, indent=indent, ensure_ascii=False, default=str)
    return write_text_atomic(filepath, content + "\n", logger=logger)
