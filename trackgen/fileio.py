"""
File helpers used by the track loader and saver.

Every failure is raised as a trackgen error with the OS error chained;
nothing here logs and carries on.
"""

import json
import logging
import os
import tempfile
from pathlib import Path

from trackgen.errors import TemplateLoadError, TrackReadError, TrackWriteError


logger = logging.getLogger(__name__)


def read_json_file(path: str | Path) -> dict:
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise TemplateLoadError(f"Cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise TemplateLoadError(f"Invalid JSON in {path}: {e}") from e


def read_text_file(path: str | Path) -> str:
    path = Path(path)
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise TrackReadError(f"Cannot read {path}: {e}") from e


def ensure_folder(path: str | Path) -> Path:
    """Create `path` and its parents if needed. Safe to call repeatedly."""
    path = Path(path)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise TrackWriteError(f"Cannot create folder {path}: {e}") from e
    return path


def atomic_write_text(path: str | Path, content: str) -> Path:
    """
    Write `content` to a temp file next to `path`, then rename it into place.

    A failed write leaves whatever was at `path` before untouched.
    """
    path = Path(path)
    tmp_name = None
    try:
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", delete=False
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(content)
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise TrackWriteError(f"Cannot write {path}: {e}") from e

    logger.debug("Wrote %d characters to %s", len(content), path)
    return path
