"""Change-detecting file writes.

Every generated file goes through :func:`write_if_changed` so that a pass
with unchanged input leaves the workspace untouched. Scaffold files the
agent owns after creation go through :func:`write_if_missing`.
"""

from __future__ import annotations

from pathlib import Path

from clawsync.config import ReadErrorPolicy
from clawsync.utils import hash_content, get_logger

logger = get_logger(__name__)


def _read_existing(path: Path, on_read_error: ReadErrorPolicy) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return ""
    except (OSError, UnicodeDecodeError) as e:
        if on_read_error is ReadErrorPolicy.RAISE:
            raise
        logger.warning(
            "Cannot read existing file, rewriting it",
            extra={"path": str(path), "error": str(e)},
        )
        return ""


def write_if_changed(
    path: Path,
    content: str,
    on_read_error: ReadErrorPolicy = ReadErrorPolicy.WRITE,
) -> bool:
    """Write ``content`` to ``path`` only if its fingerprint differs from the file's.

    Parent directories are created as needed. A missing file counts as
    empty content.

    Returns:
        True if the file was written.

    Raises:
        OSError: The write failed.
        OSError, UnicodeDecodeError: The existing file could not be read
            and ``on_read_error`` is ``raise``.
    """
    existing = _read_existing(path, on_read_error)
    if hash_content(existing) == hash_content(content) and (existing or path.exists()):
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    logger.debug(f"wrote {path}")
    return True


def write_if_missing(path: Path, content: str) -> bool:
    """Create ``path`` with ``content`` unless it already exists.

    Returns:
        True if the file was created.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        with open(path, "x", encoding="utf-8") as f:
            f.write(content)
    except FileExistsError:
        return False
    logger.debug(f"created {path}")
    return True
