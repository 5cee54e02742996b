"""Slug validation and sandboxed directory resolution."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

_UNSAFE_CHARS_RE = re.compile(r"[^A-Za-z0-9_-]")
_SEPARATORS = "/\\"


def validate_slug(raw: Any) -> str | None:
    """Normalize an identifier destined for use as a single path segment.

    Examples:
        "engineer"     → "engineer"
        " /research/ " → "research"
        "../etc"       → None
        "a/b"          → None
        "héllo"        → None

    Returns:
        The cleaned slug, or None if it is unsafe.
    """
    if not isinstance(raw, str) or not raw.strip():
        return None
    slug = raw.strip().strip(_SEPARATORS)
    if not slug or ".." in slug or any(sep in slug for sep in _SEPARATORS):
        return None
    if _UNSAFE_CHARS_RE.search(slug):
        return None
    return slug


def resolve_child_dir(root: Path, slug: Any, sandbox: Path | None = None) -> Path | None:
    """Resolve ``root/<slug>`` and make sure it is a strict descendant of ``root``.

    With ``sandbox`` the resolved path must also lie strictly inside it,
    which catches a ``root`` that is itself a symlink leading elsewhere.

    Returns None when the slug is invalid or the resolved path is ``root``
    itself or anywhere outside of it.
    """
    safe = validate_slug(slug)
    if safe is None:
        return None
    root_resolved = root.resolve()
    child = (root_resolved / safe).resolve()
    if child == root_resolved or root_resolved not in child.parents:
        return None
    if sandbox is not None and sandbox.resolve() not in child.parents:
        return None
    return child
