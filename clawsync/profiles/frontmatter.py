"""Line-oriented frontmatter handling for SKILL.md files.

The frontmatter block is kept as an ordered list of raw lines so a field
can be added without re-serializing (and reformatting) the rest of it.
"""

from __future__ import annotations

import re

DELIMITER = "---"

_NAME_RE = re.compile(r"^name\s*:(.*)$")
_DESCRIPTION_RE = re.compile(r"^description\s*:")


def split_frontmatter(markdown: str) -> tuple[list[str], str] | None:
    """Split a document into (frontmatter lines, body).

    Returns None when the document does not open with a complete
    ``---`` ... ``---`` block. The body keeps its original text,
    starting right after the closing delimiter line.
    """
    lines = markdown.splitlines(keepends=True)
    if not lines or lines[0].rstrip("\r\n").strip() != DELIMITER:
        return None
    for i in range(1, len(lines)):
        if lines[i].rstrip("\r\n").strip() == DELIMITER:
            block = [line.rstrip("\r\n") for line in lines[1:i]]
            return block, "".join(lines[i + 1:])
    return None


def _unquote(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1].strip()
    return value


def _find_name(block: list[str]) -> tuple[int, str] | None:
    for i, line in enumerate(block):
        match = _NAME_RE.match(line)
        if match:
            return i, _unquote(match.group(1))
    return None


def frontmatter_name(markdown: str) -> str | None:
    """Return the non-empty top-level ``name`` declared in the frontmatter, if any."""
    parsed = split_frontmatter(markdown)
    if parsed is None:
        return None
    found = _find_name(parsed[0])
    if found is None or not found[1]:
        return None
    return found[1]


def _one_line(value: str) -> str:
    return " ".join(value.split())


def ensure_frontmatter(markdown: str, slug: str, description: str | None = None) -> str:
    """Make sure ``markdown`` opens with frontmatter declaring ``name``.

    - No frontmatter: a block with ``name`` (and ``description`` when given)
      is prepended and the original text follows unchanged.
    - Frontmatter without ``name`` (or with a blank one): ``name: <slug>`` is
      spliced into the existing block, as is ``description`` if missing.
    - Frontmatter with a ``name``: that name wins and the document is
      returned as-is.
    """
    desc = _one_line(description) if description else ""
    parsed = split_frontmatter(markdown)

    if parsed is None:
        header = [DELIMITER, f"name: {slug}"]
        if desc:
            header.append(f"description: {desc}")
        header.append(DELIMITER)
        separator = "" if markdown.startswith(("\n", "\r\n")) or not markdown else "\n"
        return "\n".join(header) + "\n" + separator + markdown

    block, body = parsed
    found = _find_name(block)
    if found is not None and found[1]:
        return markdown

    block = list(block)
    if found is not None:
        block[found[0]] = f"name: {slug}"
    else:
        block.insert(0, f"name: {slug}")
    if desc and not any(_DESCRIPTION_RE.match(line) for line in block):
        name_index = next(i for i, line in enumerate(block) if _NAME_RE.match(line))
        block.insert(name_index + 1, f"description: {desc}")

    return "\n".join([DELIMITER, *block, DELIMITER]) + "\n" + body
