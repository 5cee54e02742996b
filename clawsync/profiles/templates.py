"""Built-in workspace documents."""

from __future__ import annotations

from datetime import date
from typing import Iterable

from clawsync.profiles.models import ResolvedSkill

DEFAULT_AGENTS_MD = """
# AGENTS.md - Mission Control Operating Manual

## What you are

You are one specialist in a team of AI agents. You collaborate through Mission Control (tasks, threads, docs). Your job is to move work forward and leave a clear trail.

## Workspace

- SOUL.md, USER.md and IDENTITY.md describe who you are and who you work for.
- TOOLS.md lists your assigned skills; skills/ holds the ones with full instructions.
- MEMORY.md holds stable decisions; memory/WORKING.md holds what you are doing right now.
- memory/YYYY-MM-DD.md holds daily notes. Write artifacts to deliverables/.

## Non-negotiable rules

1. Everything must be traceable to a task or a doc.
2. If it matters tomorrow, write it down today.
3. Never assume permissions. If you cannot access something, report it and mark the task BLOCKED.
4. Always include evidence when you claim facts.
5. Prefer small, finished increments over large vague progress.

## Task state rules

- If you start work: move task to IN_PROGRESS.
- If you need human review: move to REVIEW. Attach the evidence a reviewer needs (links, diffs, test output).
- If blocked: move to BLOCKED and explain what is missing and who can unblock it.
- If done: move to DONE, post final summary.
- Update status via the runtime task_status tool before claiming status in thread.
""".lstrip()

MEMORY_MD = "# MEMORY\n\nStable decisions and key learnings.\n"

WORKING_MD = "# WORKING\n\nWhat I'm doing right now.\n"

TOOLS_MD_HEADER = (
    "# Assigned skills\n\n"
    "Use these capabilities when relevant. Skills with full instructions live under skills/.\n\n"
)


def daily_note(day: date) -> str:
    return f"# {day.isoformat()}\n\n"


def build_tools_md(skills: Iterable[ResolvedSkill]) -> str:
    """Render TOOLS.md listing every assigned skill, with or without content."""
    bullets = []
    for skill in skills:
        desc = f" — {skill.description.strip()}" if skill.description and skill.description.strip() else ""
        bullets.append(f"- **{skill.name}** ({skill.slug if skill.slug is not None else skill.id}){desc}")
    if not bullets:
        return TOOLS_MD_HEADER + "- No assigned skills\n"
    return TOOLS_MD_HEADER + "\n".join(bullets) + "\n"
