"""Shared fixtures and record factories."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pytest

from clawsync.profiles.models import AgentProfile, ResolvedSkill, SyncOptions

FIXED_NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def make_skill(slug: str | None = "web-search", **overrides: Any) -> ResolvedSkill:
    data: dict[str, Any] = {
        "id": f"skill_{slug}",
        "name": (slug or "skill").replace("-", " ").title(),
        "slug": slug,
    }
    data.update(overrides)
    return ResolvedSkill(**data)


def make_agent(slug: str | None = "engineer", **overrides: Any) -> AgentProfile:
    data: dict[str, Any] = {
        "id": f"agent_{slug}",
        "name": (slug or "agent").title(),
        "slug": slug,
        "role": "Engineer",
        "soul_content": f"# SOUL\n\nI am {slug}.\n",
        "user_content": "# USER\n\nThe team.\n",
        "identity_content": f"# IDENTITY\n\nName: {slug}\n",
        "resolved_skills": [],
    }
    data.update(overrides)
    return AgentProfile(**data)


@pytest.fixture
def options(tmp_path: Path) -> SyncOptions:
    return SyncOptions(
        workspace_root=tmp_path / "workspaces",
        config_path=tmp_path / "config" / "openclaw.json",
    )
