"""Data models for agent profile reconciliation."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from clawsync.config import ReadErrorPolicy


class _Record(BaseModel):
    """Read-only record accepting both camelCase (data store) and snake_case keys."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class ResolvedSkill(_Record):
    """A skill assigned to an agent.

    Skills without ``content_markdown`` are metadata-only: they are listed
    in TOOLS.md but never produce a SKILL.md or a config entry.
    """
    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    name: str
    slug: Any = None  # validated when written; a bad slug skips only this skill
    description: str | None = None
    content_markdown: str | None = None

    @property
    def has_content(self) -> bool:
        return bool(self.content_markdown and self.content_markdown.strip())


class AgentRuntimeConfig(_Record):
    """Per-agent runtime settings; unknown keys are kept as-is."""
    model_config = ConfigDict(extra="allow")

    model: str | None = None
    temperature: float | None = None
    max_tokens: int | None = None


class AgentProfile(_Record):
    """One agent as handed over by the data store for a single pass."""
    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    name: str
    slug: Any = None  # validated per agent; a bad slug skips only this agent
    role: str = ""
    openclaw_config: AgentRuntimeConfig | None = None
    soul_content: str = Field(
        validation_alias=AliasChoices("soul_content", "soulContent", "effectiveSoulContent"),
    )
    user_content: str
    identity_content: str
    resolved_skills: list[ResolvedSkill] = Field(
        default_factory=list,
        validation_alias=AliasChoices("resolved_skills", "resolvedSkills", "skills"),
    )

    @property
    def model_id(self) -> str | None:
        return self.openclaw_config.model if self.openclaw_config else None


class SyncOptions(BaseModel):
    """Filesystem targets for one reconciliation pass."""
    workspace_root: Path
    config_path: Path
    # Root recorded in the generated config when the runtime sees a different path
    config_workspace_root: str | None = None
    agents_md_path: Path | None = None
    on_read_error: ReadErrorPolicy = ReadErrorPolicy.WRITE


class MaterializedSkill(BaseModel):
    """A SKILL.md written for an agent."""
    slug: str
    name: str  # frontmatter name if present, else slug
    path: Path


class ValidatedAgent(BaseModel):
    """An agent whose slug passed validation, with its on-disk and config-facing dirs."""
    agent: AgentProfile
    slug: str
    agent_dir: Path
    config_dir: str
    skills: list[MaterializedSkill] = Field(default_factory=list)
    skipped_skills: list[str] = Field(default_factory=list)

    @property
    def skills_dir(self) -> Path:
        return self.agent_dir / "skills"

    @property
    def config_skills_dir(self) -> str:
        return f"{self.config_dir}/skills"


class SyncResult(BaseModel):
    """Outcome of one reconciliation pass."""
    config_changed: bool
    materialized: list[str] = Field(default_factory=list)
    skipped_agents: list[str] = Field(default_factory=list)
    skipped_skills: list[str] = Field(default_factory=list)
