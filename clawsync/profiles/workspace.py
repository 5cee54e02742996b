"""WorkspaceMaterializer — per-agent workspace directories on disk.

Directory layout
----------------
  {workspace_root}/
    {agent_slug}/
      SOUL.md              ← persona (rewritten when changed)
      USER.md              ← notes about the people the agent works for
      IDENTITY.md          ← identity summary
      AGENTS.md            ← operating manual (override or built-in)
      TOOLS.md             ← list of assigned skills
      MEMORY.md            ← created once, then owned by the agent
      skills/
        {skill_slug}/SKILL.md
      memory/
        WORKING.md         ← created once
        YYYY-MM-DD.md      ← yesterday / today / tomorrow, created once
      deliverables/

Nothing is ever deleted: agents that disappear from the input keep their
directory.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path, PurePosixPath

from clawsync.config import ReadErrorPolicy
from clawsync.profiles.frontmatter import ensure_frontmatter, frontmatter_name
from clawsync.profiles.models import AgentProfile, MaterializedSkill, ResolvedSkill, ValidatedAgent
from clawsync.profiles.slugs import resolve_child_dir, validate_slug
from clawsync.profiles.templates import (
    DEFAULT_AGENTS_MD,
    MEMORY_MD,
    WORKING_MD,
    build_tools_md,
    daily_note,
)
from clawsync.profiles.writer import write_if_changed, write_if_missing
from clawsync.utils import daily_note_dates, get_logger

logger = get_logger(__name__)


def load_agents_md(agents_md_path: Path | None) -> str:
    """Read the AGENTS.md override, falling back to the built-in manual."""
    if agents_md_path is None:
        return DEFAULT_AGENTS_MD
    try:
        return agents_md_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(
            "Failed to read AGENTS.md override, using default",
            extra={"path": str(agents_md_path), "error": str(e)},
        )
        return DEFAULT_AGENTS_MD


class WorkspaceMaterializer:
    """Creates and updates agent workspaces under one root.

    Example::

        mat = WorkspaceMaterializer(Path("/srv/agents"))
        validated = mat.materialize(agent)
        if validated is None:
            ...  # slug rejected, nothing written
    """

    def __init__(
        self,
        workspace_root: Path,
        *,
        config_workspace_root: str | None = None,
        agents_md: str = DEFAULT_AGENTS_MD,
        on_read_error: ReadErrorPolicy = ReadErrorPolicy.WRITE,
        now: datetime | None = None,
    ) -> None:
        self._root = Path(workspace_root).resolve()
        self._config_root = config_workspace_root or None
        self._agents_md = agents_md
        self._on_read_error = on_read_error
        self._now = now
        # validated slugs already materialized by this instance
        self._claimed: set[str] = set()

    @property
    def root(self) -> Path:
        return self._root

    # ── directory helpers ─────────────────────────────────────────────────

    def config_dir(self, slug: str, agent_dir: Path) -> str:
        """Directory path to record in the runtime config for an agent."""
        if self._config_root is None:
            return str(agent_dir)
        return str(PurePosixPath(self._config_root) / slug)

    def _write(self, path: Path, content: str) -> bool:
        return write_if_changed(path, content, self._on_read_error)

    # ── materialization ───────────────────────────────────────────────────

    def materialize(self, agent: AgentProfile) -> ValidatedAgent | None:
        """Write one agent's workspace.

        Returns:
            The validated agent with its directories and written skills,
            or None if the slug is unsafe or already taken by an earlier
            agent (nothing is written then).

        Raises:
            OSError: A filesystem operation failed after validation.
        """
        slug = validate_slug(agent.slug)
        agent_dir = resolve_child_dir(self._root, agent.slug) if slug else None
        if slug is None or agent_dir is None:
            logger.warning(
                "Skipping agent with unsafe slug",
                extra={"agent_id": agent.id, "slug": agent.slug},
            )
            return None
        if slug in self._claimed:
            logger.warning(
                "Skipping agent with duplicate slug",
                extra={"agent_id": agent.id, "slug": agent.slug},
            )
            return None
        self._claimed.add(slug)

        agent_dir.mkdir(parents=True, exist_ok=True)

        self._write(agent_dir / "SOUL.md", agent.soul_content)
        self._write(agent_dir / "USER.md", agent.user_content)
        self._write(agent_dir / "IDENTITY.md", agent.identity_content)
        self._write(agent_dir / "AGENTS.md", self._agents_md)
        self._write(agent_dir / "TOOLS.md", build_tools_md(agent.resolved_skills))

        validated = ValidatedAgent(
            agent=agent,
            slug=slug,
            agent_dir=agent_dir,
            config_dir=self.config_dir(slug, agent_dir),
        )
        self._write_skills(validated)
        self._write_memory_scaffold(agent_dir)
        return validated

    def _write_skills(self, validated: ValidatedAgent) -> None:
        seen: set[str] = set()
        for skill in validated.agent.resolved_skills:
            if not skill.has_content:
                continue
            written = self._write_skill(validated, skill, seen)
            if written is None:
                validated.skipped_skills.append(f"{validated.slug}/{skill.slug or skill.id}")
            else:
                validated.skills.append(written)

    def _write_skill(
        self,
        validated: ValidatedAgent,
        skill: ResolvedSkill,
        seen: set[str],
    ) -> MaterializedSkill | None:
        skill_slug = validate_slug(skill.slug)
        skill_dir = (
            resolve_child_dir(validated.skills_dir, skill.slug, sandbox=self._root) if skill_slug else None
        )
        if skill_slug is None or skill_dir is None:
            logger.warning(
                "Skipping skill with unsafe slug",
                extra={"agent_id": validated.agent.id, "slug": validated.slug, "skill_slug": skill.slug},
            )
            return None
        if skill_slug in seen:
            logger.warning(
                "Skipping duplicate skill slug",
                extra={"agent_id": validated.agent.id, "slug": validated.slug, "skill_slug": skill_slug},
            )
            return None
        seen.add(skill_slug)

        content = ensure_frontmatter(skill.content_markdown or "", skill_slug, skill.description)
        path = skill_dir / "SKILL.md"
        self._write(path, content)
        return MaterializedSkill(
            slug=skill_slug,
            name=frontmatter_name(content) or skill_slug,
            path=path,
        )

    def _write_memory_scaffold(self, agent_dir: Path) -> None:
        memory_dir = agent_dir / "memory"
        memory_dir.mkdir(parents=True, exist_ok=True)
        (agent_dir / "deliverables").mkdir(parents=True, exist_ok=True)

        write_if_missing(agent_dir / "MEMORY.md", MEMORY_MD)
        write_if_missing(memory_dir / "WORKING.md", WORKING_MD)
        for day in daily_note_dates(self._now):
            write_if_missing(memory_dir / f"{day.isoformat()}.md", daily_note(day))
