"""Build the runtime config document from materialized agents."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Iterable

from clawsync.profiles.model_map import map_model
from clawsync.profiles.models import ValidatedAgent

if TYPE_CHECKING:
    from clawsync.config import GatewayConfig


def build_agent_entry(validated: ValidatedAgent, gateway: "GatewayConfig | None" = None) -> dict[str, Any]:
    """One ``agents.list`` entry: id, workspace, identity and (if mapped) model."""
    entry: dict[str, Any] = {
        "id": validated.slug,
        "workspace": validated.config_dir,
        "identity": {"name": validated.agent.name},
    }
    model = map_model(validated.agent.model_id, gateway)
    if model:
        entry["model"] = model
    return entry


def build_openclaw_config(
    agents: Iterable[ValidatedAgent],
    gateway: "GatewayConfig | None" = None,
) -> dict[str, Any]:
    """Assemble the config for every successfully materialized agent.

    Every agent's skills directory is listed in ``skills.load.extraDirs``
    and every written skill is enabled under its canonical name
    (frontmatter ``name`` or slug). Pure: no I/O.
    """
    entries: list[dict[str, Any]] = []
    extra_dirs: list[str] = []
    skill_entries: dict[str, dict[str, bool]] = {}

    for validated in agents:
        entries.append(build_agent_entry(validated, gateway))
        if validated.config_skills_dir not in extra_dirs:
            extra_dirs.append(validated.config_skills_dir)
        for skill in validated.skills:
            skill_entries.setdefault(skill.name, {"enabled": True})

    return {
        "agents": {
            "defaults": {"skipBootstrap": True},
            "list": entries,
        },
        "skills": {
            "load": {"extraDirs": extra_dirs},
            "entries": skill_entries,
        },
    }


def serialize_config(config: dict[str, Any]) -> str:
    """Deterministic JSON: sorted keys, 2-space indent, trailing newline."""
    return json.dumps(config, indent=2, sort_keys=True, ensure_ascii=False) + "\n"
