"""Reconcile the agent list into workspaces and the runtime config file."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Iterable

from clawsync.profiles.models import AgentProfile, SyncOptions, SyncResult, ValidatedAgent
from clawsync.profiles.openclaw_config import build_openclaw_config, serialize_config
from clawsync.profiles.workspace import WorkspaceMaterializer, load_agents_md
from clawsync.profiles.writer import write_if_changed
from clawsync.utils import get_logger, now_utc

if TYPE_CHECKING:
    from clawsync.config import GatewayConfig

logger = get_logger(__name__)


def reconcile(
    agents: Iterable[AgentProfile],
    options: SyncOptions,
    gateway: "GatewayConfig | None" = None,
    now: datetime | None = None,
) -> SyncResult:
    """Run one reconciliation pass.

    Agents with unsafe slugs, and later agents reusing a slug, are logged
    and left out of both the workspace and the config. The config file is rewritten only when its
    serialized content changed; ``config_changed`` tells the caller
    whether the runtime needs to reload.

    Args:
        agents: Current agent records.
        options: Workspace root, config path and related settings.
        gateway: Gateway credentials for model mapping; None means no gateway.
        now: Current time for the daily-note window (defaults to now, UTC).

    Raises:
        OSError: The workspace root, an agent workspace or the config file
            could not be written.
    """
    options.workspace_root.mkdir(parents=True, exist_ok=True)

    materializer = WorkspaceMaterializer(
        options.workspace_root,
        config_workspace_root=options.config_workspace_root,
        agents_md=load_agents_md(options.agents_md_path),
        on_read_error=options.on_read_error,
        now=now or now_utc(),
    )

    validated: list[ValidatedAgent] = []
    skipped_agents: list[str] = []
    skipped_skills: list[str] = []
    for agent in agents:
        result = materializer.materialize(agent)
        if result is None:
            skipped_agents.append(agent.id)
            continue
        validated.append(result)
        skipped_skills.extend(result.skipped_skills)

    config = build_openclaw_config(validated, gateway)
    changed = write_if_changed(options.config_path, serialize_config(config), options.on_read_error)
    if changed:
        logger.info(
            "Runtime config written",
            extra={
                "path": str(options.config_path),
                "agents_count": len(validated),
                "skipped": len(skipped_agents),
            },
        )
    else:
        logger.debug("Runtime config unchanged", extra={"path": str(options.config_path)})

    return SyncResult(
        config_changed=changed,
        materialized=[v.slug for v in validated],
        skipped_agents=skipped_agents,
        skipped_skills=skipped_skills,
    )
