"""Agent profile reconciliation.

Turns the declarative agent list into per-agent workspaces on disk and a
single generated runtime config file.
"""

from clawsync.profiles.frontmatter import ensure_frontmatter, frontmatter_name
from clawsync.profiles.model_map import MODEL_MAP, map_model
from clawsync.profiles.models import (
    AgentProfile,
    AgentRuntimeConfig,
    MaterializedSkill,
    ResolvedSkill,
    SyncOptions,
    SyncResult,
    ValidatedAgent,
)
from clawsync.profiles.openclaw_config import build_openclaw_config, serialize_config
from clawsync.profiles.reconciler import reconcile
from clawsync.profiles.slugs import resolve_child_dir, validate_slug
from clawsync.profiles.templates import build_tools_md
from clawsync.profiles.workspace import WorkspaceMaterializer, load_agents_md
from clawsync.profiles.writer import write_if_changed, write_if_missing

__all__ = [
    "AgentProfile",
    "AgentRuntimeConfig",
    "ResolvedSkill",
    "SyncOptions",
    "SyncResult",
    "ValidatedAgent",
    "MaterializedSkill",
    "validate_slug",
    "resolve_child_dir",
    "MODEL_MAP",
    "map_model",
    "write_if_changed",
    "write_if_missing",
    "ensure_frontmatter",
    "frontmatter_name",
    "build_tools_md",
    "WorkspaceMaterializer",
    "load_agents_md",
    "build_openclaw_config",
    "serialize_config",
    "reconcile",
]
