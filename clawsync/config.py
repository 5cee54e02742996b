"""Configuration management for clawsync.

Values are populated in priority order:
  1. Environment variables (gateway credentials only)
  2. The YAML config file, after ${VAR} substitution
  3. Field defaults

Env var mapping:
  gateway.vercel_ai_gateway_api_key  ← VERCEL_AI_GATEWAY_API_KEY
  gateway.ai_gateway_api_key         ← AI_GATEWAY_API_KEY
"""

from __future__ import annotations

import os
import re
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from pydantic import AliasChoices, BaseModel, Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

if TYPE_CHECKING:
    from clawsync.profiles.models import SyncOptions


def _substitute_env_vars(value: Any) -> Any:
    """Recursively substitute environment variables in config values.

    Supports ${VAR_NAME} and ${VAR_NAME:-default} syntax.
    """
    if isinstance(value, str):
        pattern = r'\$\{([^}:]+)(?::-([^}]*))?\}'

        def replacer(match: re.Match) -> str:
            var_name = match.group(1)
            default = match.group(2) if match.group(2) is not None else ""
            return os.environ.get(var_name, default)

        return re.sub(pattern, replacer, value)
    elif isinstance(value, dict):
        return {k: _substitute_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_substitute_env_vars(v) for v in value]
    return value


class ReadErrorPolicy(str, Enum):
    """What to do when an existing file cannot be read during a change check."""
    WRITE = "write"
    RAISE = "raise"


class GatewayConfig(BaseSettings):
    """AI gateway credentials that switch model ids to the gateway's namespace."""

    model_config = {"extra": "ignore", "populate_by_name": True}

    vercel_ai_gateway_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("vercel_ai_gateway_api_key", "VERCEL_AI_GATEWAY_API_KEY"),
    )
    ai_gateway_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("ai_gateway_api_key", "AI_GATEWAY_API_KEY"),
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        **kwargs,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # env wins over init (YAML kwargs)
        return (env_settings, init_settings, dotenv_settings)

    @property
    def active(self) -> bool:
        return bool(self.vercel_ai_gateway_api_key.strip() or self.ai_gateway_api_key.strip())

    @property
    def prefix(self) -> str:
        return "vercel-ai-gateway"


class SyncConfig(BaseModel):
    """Where agent workspaces and the generated runtime config live."""
    workspace_root: str = "./workspaces"
    config_path: str = "./openclaw.json"
    config_workspace_root: str | None = None  # path the runtime sees, e.g. inside a container
    agents_md_path: str | None = None
    on_read_error: ReadErrorPolicy = ReadErrorPolicy.WRITE

    def to_options(self) -> "SyncOptions":
        from clawsync.profiles.models import SyncOptions

        return SyncOptions(
            workspace_root=Path(self.workspace_root),
            config_path=Path(self.config_path),
            config_workspace_root=self.config_workspace_root or None,
            agents_md_path=Path(self.agents_md_path) if self.agents_md_path else None,
            on_read_error=self.on_read_error,
        )


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = "INFO"
    format: str = "json"


class Config(BaseSettings):
    """Main clawsync configuration."""
    model_config = {"env_prefix": "CLAWSYNC_", "extra": "ignore"}

    sync: SyncConfig = Field(default_factory=SyncConfig)
    gateway: GatewayConfig = Field(default_factory=GatewayConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(config_path: str | Path = "config.yaml") -> Config:
    """Load configuration from YAML file with environment variable substitution.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        Loaded and validated Config object.
    """
    config_path = Path(config_path)

    if not config_path.exists():
        # Return default config if file doesn't exist
        return Config()

    with open(config_path) as f:
        raw_config = yaml.safe_load(f)

    if raw_config is None:
        return Config()

    config_data = _substitute_env_vars(raw_config)

    gateway_data = config_data.pop("gateway", None) or {}
    return Config(gateway=GatewayConfig(**gateway_data), **config_data)


def generate_default_config() -> str:
    """Return the default configuration file content."""
    return """\
# clawsync configuration
# Environment variables can be substituted with ${VAR_NAME} syntax

sync:
  # Real directory under which one workspace per agent is created
  workspace_root: "${CLAWSYNC_WORKSPACE_ROOT:-./workspaces}"
  # Generated runtime config file
  config_path: "${CLAWSYNC_CONFIG_PATH:-./openclaw.json}"
  # Workspace root as seen by the runtime (e.g. a container mount); unset = same as workspace_root
  # config_workspace_root: "/root/clawd/agents"
  # Optional AGENTS.md to copy into each workspace instead of the built-in one
  # agents_md_path: "./AGENTS.md"
  # "write" (default) or "raise" when an existing file cannot be read
  on_read_error: "write"

# Gateway credentials are read from VERCEL_AI_GATEWAY_API_KEY / AI_GATEWAY_API_KEY
gateway: {}

logging:
  level: "INFO"
  format: "json"
"""
