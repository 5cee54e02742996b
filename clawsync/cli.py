"""CLI interface for clawsync."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

import click
import yaml
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from clawsync import __version__

if TYPE_CHECKING:
    from clawsync.profiles import AgentProfile

console = Console()


def load_agents_file(path: str | Path) -> list["AgentProfile"]:
    """Load agent records from a YAML or JSON file.

    The file holds either a list of agents or a mapping with an ``agents`` list.
    """
    from clawsync.profiles import AgentProfile

    with open(path, encoding="utf-8") as f:
        raw = yaml.safe_load(f)

    if raw is None:
        return []
    if isinstance(raw, dict):
        if "agents" not in raw:
            raise click.BadParameter(f"{path} has no 'agents' list", param_hint="AGENTS_FILE")
        raw = raw["agents"] if raw["agents"] is not None else []
    if not isinstance(raw, list):
        raise click.BadParameter(f"{path} must contain a list of agents", param_hint="AGENTS_FILE")
    return [AgentProfile.model_validate(record) for record in raw]


@click.group()
@click.version_option(version=__version__, prog_name="clawsync")
def cli():
    """clawsync - materialize agent profiles for the OpenClaw runtime."""
    pass


@cli.command()
@click.argument("agents_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--config", "-c", default="config.yaml", help="Config file path")
@click.option("--workspace-root", default=None, help="Override sync.workspace_root")
@click.option("--config-path", default=None, help="Override sync.config_path")
@click.option("--config-workspace-root", default=None, help="Override sync.config_workspace_root")
@click.option("--agents-md", default=None, help="Override sync.agents_md_path")
def sync(
    agents_file: str,
    config: str,
    workspace_root: str | None,
    config_path: str | None,
    config_workspace_root: str | None,
    agents_md: str | None,
):
    """Run one reconciliation pass for the agents in AGENTS_FILE."""
    from pydantic import ValidationError

    from clawsync.config import load_config
    from clawsync.profiles import reconcile
    from clawsync.utils import setup_logging

    cfg = load_config(config)
    setup_logging(cfg.logging.level, cfg.logging.format)

    overrides = {
        "workspace_root": workspace_root,
        "config_path": config_path,
        "config_workspace_root": config_workspace_root,
        "agents_md_path": agents_md,
    }
    sync_cfg = cfg.sync.model_copy(update={k: v for k, v in overrides.items() if v is not None})

    try:
        agents = load_agents_file(agents_file)
    except ValidationError as e:
        raise click.ClickException(f"Invalid agent record in {agents_file}:\n{e}")

    result = reconcile(agents, sync_cfg.to_options(), gateway=cfg.gateway)

    console.print(Panel.fit(
        f"[bold green]Sync complete[/]\n"
        f"Workspace: {sync_cfg.workspace_root}\n"
        f"Config: {sync_cfg.config_path} "
        f"({'[yellow]changed[/]' if result.config_changed else '[dim]unchanged[/]'})\n"
        f"Agents: {len(result.materialized)} materialized, {len(result.skipped_agents)} skipped\n"
        f"Gateway: {'on' if cfg.gateway.active else 'off'}"
    ))

    if result.skipped_agents or result.skipped_skills:
        table = Table(title="Skipped")
        table.add_column("Kind")
        table.add_column("Identifier")
        for agent_id in result.skipped_agents:
            table.add_row("agent", agent_id)
        for skill in result.skipped_skills:
            table.add_row("skill", skill)
        console.print(table)


@cli.command("check-slug")
@click.argument("slug")
def check_slug(slug: str):
    """Print the normalized SLUG, or fail if it is unsafe."""
    from clawsync.profiles import validate_slug

    safe = validate_slug(slug)
    if safe is None:
        console.print(f"[red]Invalid slug:[/] {slug!r}")
        raise SystemExit(1)
    click.echo(safe)


@cli.command()
@click.option("--path", "config_path", default="config.yaml", help="Where to write the config")
@click.option("--force", "-f", is_flag=True, help="Overwrite without asking")
def init(config_path: str, force: bool):
    """Generate default config.yaml."""
    from clawsync.config import generate_default_config

    if os.path.exists(config_path) and not force:
        if not click.confirm(f"{config_path} already exists. Overwrite?"):
            console.print("[yellow]Cancelled.[/]")
            return

    content = generate_default_config()

    with open(config_path, "w") as f:
        f.write(content)

    console.print(f"[green]Created {config_path}[/]")
    console.print("Edit the file to point at your workspace root and config path.")


if __name__ == "__main__":
    cli()
