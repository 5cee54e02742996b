"""End-to-end tests for a reconciliation pass."""

from __future__ import annotations

import json
import os
from datetime import timedelta
from pathlib import Path

import pytest

from conftest import FIXED_NOW, make_agent, make_skill
from clawsync.config import GatewayConfig
from clawsync.profiles.models import SyncOptions
from clawsync.profiles.reconciler import reconcile


@pytest.fixture(autouse=True)
def _no_gateway_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("VERCEL_AI_GATEWAY_API_KEY", raising=False)
    monkeypatch.delenv("AI_GATEWAY_API_KEY", raising=False)


def read_config(options: SyncOptions) -> dict:
    return json.loads(options.config_path.read_text())


def snapshot(root: Path) -> dict[str, tuple[bytes, float]]:
    return {
        str(p.relative_to(root)): (p.read_bytes(), p.stat().st_mtime)
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


def sample_agents():
    return [
        make_agent(
            "engineer",
            openclaw_config={"model": "gpt-5-nano", "temperature": 0.2, "maxTokens": 2048, "skillIds": ["s1"]},
            resolved_skills=[
                make_skill("listing-only"),
                make_skill("web-search", description="Search the web.", content_markdown="# Web search\n"),
                make_skill(
                    "my-skill",
                    content_markdown="---\nname: custom-skill-name\n---\nBody\n",
                ),
            ],
        ),
        make_agent("writer", openclaw_config={"model": "claude-haiku-4.5"}),
    ]


class TestReconcile:
    def test_creates_workspace_root_and_config(self, options: SyncOptions):
        result = reconcile(sample_agents(), options, now=FIXED_NOW)

        assert result.config_changed is True
        assert result.materialized == ["engineer", "writer"]
        assert options.workspace_root.is_dir()
        config = read_config(options)
        assert config["agents"]["defaults"] == {"skipBootstrap": True}
        assert [a["id"] for a in config["agents"]["list"]] == ["engineer", "writer"]

    def test_model_mapping_without_gateway(self, options: SyncOptions):
        reconcile([make_agent("engineer", openclaw_config={"model": "gpt-5-nano"})], options, now=FIXED_NOW)
        entry = read_config(options)["agents"]["list"][0]
        assert entry["model"] == "openai/gpt-5-nano"

    def test_model_mapping_with_gateway(self, options: SyncOptions):
        gateway = GatewayConfig(vercel_ai_gateway_api_key="vk-test")
        reconcile([make_agent("engineer", openclaw_config={"model": "gpt-5-nano"})], options, gateway, now=FIXED_NOW)
        entry = read_config(options)["agents"]["list"][0]
        assert entry["model"] == "vercel-ai-gateway/openai/gpt-5-nano"

    def test_agent_without_model_has_no_model_key(self, options: SyncOptions):
        reconcile([make_agent("engineer")], options, now=FIXED_NOW)
        assert "model" not in read_config(options)["agents"]["list"][0]

    def test_unsafe_slug_is_dropped(self, options: SyncOptions):
        result = reconcile([make_agent(".."), make_agent("good")], options, now=FIXED_NOW)

        config = read_config(options)
        assert [a["id"] for a in config["agents"]["list"]] == ["good"]
        assert result.skipped_agents == ["agent_.."]
        assert sorted(p.name for p in options.workspace_root.iterdir()) == ["good"]
        assert not (options.workspace_root.parent / "SOUL.md").exists()

    def test_skills_in_config(self, options: SyncOptions):
        reconcile(sample_agents(), options, now=FIXED_NOW)
        config = read_config(options)
        root = options.workspace_root.resolve()

        assert config["skills"]["entries"] == {
            "custom-skill-name": {"enabled": True},
            "web-search": {"enabled": True},
        }
        assert config["skills"]["load"]["extraDirs"] == [
            str(root / "engineer" / "skills"),
            str(root / "writer" / "skills"),
        ]
        skill_dirs = sorted(p.name for p in (root / "engineer" / "skills").iterdir())
        assert skill_dirs == ["my-skill", "web-search"]

    def test_config_workspace_root(self, tmp_path: Path):
        options = SyncOptions(
            workspace_root=tmp_path / "host",
            config_path=tmp_path / "openclaw.json",
            config_workspace_root="/root/clawd/agents",
        )
        reconcile([make_agent("engineer")], options, now=FIXED_NOW)
        config = read_config(options)

        assert config["agents"]["list"][0]["workspace"] == "/root/clawd/agents/engineer"
        assert config["skills"]["load"]["extraDirs"] == ["/root/clawd/agents/engineer/skills"]
        assert (tmp_path / "host" / "engineer" / "SOUL.md").exists()

    def test_agents_md_override_path(self, tmp_path: Path, options: SyncOptions):
        manual = tmp_path / "AGENTS.md"
        manual.write_text("# Our manual\n")
        options = options.model_copy(update={"agents_md_path": manual})
        reconcile([make_agent("engineer")], options, now=FIXED_NOW)
        assert (options.workspace_root / "engineer" / "AGENTS.md").read_text() == "# Our manual\n"

    def test_duplicate_slug_keeps_first_agent(self, options: SyncOptions):
        agents = [
            make_agent("engineer", soul_content="A"),
            make_agent("/engineer/", id="agent_2", soul_content="B"),
        ]
        first = reconcile(agents, options, now=FIXED_NOW)
        soul = options.workspace_root / "engineer" / "SOUL.md"
        os.utime(soul, (1_000_000, 1_000_000))

        second = reconcile(agents, options, now=FIXED_NOW)

        assert [a["id"] for a in read_config(options)["agents"]["list"]] == ["engineer"]
        assert first.skipped_agents == second.skipped_agents == ["agent_2"]
        assert soul.read_text() == "A"
        assert soul.stat().st_mtime == 1_000_000
        assert second.config_changed is False

    def test_no_agents(self, options: SyncOptions):
        result = reconcile([], options, now=FIXED_NOW)
        assert result.config_changed is True
        assert read_config(options)["agents"]["list"] == []

    def test_skills_symlink_outside_root_is_not_followed(self, tmp_path: Path, options: SyncOptions):
        outside = tmp_path / "outside"
        outside.mkdir()
        agent_dir = options.workspace_root / "engineer"
        agent_dir.mkdir(parents=True)
        (agent_dir / "skills").symlink_to(outside, target_is_directory=True)

        result = reconcile(
            [make_agent("engineer", resolved_skills=[make_skill("s", content_markdown="# S\n")])],
            options,
            now=FIXED_NOW,
        )

        assert not (outside / "s").exists()
        assert result.skipped_skills == ["engineer/s"]
        assert read_config(options)["skills"]["entries"] == {}


class TestIdempotence:
    def test_second_run_changes_nothing(self, options: SyncOptions):
        reconcile(sample_agents(), options, now=FIXED_NOW)
        for path in options.workspace_root.rglob("*"):
            if path.is_file():
                os.utime(path, (1_000_000, 1_000_000))
        os.utime(options.config_path, (1_000_000, 1_000_000))
        before = snapshot(options.workspace_root)
        config_before = options.config_path.read_bytes()

        result = reconcile(sample_agents(), options, now=FIXED_NOW)

        assert result.config_changed is False
        assert snapshot(options.workspace_root) == before
        assert options.config_path.read_bytes() == config_before
        assert options.config_path.stat().st_mtime == 1_000_000

    def test_changed_input_changes_config(self, options: SyncOptions):
        reconcile([make_agent("engineer")], options, now=FIXED_NOW)
        result = reconcile([make_agent("engineer"), make_agent("writer")], options, now=FIXED_NOW)
        assert result.config_changed is True

    def test_removed_agent_directory_is_kept(self, options: SyncOptions):
        reconcile([make_agent("engineer"), make_agent("writer")], options, now=FIXED_NOW)
        reconcile([make_agent("engineer")], options, now=FIXED_NOW)

        assert (options.workspace_root / "writer" / "SOUL.md").exists()
        assert [a["id"] for a in read_config(options)["agents"]["list"]] == ["engineer"]

    def test_daily_notes_roll_forward_without_overwrite(self, options: SyncOptions):
        reconcile([make_agent("engineer")], options, now=FIXED_NOW)
        memory = options.workspace_root / "engineer" / "memory"
        (memory / "2026-03-02.md").write_text("planned for tomorrow")

        reconcile([make_agent("engineer")], options, now=FIXED_NOW + timedelta(days=1))

        notes = sorted(p.name for p in memory.glob("????-??-??.md"))
        assert notes == ["2026-02-28.md", "2026-03-01.md", "2026-03-02.md", "2026-03-03.md"]
        assert (memory / "2026-03-02.md").read_text() == "planned for tomorrow"
