"""Map internal model identifiers to the runtime's provider/model strings."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from clawsync.config import GatewayConfig

# Internal model id → runtime provider/model
MODEL_MAP: dict[str, str] = {
    "claude-sonnet-4-20250514": "anthropic/claude-sonnet-4-5",
    "claude-opus-4-20250514": "anthropic/claude-opus-4-5",
    "claude-haiku-4.5": "anthropic/claude-haiku-4.5",
    "gpt-4o": "openai/gpt-4o",
    "gpt-4o-mini": "openai/gpt-4o-mini",
    "gpt-5-nano": "openai/gpt-5-nano",
}


def map_model(model: str | None, gateway: "GatewayConfig | None" = None) -> str | None:
    """Translate a model id for the runtime config.

    Returns None for blank or unknown ids so the runtime falls back to its
    own default. With an active gateway the result is namespaced under the
    gateway, e.g. ``vercel-ai-gateway/openai/gpt-5-nano``.
    """
    if not model or not model.strip():
        return None
    mapped = MODEL_MAP.get(model.strip())
    if mapped is None:
        return None
    if gateway is not None and gateway.active:
        return f"{gateway.prefix}/{mapped}"
    return mapped
