# This project was developed with assistance from AI tools.
"""OpenAI-compatible chat client for the advisory oracle.

Each oracle task (``categorize``, ``financial_tip``, ...) is routed to a model
tier in config/models.yaml. Optional per-model ``temperature`` and
``max_tokens`` apply unless the caller overrides them.
"""

import logging
from typing import Any

from openai import AsyncOpenAI

from .config import get_model_config, get_task_tier

logger = logging.getLogger(__name__)

_GENERATION_DEFAULTS = ("temperature", "max_tokens")

# One client per tier so connections are reused across requests
_clients: dict[str, AsyncOpenAI] = {}


def _client_for(tier: str) -> AsyncOpenAI:
    client = _clients.get(tier)
    if client is None:
        model_cfg = get_model_config(tier)
        client = AsyncOpenAI(
            base_url=model_cfg["endpoint"],
            api_key=model_cfg.get("api_key") or "not-needed",
        )
        _clients[tier] = client
    return client


def clear_client_cache() -> None:
    """Drop cached clients so the next call picks up reloaded endpoints/keys."""
    _clients.clear()


async def get_completion(
    messages: list[dict[str, str]],
    tier: str = "capable_large",
    **kwargs: Any,
) -> str:
    """Run one chat completion on ``tier`` and return the message text."""
    model_cfg = get_model_config(tier)
    params = {k: model_cfg[k] for k in _GENERATION_DEFAULTS if k in model_cfg}
    params.update(kwargs)

    response = await _client_for(tier).chat.completions.create(
        model=model_cfg["model_name"],
        messages=messages,
        **params,
    )
    usage = getattr(response, "usage", None)
    if usage is not None:
        logger.debug(
            "Completion on %s (%s): %s prompt / %s completion tokens",
            tier,
            model_cfg["model_name"],
            usage.prompt_tokens,
            usage.completion_tokens,
        )
    return response.choices[0].message.content or ""


async def complete_task(task: str, messages: list[dict[str, str]], **kwargs: Any) -> str:
    """Run a completion on the tier configured for an oracle task."""
    return await get_completion(messages, tier=get_task_tier(task), **kwargs)
