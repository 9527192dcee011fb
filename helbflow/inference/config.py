# This project was developed with assistance from AI tools.
"""Advisory oracle model configuration.

config/models.yaml maps oracle tasks to model tiers and each tier to an
OpenAI-compatible endpoint. ``${ENV_VAR:-default}`` placeholders are resolved
from the environment. The file is re-read when its mtime changes; a broken
edit keeps the last valid config in place.
"""

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

# pydantic-settings does not export .env into os.environ; placeholders need it there
load_dotenv()

logger = logging.getLogger(__name__)

_CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "models.yaml"
_cached_config: dict[str, Any] | None = None
_cached_mtime: float = 0.0

_PLACEHOLDER = re.compile(r"\$\{(\w+)(?::-(.*?))?\}")

REQUIRED_MODEL_FIELDS = {"provider", "model_name", "endpoint"}
FALLBACK_TIER = "capable_large"


def _resolve_env_vars(node: Any) -> Any:
    """Resolve ``${VAR:-default}`` placeholders anywhere in a parsed YAML tree."""
    if isinstance(node, str):
        return _PLACEHOLDER.sub(lambda m: os.environ.get(m.group(1), m.group(2) or ""), node)
    if isinstance(node, dict):
        return {key: _resolve_env_vars(value) for key, value in node.items()}
    if isinstance(node, list):
        return [_resolve_env_vars(item) for item in node]
    return node


def _validate_config(config: Any) -> None:
    if not isinstance(config, dict):
        raise ValueError("models.yaml must be a mapping")
    models = config.get("models")
    if not models or not isinstance(models, dict):
        raise ValueError("models.yaml must contain a 'models' section with at least one model")
    routing = config.get("routing")
    if not routing or not isinstance(routing, dict):
        raise ValueError("models.yaml must contain a 'routing' section")

    for name, model in models.items():
        if not isinstance(model, dict):
            raise ValueError(f"Model '{name}' must be a mapping")
        missing = REQUIRED_MODEL_FIELDS - set(model)
        if missing:
            raise ValueError(f"Model '{name}' is missing required fields: {sorted(missing)}")

    tiers = {"default_tier": routing.get("default_tier")}
    tiers.update({f"tasks.{task}": tier for task, tier in (routing.get("tasks") or {}).items()})
    for key, tier in tiers.items():
        if tier is not None and tier not in models:
            raise ValueError(f"routing.{key} '{tier}' does not match any model in 'models'")


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Read, resolve and validate models.yaml."""
    config_path = path or _CONFIG_PATH
    if not config_path.exists():
        raise FileNotFoundError(f"Model config not found: {config_path}")
    config = _resolve_env_vars(yaml.safe_load(config_path.read_text()))
    _validate_config(config)
    return config


def get_config(path: Path | None = None) -> dict[str, Any]:
    """Return the cached config, reloading when the file changes on disk.

    Raises on a missing or invalid file only when nothing valid was loaded yet.
    """
    global _cached_config, _cached_mtime  # noqa: PLW0603
    config_path = path or _CONFIG_PATH

    try:
        mtime = config_path.stat().st_mtime
    except FileNotFoundError:
        if _cached_config is None:
            raise
        logger.warning("Model config %s disappeared, keeping cached config", config_path)
        return _cached_config

    if _cached_config is not None and mtime <= _cached_mtime:
        return _cached_config

    try:
        config = load_config(config_path)
    except (yaml.YAMLError, ValueError):
        if _cached_config is None:
            raise
        logger.warning(
            "Model config %s is invalid, keeping previous config", config_path, exc_info=True
        )
        _cached_mtime = mtime
        return _cached_config

    logger.info("Loaded model config from %s", config_path)
    _cached_config, _cached_mtime = config, mtime

    # Clients hold endpoint and key; rebuild them on next use
    from .client import clear_client_cache

    clear_client_cache()
    return config


def get_model_config(tier: str, path: Path | None = None) -> dict[str, Any]:
    """Return the settings for one model tier."""
    models = get_config(path)["models"]
    if tier not in models:
        raise KeyError(f"Unknown model tier '{tier}'. Available: {sorted(models)}")
    return models[tier]


def get_task_tier(task: str, path: Path | None = None) -> str:
    """Return the tier an oracle task runs on, falling back to the default tier."""
    routing = get_config(path)["routing"]
    return (routing.get("tasks") or {}).get(task) or routing.get("default_tier") or FALLBACK_TIER
