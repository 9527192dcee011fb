# This project was developed with assistance from AI tools.
"""Inference module -- LLM client and model tier config loading."""

from .client import complete_task, get_completion
from .config import get_model_config, get_task_tier

__all__ = [
    "complete_task",
    "get_completion",
    "get_model_config",
    "get_task_tier",
]
