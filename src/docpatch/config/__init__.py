"""Application configuration helpers."""

from __future__ import annotations

from docpatch.common.logging import configure_logging

from .env import env_flag, env_int
from .errors import ConfigurationError
from .patching import PatchConfig, get_patch_config

__all__ = [
    "ConfigurationError",
    "PatchConfig",
    "configure_logging",
    "env_flag",
    "env_int",
    "get_patch_config",
]
