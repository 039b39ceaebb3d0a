"""Output defaults for patched documents."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .env import env_flag, env_int
from .errors import ConfigurationError

INDENT_ENV: Final[str] = "DOCPATCH_INDENT"
SORT_KEYS_ENV: Final[str] = "DOCPATCH_SORT_KEYS"
DEFAULT_INDENT: Final[int] = 2


@dataclass(frozen=True, slots=True)
class PatchConfig:
    indent: int = DEFAULT_INDENT
    sort_keys: bool = False

    def __post_init__(self) -> None:
        if self.indent < 0:
            raise ConfigurationError(f"{INDENT_ENV} must be non-negative")


def get_patch_config() -> PatchConfig:
    return PatchConfig(
        indent=env_int(INDENT_ENV, default=DEFAULT_INDENT),
        sort_keys=env_flag(SORT_KEYS_ENV),
    )
