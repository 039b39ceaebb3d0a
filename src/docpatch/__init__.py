from __future__ import annotations

from importlib import metadata

from docpatch.domain import (
    InvalidPatchOperationError,
    apply,
    apply_in_place,
    clone,
    default_hash,
    is_valid_object,
)

try:
    __version__ = metadata.version("docpatch")
except metadata.PackageNotFoundError:
    __version__ = "0.0.0+local"

__all__ = [
    "InvalidPatchOperationError",
    "apply",
    "apply_in_place",
    "clone",
    "default_hash",
    "is_valid_object",
]
