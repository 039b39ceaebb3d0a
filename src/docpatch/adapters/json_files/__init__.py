"""JSON file adapter: patch validation and document I/O."""

from __future__ import annotations

from .io import PatchFileError, dump_document, load_document, load_patch
from .schema import PatchOperationModel

__all__ = [
    "PatchFileError",
    "PatchOperationModel",
    "dump_document",
    "load_document",
    "load_patch",
]
