"""Load patches and documents from JSON files and write results back."""

from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from .schema import PatchOperationModel

log = logging.getLogger(__name__)

_PATCH_ADAPTER = TypeAdapter(list[PatchOperationModel])


class PatchFileError(ValueError):
    """Raised when a patch or document file cannot be read or written."""


def load_document(path: Path) -> Any:
    try:
        with path.open(encoding="utf-8") as handle:
            return json.load(handle)
    except (OSError, json.JSONDecodeError) as exc:
        raise PatchFileError(f"Cannot read JSON document {path}: {exc}") from exc


def load_patch(path: Path) -> list[dict[str, Any]]:
    """Read and validate a JSON Patch file, returning plain operation mappings."""

    raw = load_document(path)
    try:
        operations = _PATCH_ADAPTER.validate_python(raw)
    except ValidationError as exc:
        raise PatchFileError(f"Invalid JSON Patch in {path}: {exc}") from exc
    log.debug("Loaded %d operations from %s", len(operations), path)
    return [operation.to_operation() for operation in operations]


def dump_document(
    value: Any,
    path: Path | None = None,
    *,
    indent: int | None = 2,
    sort_keys: bool = False,
) -> str:
    """Serialise ``value``; write it to ``path`` when given and return the text.

    The file is written next to ``path`` first and then moved over it, so a failed
    write never leaves ``path`` truncated.
    """

    text = json.dumps(value, indent=indent, sort_keys=sort_keys, ensure_ascii=False)
    if path is not None:
        try:
            _replace_file(path, text + "\n")
        except OSError as exc:
            raise PatchFileError(f"Cannot write JSON document {path}: {exc}") from exc
    return text


def _replace_file(path: Path, text: str) -> None:
    fd, temp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    temp_path = Path(temp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)
        if path.exists():
            shutil.copymode(path, temp_path)
        temp_path.replace(path)
    except OSError:
        temp_path.unlink(missing_ok=True)
        raise
