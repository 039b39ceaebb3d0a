"""Application entry points tying files, configuration and the orchestrator together."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Any

from docpatch.adapters.json_files import dump_document, load_document, load_patch
from docpatch.config import get_patch_config
from docpatch.domain import apply_in_place

if TYPE_CHECKING:
    from pathlib import Path

    from docpatch.config import PatchConfig

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PatchFilesResult:
    document: Any
    text: str
    operations: int
    written_to: Path | None = None


def patch_files(
    patch_path: Path,
    document_path: Path,
    *,
    output: Path | None = None,
    in_place: bool = False,
    config: PatchConfig | None = None,
) -> PatchFilesResult:
    """Apply the patch stored at ``patch_path`` to the document at ``document_path``.

    The result is written to ``output``, or back to ``document_path`` with
    ``in_place``. Nothing is written when any operation fails.
    """

    if in_place and output is not None:
        raise ValueError("Use either an output path or in-place mode, not both")

    effective_config = config or get_patch_config()
    patch = load_patch(patch_path)
    document = load_document(document_path)
    log.info("Applying %d operations from %s to %s", len(patch), patch_path, document_path)

    # The document was just loaded and is owned here, so there is nothing to clone.
    result = apply_in_place(patch, document)

    target = document_path if in_place else output
    text = dump_document(
        result,
        target,
        indent=effective_config.indent or None,
        sort_keys=effective_config.sort_keys,
    )
    if target is not None:
        log.info("Wrote patched document to %s", target)
    return PatchFilesResult(document=result, text=text, operations=len(patch), written_to=target)
