"""Apply JSON Patch sequences to documents."""

from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING, Any

from .clone import clone
from .handlers import resolve_handler
from .operations import Operation, OperationKind, PatchOptions
from .schema import NOT_SCHEMA_BOUND, schema_for

if TYPE_CHECKING:
    from .schema import DocumentSchema, SchemaBinding

log = logging.getLogger(__name__)

_DEFAULT_OPTIONS = PatchOptions()


def apply(
    patch: Any,
    document: Any,
    options: PatchOptions | None = None,
    *,
    schema: DocumentSchema | None = None,
    atomic: bool = False,
) -> Any:
    """Apply ``patch`` to a deep copy of ``document`` and return the copy.

    The caller's ``document`` is never modified.
    """

    return apply_in_place(patch, clone(document), options, schema=schema, atomic=atomic)


def apply_in_place(
    patch: Any,
    document: Any,
    options: PatchOptions | None = None,
    *,
    schema: DocumentSchema | None = None,
    atomic: bool = False,
) -> Any:
    """Apply ``patch`` to ``document`` directly and return the result.

    Dicts, lists and records are mutated and returned as the same object unless an
    operation replaces the root, in which case the new root is returned. Scalars
    are only ever replaced.

    Operations run strictly in order. Each one sees the effect of the previous
    ones, gets freshly built options, and is checked against the document's schema
    capability (``schema`` or, when omitted, whatever :func:`schema_for` picks for
    the current document).

    Contract worth knowing about:

    * A ``patch`` that is not a list or tuple is ignored and ``document`` is
      returned untouched. This is deliberate, not an error.
    * An operation with an unknown ``op`` raises
      :class:`~docpatch.domain.errors.InvalidPatchOperationError`. Handler errors
      propagate unchanged. Nothing is rolled back: operations before the failing
      one stay applied. Pass ``atomic=True`` to restore ``dict``/``list``
      documents to their original content before the error is re-raised.
    """

    if not isinstance(patch, (list, tuple)):
        log.debug("Ignoring non-sequence patch of type %s", type(patch).__name__)
        return document

    base_options = options or _DEFAULT_OPTIONS
    if not atomic:
        return _apply_operations(patch, document, base_options, schema)

    if not isinstance(document, (dict, list)):
        raise ValueError(
            f"atomic patching needs a dict or list document, got {type(document).__name__}"
        )
    snapshot = clone(document)
    try:
        return _apply_operations(patch, document, base_options, schema)
    except Exception:
        log.warning("Patch failed; restoring document to its state before the patch")
        _restore(document, snapshot)
        raise


def _apply_operations(
    patch: list[Any] | tuple[Any, ...],
    document: Any,
    base_options: PatchOptions,
    schema: DocumentSchema | None,
) -> Any:
    for index, raw in enumerate(patch):
        kind, handler = resolve_handler(raw)
        operation = Operation.from_mapping(raw, kind)

        capability = schema or schema_for(document)
        binding = capability.binding(document, operation.path)
        source = _source_binding(capability, document, operation)
        operation_options = dataclasses.replace(
            base_options,
            delete_on_remove=binding.delete_on_remove,
            delete_move_source=source.delete_on_remove,
        )

        log.debug("Applying operation %d: %s %s", index, kind, operation.path)
        document = handler(document, operation, operation_options)

        if kind is not OperationKind.TEST:
            for notify_path in _notify_paths(binding, source):
                capability.mark_modified(document, notify_path)

    return document


def _source_binding(
    capability: DocumentSchema, document: Any, operation: Operation
) -> SchemaBinding:
    # Only a move removes the value at ``from``; copy leaves the source alone.
    if operation.kind is not OperationKind.MOVE or operation.from_path is None:
        return NOT_SCHEMA_BOUND
    return capability.binding(document, operation.from_path)


def _notify_paths(*bindings: SchemaBinding) -> list[str]:
    paths = (binding.notify_path for binding in bindings if binding.is_mixed)
    return list(dict.fromkeys(path for path in paths if path))


def _restore(document: dict[Any, Any] | list[Any], snapshot: Any) -> None:
    if isinstance(document, dict):
        document.clear()
        document.update(snapshot)
    else:
        document[:] = snapshot
