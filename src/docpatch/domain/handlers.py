"""Operation handlers and the registry mapping each kind to its handler.

Every handler follows the same contract::

    handler(document, operation, options) -> new_document

Containers are mutated in place and the (same) document is returned; operations
on the root return the replacement value instead.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any, Final, assert_never

from .clone import clone
from .errors import (
    InvalidPatchOperationError,
    MalformedOperationError,
    PatchTargetError,
    PatchTestFailedError,
)
from .operations import Operation, OperationKind, PatchOptions
from .pointer import Key, Pointer, find, is_record

type Handler = Callable[[Any, Operation, PatchOptions], Any]

# Value written to a record attribute when it is removed without a structural delete.
# Stores map it to "absent" (SQL NULL for mapped columns).
UNSET_VALUE: Final = None


def add_value(document: Any, operation: Operation, options: PatchOptions) -> Any:
    return _add(document, operation.path, clone(operation.value), operation, options)


def remove_value(document: Any, operation: Operation, options: PatchOptions) -> Any:
    pointer = _find(document, operation.path, operation, options)
    if pointer.is_root:
        return None
    _require(pointer, operation.path, "remove")
    _delete(pointer.target, pointer.key, delete=options.delete_on_remove)
    return document


def replace_value(document: Any, operation: Operation, options: PatchOptions) -> Any:
    value = clone(operation.value)
    pointer = _find(document, operation.path, operation, options)
    if pointer.is_root:
        return value
    _require(pointer, operation.path, "replace")
    _assign(pointer.target, pointer.key, value)
    return document


def move_value(document: Any, operation: Operation, options: PatchOptions) -> Any:
    from_path = _from_path(operation)
    if from_path == operation.path:
        return document
    if operation.path.startswith(f"{from_path}/"):
        raise MalformedOperationError(
            f"cannot move {from_path!r} into its own child {operation.path!r}"
        )

    source = find(document, from_path)
    value = _require(source, from_path, "move")
    if source.is_root:
        document = None
    else:
        _delete(source.target, source.key, delete=options.delete_move_source)
    return _add(document, operation.path, value, operation, options)


def copy_value(document: Any, operation: Operation, options: PatchOptions) -> Any:
    from_path = _from_path(operation)
    value = clone(_require(find(document, from_path), from_path, "copy"))
    return _add(document, operation.path, value, operation, options)


def check_value(document: Any, operation: Operation, options: PatchOptions) -> Any:
    pointer = _find(document, operation.path, operation, options)
    actual = _require(pointer, operation.path, "test")
    if not json_equal(actual, operation.value):
        raise PatchTestFailedError(
            f"test failed at {operation.path!r}: expected {operation.value!r}, found {actual!r}"
        )
    return document


def _handler_for(kind: OperationKind) -> Handler:
    match kind:
        case OperationKind.ADD:
            return add_value
        case OperationKind.REMOVE:
            return remove_value
        case OperationKind.REPLACE:
            return replace_value
        case OperationKind.MOVE:
            return move_value
        case OperationKind.COPY:
            return copy_value
        case OperationKind.TEST:
            return check_value
        case _:
            assert_never(kind)


HANDLERS: Final[Mapping[OperationKind, Handler]] = MappingProxyType(
    {kind: _handler_for(kind) for kind in OperationKind}
)

_KIND_NAMES: Final = frozenset(kind.value for kind in OperationKind)


def resolve_handler(raw: Any) -> tuple[OperationKind, Handler]:
    """Return the kind and handler for a raw operation mapping.

    Anything that does not name a known kind (including non-mappings) raises
    :class:`InvalidPatchOperationError` carrying ``raw`` unchanged.
    """

    name = raw.get("op") if isinstance(raw, Mapping) else None
    if not isinstance(name, str) or name not in _KIND_NAMES:
        raise InvalidPatchOperationError(raw)
    kind = OperationKind(name)
    return kind, HANDLERS[kind]


def json_equal(left: Any, right: Any) -> bool:
    """Structural equality with JSON semantics (``True`` is not ``1``)."""

    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    if isinstance(left, (int, float)) and isinstance(right, (int, float)):
        return left == right
    if isinstance(left, dict) and isinstance(right, dict):
        return left.keys() == right.keys() and all(json_equal(left[k], right[k]) for k in left)
    if isinstance(left, (list, tuple)) and isinstance(right, (list, tuple)):
        return len(left) == len(right) and all(
            json_equal(a, b) for a, b in zip(left, right, strict=True)
        )
    return type(left) is type(right) and left == right


def _find(document: Any, path: str, operation: Operation, options: PatchOptions) -> Pointer:
    return find(document, path, options.find_context, operation.context)


def _from_path(operation: Operation) -> str:
    if operation.from_path is None:
        raise MalformedOperationError(f"{operation.kind} operation requires 'from'")
    return operation.from_path


def _add(document: Any, path: str, value: Any, operation: Operation, options: PatchOptions) -> Any:
    pointer = _find(document, path, operation, options)
    if pointer.is_root:
        return value
    if not pointer.found:
        raise PatchTargetError(f"add to missing parent: {path!r}")
    _insert(pointer.target, pointer.key, value)
    return document


def _require(pointer: Pointer, path: str, action: str) -> Any:
    """Return the value addressed by ``pointer`` or raise if it does not exist."""

    if pointer.is_root:
        return pointer.target
    target, key = pointer.target, pointer.key
    if isinstance(target, list) and isinstance(key, int) and 0 <= key < len(target):
        return target[key]
    if isinstance(target, dict) and key in target:
        return target[key]
    if is_record(target) and isinstance(key, str) and not key.startswith("_"):
        if hasattr(target, key):
            return getattr(target, key)
    raise PatchTargetError(f"{action} from missing path: {path!r}")


def _insert(target: Any, key: Key | None, value: Any) -> None:
    if isinstance(target, list):
        if not isinstance(key, int) or key > len(target):
            raise PatchTargetError(f"array index out of range: {key}")
        target.insert(key, value)
    else:
        _assign(target, key, value)


def _assign(target: Any, key: Key | None, value: Any) -> None:
    if isinstance(target, (list, dict)):
        target[key] = value
    else:
        setattr(target, str(key), value)


def _delete(target: Any, key: Key | None, *, delete: bool) -> None:
    if isinstance(target, (list, dict)):
        del target[key]
    elif delete:
        delattr(target, str(key))
    else:
        setattr(target, str(key), UNSET_VALUE)
