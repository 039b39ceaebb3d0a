"""Operation and option value objects."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from .errors import MalformedOperationError

type FindContext = Callable[[int, list[Any], Any], int]


class OperationKind(StrEnum):
    """Closed set of operation kinds understood by the registry."""

    ADD = "add"
    REMOVE = "remove"
    REPLACE = "replace"
    MOVE = "move"
    COPY = "copy"
    TEST = "test"

    @property
    def requires_value(self) -> bool:
        return self in (OperationKind.ADD, OperationKind.REPLACE, OperationKind.TEST)

    @property
    def requires_from(self) -> bool:
        return self in (OperationKind.MOVE, OperationKind.COPY)


@dataclass(frozen=True, slots=True)
class Operation:
    """A single, validated patch operation.

    Built from the raw mapping after its kind has been resolved; the raw mapping is
    never modified.
    """

    kind: OperationKind
    path: str
    value: Any = None
    from_path: str | None = None
    context: Any = None

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any], kind: OperationKind) -> Operation:
        path = raw.get("path")
        if not isinstance(path, str):
            raise MalformedOperationError(f"{kind} operation requires a string 'path'")
        if kind.requires_value and "value" not in raw:
            raise MalformedOperationError(f"{kind} operation at {path!r} requires 'value'")
        from_path = raw.get("from")
        if kind.requires_from and not isinstance(from_path, str):
            raise MalformedOperationError(f"{kind} operation at {path!r} requires 'from'")
        return cls(
            kind=kind,
            path=path,
            value=raw.get("value"),
            from_path=from_path,
            context=raw.get("context"),
        )


@dataclass(frozen=True, slots=True)
class PatchOptions:
    """Per-operation options handed to handlers.

    ``delete_on_remove`` and ``delete_move_source`` are always recomputed by the
    orchestrator before each operation; whatever the caller passes is overwritten.
    ``delete_move_source`` applies to the ``from`` side of a move, which may live
    in a different schema region than its destination.
    """

    find_context: FindContext | None = None
    delete_on_remove: bool = False
    delete_move_source: bool = False
