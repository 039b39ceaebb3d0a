"""Schema-awareness capabilities consulted by the orchestrator for each operation.

Some stores keep a schema next to the document and need two extra things from a
patch run:

* a removed *typed* field must be set to the store's unset value so that it is
  written as absent, while fields inside a permissively typed ("Mixed") region
  are deleted structurally;
* writes inside a Mixed region are invisible to the store's own change tracking,
  so the store has to be told which root-level field changed.

The orchestrator talks to a :class:`DocumentSchema`. Plain values use the
:data:`PLAIN_DOCUMENT` null object; documents that expose the
:class:`SchemaAwareDocument` surface are handled by :class:`SchemaAwareShim`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Final, Protocol, runtime_checkable

from .utils import pointer_to_store_path

MIXED: Final[str] = "Mixed"


@dataclass(frozen=True, slots=True)
class SchemaBinding:
    """What the schema says about the field an operation addresses."""

    is_mixed: bool = False
    notify_path: str | None = None

    @property
    def delete_on_remove(self) -> bool:
        return self.is_mixed


NOT_SCHEMA_BOUND: Final = SchemaBinding()


class DocumentSchema(Protocol):
    """Capability the orchestrator consults before and after each operation."""

    def binding(self, document: Any, pointer: str) -> SchemaBinding: ...

    def mark_modified(self, document: Any, store_path: str) -> None: ...


class SchemaType(Protocol):
    """Schema node for one field: ``path`` is the root-level field it belongs to."""

    @property
    def path(self) -> str: ...

    @property
    def instance(self) -> str: ...


class Schema(Protocol):
    def path(self, store_path: str) -> SchemaType | None: ...


@runtime_checkable
class SchemaAwareDocument(Protocol):
    """Surface exposed by documents that belong to a schema-aware store."""

    @property
    def schema(self) -> Schema: ...

    def set(self, store_path: str, value: Any) -> None: ...

    def mark_modified(self, store_path: str) -> None: ...


class PlainDocument:
    """Null object for documents without a schema."""

    def binding(self, document: Any, pointer: str) -> SchemaBinding:
        _ = (document, pointer)
        return NOT_SCHEMA_BOUND

    def mark_modified(self, document: Any, store_path: str) -> None:
        _ = (document, store_path)


PLAIN_DOCUMENT: Final = PlainDocument()


class SchemaAwareShim:
    """:class:`DocumentSchema` for documents implementing :class:`SchemaAwareDocument`."""

    def binding(self, document: Any, pointer: str) -> SchemaBinding:
        if not isinstance(document, SchemaAwareDocument):
            return NOT_SCHEMA_BOUND
        schema_type = document.schema.path(pointer_to_store_path(pointer))
        if schema_type is None or schema_type.instance != MIXED:
            return NOT_SCHEMA_BOUND
        # schema_type.path is the root of the Mixed region, not the nested field.
        return SchemaBinding(is_mixed=True, notify_path=schema_type.path)

    def mark_modified(self, document: Any, store_path: str) -> None:
        document.mark_modified(store_path)


SCHEMA_AWARE: Final = SchemaAwareShim()


def schema_for(document: Any) -> DocumentSchema:
    """Pick the capability matching ``document`` as it currently is."""

    if isinstance(document, SchemaAwareDocument):
        return SCHEMA_AWARE
    return PLAIN_DOCUMENT
