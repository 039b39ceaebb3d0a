"""Schema capability for SQLAlchemy-mapped instances.

A mapped instance is treated as a record whose column attributes are its fields.
Columns typed ``JSON`` are the Mixed regions: SQLAlchemy does not see in-place
changes to the structure they hold, so any operation below such a column flags the
column as modified. Operations on the column attribute itself are ordinary
attribute sets, which SQLAlchemy tracks on its own.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Final

from sqlalchemy import JSON, inspect
from sqlalchemy.exc import NoInspectionAvailable
from sqlalchemy.orm import InstanceState
from sqlalchemy.orm.attributes import flag_modified

from docpatch.domain import NOT_SCHEMA_BOUND, SchemaBinding, apply_in_place
from docpatch.domain.utils import STORE_SEPARATOR, pointer_to_store_path

if TYPE_CHECKING:
    from docpatch.domain import PatchOptions

log = logging.getLogger(__name__)


def instance_state(value: Any) -> InstanceState[Any] | None:
    """Return the SQLAlchemy instance state for mapped instances, else ``None``."""

    try:
        state = inspect(value)
    except NoInspectionAvailable:
        return None
    return state if isinstance(state, InstanceState) else None


def is_mapped(value: Any) -> bool:
    return instance_state(value) is not None


def mixed_columns(value: Any) -> frozenset[str]:
    """Names of the JSON-typed column attributes of a mapped instance."""

    state = instance_state(value)
    if state is None:
        return frozenset()
    return frozenset(
        prop.key
        for prop in state.mapper.column_attrs
        if any(isinstance(column.type, JSON) for column in prop.columns)
    )


class SqlAlchemyDocumentSchema:
    """``DocumentSchema`` backed by the mapper of the patched instance."""

    def binding(self, document: Any, pointer: str) -> SchemaBinding:
        segments = pointer_to_store_path(pointer).split(STORE_SEPARATOR)
        if len(segments) < 2:
            return NOT_SCHEMA_BOUND
        root = segments[0]
        if root not in mixed_columns(document):
            return NOT_SCHEMA_BOUND
        return SchemaBinding(is_mixed=True, notify_path=root)

    def mark_modified(self, document: Any, store_path: str) -> None:
        log.debug("Flagging %s.%s as modified", type(document).__name__, store_path)
        flag_modified(document, store_path)


SQLALCHEMY_DOCUMENT: Final = SqlAlchemyDocumentSchema()


def apply_to_record(record: Any, patch: Any, options: PatchOptions | None = None) -> Any:
    """Patch a mapped instance in place so the session picks up every change.

    The instance is not flushed or committed; that stays with the caller's session
    or unit of work.
    """

    if not is_mapped(record):
        raise TypeError(f"{type(record).__name__} is not a mapped SQLAlchemy instance")
    return apply_in_place(patch, record, options, schema=SQLALCHEMY_DOCUMENT)
