"""Patch application domain: operations, handlers, schema capabilities and the orchestrator."""

from __future__ import annotations

from .clone import clone
from .context import make_context_finder
from .errors import (
    InvalidPatchOperationError,
    InvalidPointerError,
    MalformedOperationError,
    PatchError,
    PatchTargetError,
    PatchTestFailedError,
)
from .handlers import HANDLERS, UNSET_VALUE, Handler, json_equal, resolve_handler
from .operations import FindContext, Operation, OperationKind, PatchOptions
from .orchestrator import apply, apply_in_place
from .schema import (
    MIXED,
    NOT_SCHEMA_BOUND,
    PLAIN_DOCUMENT,
    DocumentSchema,
    PlainDocument,
    Schema,
    SchemaAwareDocument,
    SchemaAwareShim,
    SchemaBinding,
    SchemaType,
    schema_for,
)
from .utils import default_hash, is_array, is_valid_object, pointer_to_store_path

__all__ = [
    "HANDLERS",
    "MIXED",
    "NOT_SCHEMA_BOUND",
    "PLAIN_DOCUMENT",
    "UNSET_VALUE",
    "DocumentSchema",
    "FindContext",
    "Handler",
    "InvalidPatchOperationError",
    "InvalidPointerError",
    "MalformedOperationError",
    "Operation",
    "OperationKind",
    "PatchError",
    "PatchOptions",
    "PatchTargetError",
    "PatchTestFailedError",
    "PlainDocument",
    "Schema",
    "SchemaAwareDocument",
    "SchemaAwareShim",
    "SchemaBinding",
    "SchemaType",
    "apply",
    "apply_in_place",
    "clone",
    "default_hash",
    "is_array",
    "is_valid_object",
    "json_equal",
    "make_context_finder",
    "pointer_to_store_path",
    "resolve_handler",
    "schema_for",
]
