"""Error types raised while applying patches."""

from __future__ import annotations

import json
from typing import Any


class PatchError(RuntimeError):
    """Base class for every error raised by docpatch."""


class InvalidPatchOperationError(PatchError):
    """Raised when an operation names a kind that has no registered handler.

    The offending operation is kept verbatim on ``operation`` so callers can report
    exactly what they were handed.
    """

    def __init__(self, operation: Any) -> None:
        super().__init__(f"invalid op {_describe(operation)}")
        self.operation = operation


class MalformedOperationError(PatchError, ValueError):
    """Raised when an operation lacks a field its kind requires."""


class InvalidPointerError(PatchError, ValueError):
    """Raised for JSON Pointer strings that do not follow RFC 6901."""


class PatchTargetError(PatchError, LookupError):
    """Raised when an operation addresses a location that does not exist."""


class PatchTestFailedError(PatchError):
    """Raised when a ``test`` operation does not match the document."""


def _describe(operation: Any) -> str:
    try:
        return json.dumps(operation, default=repr)
    except (TypeError, ValueError):
        return repr(operation)
