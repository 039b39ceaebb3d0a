"""Path and hash helpers shared by the orchestrator and the schema shim."""

from __future__ import annotations

import json
import logging
from typing import Any, Final

log = logging.getLogger(__name__)

POINTER_SEPARATOR: Final[str] = "/"
STORE_SEPARATOR: Final[str] = "."
_COMPACT: Final = (",", ":")


def pointer_to_store_path(pointer: str, separator: str = STORE_SEPARATOR) -> str:
    """Convert ``/a/b/0`` into the dotted ``a.b.0`` form used by document stores.

    Only the first leading separator is dropped. Reserved pointer characters
    (``~0``/``~1``) are left as they are; unescaping belongs to pointer resolution.
    """

    if pointer.startswith(POINTER_SEPARATOR):
        pointer = pointer[len(POINTER_SEPARATOR) :]
    return pointer.replace(POINTER_SEPARATOR, separator)


def default_hash(value: Any) -> Any:
    """Return a structural fingerprint for dicts and lists, or the scalar itself.

    Dict keys are serialised the way JSON does, so ``{1: x}`` and ``{"1": x}``
    share a fingerprint. Dicts whose keys cannot be ordered against each other
    (``int`` next to ``str``) are fingerprinted in insertion order.
    """

    if not (is_valid_object(value) or is_array(value)):
        return value
    try:
        return json.dumps(value, sort_keys=True, separators=_COMPACT, default=repr)
    except TypeError:
        log.debug("Unsortable keys; fingerprinting %s in insertion order", type(value).__name__)
        return json.dumps(value, separators=_COMPACT, default=repr)


def is_valid_object(value: Any) -> bool:
    """Whether ``value`` is a plain ``dict`` (not a subclass, list or ``None``)."""

    return value is not None and type(value) is dict


def is_array(value: Any) -> bool:
    return type(value) is list
