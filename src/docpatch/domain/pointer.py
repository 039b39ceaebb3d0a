"""JSON Pointer (RFC 6901) parsing and target lookup."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Final

from .errors import InvalidPointerError

if TYPE_CHECKING:
    from .operations import FindContext

END_OF_ARRAY: Final[str] = "-"

_ARRAY_INDEX = re.compile(r"^(0|[1-9][0-9]*)$")
_SCALARS: Final = (str, bytes, int, float, bool, type(None))

type Key = str | int


@dataclass(frozen=True, slots=True)
class Pointer:
    """Parent container and key addressed by a pointer.

    ``target`` is ``None`` when an intermediate segment does not exist. The document
    root has neither target nor key.
    """

    target: Any
    key: Key | None

    @property
    def is_root(self) -> bool:
        return self.key is None

    @property
    def found(self) -> bool:
        return self.is_root or self.target is not None


def escape(segment: str) -> str:
    return segment.replace("~", "~0").replace("/", "~1")


def unescape(segment: str) -> str:
    return segment.replace("~1", "/").replace("~0", "~")


def parse(pointer: str) -> list[str]:
    """Split ``pointer`` into unescaped segments; ``""`` addresses the root."""

    if pointer == "":
        return []
    if not pointer.startswith("/"):
        raise InvalidPointerError(f'JSON Pointer must start with "/": {pointer!r}')
    return [unescape(segment) for segment in pointer.split("/")[1:]]


def join(segments: list[str]) -> str:
    return "".join(f"/{escape(segment)}" for segment in segments)


def is_record(value: Any) -> bool:
    """Whether ``value`` is an attribute-bearing object (an ORM instance, say)."""

    return not isinstance(value, (*_SCALARS, dict, list, tuple))


def parse_array_index(segment: str) -> int:
    if not _ARRAY_INDEX.match(segment):
        raise InvalidPointerError(f"Invalid array index: {segment!r}")
    return int(segment)


def child(container: Any, segment: str) -> tuple[bool, Any]:
    """Look up one segment; return ``(found, value)``."""

    if isinstance(container, dict):
        if segment in container:
            return True, container[segment]
        return False, None
    if isinstance(container, list):
        if not _ARRAY_INDEX.match(segment):
            return False, None
        index = int(segment)
        if index >= len(container):
            return False, None
        return True, container[index]
    if is_record(container) and not segment.startswith("_") and hasattr(container, segment):
        return True, getattr(container, segment)
    return False, None


def find(
    document: Any,
    pointer: str,
    find_context: FindContext | None = None,
    context: Any = None,
) -> Pointer:
    """Resolve ``pointer`` against ``document`` to its parent container and key.

    For arrays the final key becomes an ``int`` (``-`` maps to the current length),
    adjusted through ``find_context`` when both it and ``context`` are supplied.
    """

    segments = parse(pointer)
    if not segments:
        return Pointer(target=document, key=None)

    target = document
    for segment in segments[:-1]:
        found, target = child(target, segment)
        if not found:
            return Pointer(target=None, key=segments[-1])

    last = segments[-1]
    if isinstance(target, list):
        index = len(target) if last == END_OF_ARRAY else parse_array_index(last)
        if find_context is not None and context is not None:
            index = find_context(index, target, context)
        return Pointer(target=target, key=index)
    if isinstance(target, (*_SCALARS, tuple)):
        return Pointer(target=None, key=last)
    return Pointer(target=target, key=last)
