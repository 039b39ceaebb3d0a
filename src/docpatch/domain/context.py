"""Context-aware index adjustment for patches applied to drifted arrays.

A patch generated against one version of a list may be applied to a list where
items were inserted or removed since. Operations can carry a ``context`` with the
fingerprints of the neighbouring items they were generated against::

    {"before": [<hash of item i-2>, <hash of item i-1>], "after": [<hash of item i>]}

The finder returned by :func:`make_context_finder` searches outward from the
literal index for the nearest position whose neighbours still match.
"""

from __future__ import annotations

import operator
from collections.abc import Callable, Iterator, Mapping, Sequence
from typing import TYPE_CHECKING, Any

from .utils import default_hash

if TYPE_CHECKING:
    from .operations import FindContext

type Equals = Callable[[Any, Any], bool]


def make_context_finder(
    equals: Equals | None = None,
    *,
    hash_fn: Callable[[Any], Any] = default_hash,
) -> FindContext:
    compare = equals or operator.eq

    def find_context(index: int, array: list[Any], context: Any) -> int:
        if not isinstance(context, Mapping):
            return index
        before: Sequence[Any] = context.get("before") or ()
        after: Sequence[Any] = context.get("after") or ()
        if not before and not after:
            return index

        hashes = [hash_fn(item) for item in array]
        for candidate in _outward(index, len(array)):
            if _matches(hashes, candidate, before, after, compare):
                return candidate
        return index

    return find_context


def _outward(index: int, length: int) -> Iterator[int]:
    yield index
    for distance in range(1, length + 1):
        for candidate in (index - distance, index + distance):
            if 0 <= candidate <= length:
                yield candidate


def _matches(
    hashes: list[Any],
    position: int,
    before: Sequence[Any],
    after: Sequence[Any],
    compare: Equals,
) -> bool:
    for offset, expected in enumerate(reversed(before), start=1):
        at = position - offset
        if at < 0 or not compare(hashes[at], expected):
            return False
    for offset, expected in enumerate(after):
        at = position + offset
        if at >= len(hashes) or not compare(hashes[at], expected):
            return False
    return True
