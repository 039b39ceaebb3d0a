"""Deep copies of documents."""

from __future__ import annotations

import copy
from typing import Any


def clone[T](value: T) -> T:
    """Return an independent deep copy sharing no mutable state with ``value``."""

    return copy.deepcopy(value)
