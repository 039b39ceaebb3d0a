from __future__ import annotations

from typing import Any

import pytest

from docpatch.domain import InvalidPointerError
from docpatch.domain.pointer import escape, find, join, parse, unescape


def test_parse_root_and_segments() -> None:
    assert parse("") == []
    assert parse("/") == [""]
    assert parse("/a/0/b") == ["a", "0", "b"]


def test_parse_requires_leading_slash() -> None:
    with pytest.raises(InvalidPointerError, match="must start with"):
        parse("a/b")


def test_escape_round_trip_for_reserved_characters() -> None:
    assert escape("a/b~c") == "a~1b~0c"
    assert unescape("~01") == "~1"
    assert join(["a/b", "~"]) == "/a~1b/~0"


def test_find_root() -> None:
    document = {"a": 1}

    pointer = find(document, "")

    assert pointer.is_root
    assert pointer.target is document


def test_find_returns_parent_and_key() -> None:
    document: dict[str, Any] = {"a": {"b": [10, 20]}}

    pointer = find(document, "/a/b/1")

    assert pointer.target is document["a"]["b"]
    assert pointer.key == 1


def test_find_dash_points_past_array_end() -> None:
    assert find({"a": [1, 2]}, "/a/-").key == 2


def test_find_missing_intermediate_has_no_target() -> None:
    pointer = find({"a": 1}, "/a/b/c")

    assert not pointer.found
    assert pointer.key == "c"


def test_find_applies_context_finder_only_with_context() -> None:
    calls: list[tuple[int, Any]] = []

    def finder(index: int, array: list[Any], context: Any) -> int:
        _ = array
        calls.append((index, context))
        return index + 1

    assert find([0, 1, 2], "/0", finder).key == 0
    assert find([0, 1, 2], "/0", finder, {"before": []}).key == 1
    assert calls == [(0, {"before": []})]
