from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from docpatch.adapters.json_files import (
    PatchFileError,
    PatchOperationModel,
    dump_document,
    load_document,
    load_patch,
)

if TYPE_CHECKING:
    from pathlib import Path


def _write(path: Path, payload: object) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_load_patch_keeps_only_present_keys(tmp_path: Path) -> None:
    patch_path = _write(
        tmp_path / "patch.json",
        [
            {"op": "remove", "path": "/a"},
            {"op": "move", "from": "/b", "path": "/c"},
            {"op": "add", "path": "/d", "value": None},
        ],
    )

    assert load_patch(patch_path) == [
        {"op": "remove", "path": "/a"},
        {"op": "move", "from": "/b", "path": "/c"},
        {"op": "add", "path": "/d", "value": None},
    ]


def test_load_patch_passes_unknown_kinds_through(tmp_path: Path) -> None:
    patch_path = _write(tmp_path / "patch.json", [{"op": "merge", "path": "/a", "extra": 1}])

    assert load_patch(patch_path) == [{"op": "merge", "path": "/a", "extra": 1}]


def test_unmodeled_keys_are_logged_once(caplog: pytest.LogCaptureFixture) -> None:
    PatchOperationModel._logged_extra_keys.discard("hint")  # noqa: SLF001

    with caplog.at_level("WARNING"):
        PatchOperationModel.model_validate({"op": "add", "path": "/a", "value": 1, "hint": 1})
        PatchOperationModel.model_validate({"op": "add", "path": "/b", "value": 2, "hint": 2})

    warnings = [record for record in caplog.records if "hint" in record.getMessage()]
    assert len(warnings) == 1


@pytest.mark.parametrize(
    "payload",
    [
        {"op": "add", "path": "/a", "value": 1},
        [{"path": "/a"}],
        [{"op": "add", "path": 1}],
    ],
)
def test_load_patch_rejects_malformed_files(tmp_path: Path, payload: object) -> None:
    patch_path = _write(tmp_path / "patch.json", payload)

    with pytest.raises(PatchFileError, match="Invalid JSON Patch"):
        load_patch(patch_path)


def test_load_document_reports_unreadable_files(tmp_path: Path) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")

    with pytest.raises(PatchFileError, match="Cannot read"):
        load_document(broken)
    with pytest.raises(PatchFileError, match="Cannot read"):
        load_document(tmp_path / "missing.json")


def test_dump_document_writes_file(tmp_path: Path) -> None:
    target = tmp_path / "out.json"

    text = dump_document({"b": 1, "a": "é"}, target, indent=None, sort_keys=True)

    assert text == '{"a": "é", "b": 1}'
    assert target.read_text(encoding="utf-8") == text + "\n"


def test_dump_document_reports_unwritable_target(tmp_path: Path) -> None:
    with pytest.raises(PatchFileError, match="Cannot write"):
        dump_document({"a": 1}, tmp_path / "missing" / "out.json")


def test_failed_write_keeps_existing_document(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    target = _write(tmp_path / "document.json", {"a": 1})

    def fail_replace(self: Path, destination: Path) -> Path:
        _ = (self, destination)
        raise OSError("disk full")

    monkeypatch.setattr(type(target), "replace", fail_replace)

    with pytest.raises(PatchFileError, match="disk full"):
        dump_document({"a": 2}, target)

    assert json.loads(target.read_text(encoding="utf-8")) == {"a": 1}
    assert [path.name for path in tmp_path.iterdir()] == ["document.json"]
