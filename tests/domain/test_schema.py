from __future__ import annotations

from docpatch.domain import (
    NOT_SCHEMA_BOUND,
    PLAIN_DOCUMENT,
    SchemaAwareDocument,
    SchemaAwareShim,
    SchemaBinding,
    schema_for,
)
from tests.helpers.documents import Box, FakeStoreDocument


def _document() -> FakeStoreDocument:
    return FakeStoreDocument({"name": "String", "meta": "Mixed"}, name="Ada", meta={})


def test_schema_aware_documents_are_detected_by_capability() -> None:
    assert isinstance(_document(), SchemaAwareDocument)
    assert not isinstance({"schema": {}}, SchemaAwareDocument)
    assert not isinstance(Box(label="x"), SchemaAwareDocument)


def test_schema_for_picks_matching_capability() -> None:
    assert isinstance(schema_for(_document()), SchemaAwareShim)
    assert schema_for({"a": 1}) is PLAIN_DOCUMENT
    assert schema_for(None) is PLAIN_DOCUMENT


def test_plain_document_is_never_bound() -> None:
    binding = PLAIN_DOCUMENT.binding({"meta": {}}, "/meta/a")

    assert binding == NOT_SCHEMA_BOUND
    assert binding.delete_on_remove is False


def test_nested_mixed_path_binds_to_mixed_root() -> None:
    binding = SchemaAwareShim().binding(_document(), "/meta/deeply/nested")

    assert binding == SchemaBinding(is_mixed=True, notify_path="meta")
    assert binding.delete_on_remove is True


def test_typed_and_unknown_paths_are_not_mixed() -> None:
    shim = SchemaAwareShim()

    assert shim.binding(_document(), "/name") == NOT_SCHEMA_BOUND
    assert shim.binding(_document(), "/unknown/field") == NOT_SCHEMA_BOUND


def test_shim_ignores_documents_without_schema() -> None:
    assert SchemaAwareShim().binding({"meta": {}}, "/meta/a") == NOT_SCHEMA_BOUND


def test_mark_modified_is_forwarded_to_document() -> None:
    document = _document()

    SchemaAwareShim().mark_modified(document, "meta")
    PLAIN_DOCUMENT.mark_modified(document, "meta")

    assert document.modified == ["meta"]
