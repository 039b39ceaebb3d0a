from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker

from docpatch.config import patching
from tests.helpers.records import mapper_registry

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture(autouse=True)
def clean_patch_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(patching.INDENT_ENV, raising=False)
    monkeypatch.delenv(patching.SORT_KEYS_ENV, raising=False)


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    mapper_registry.metadata.create_all(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session(sqlite_engine: Engine) -> Iterator[Session]:
    session_factory = sessionmaker(bind=sqlite_engine, future=True)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def populated_doc() -> dict[str, object]:
    return {
        "metadata": {"title": "Test", "author": "Bot"},
        "sections": [
            {"name": "Overview", "fields": [{"label": "Revenue", "value": 1000}]},
        ],
    }
