"""SQLAlchemy adapter package for docpatch."""

from __future__ import annotations

from .schema import (
    SQLALCHEMY_DOCUMENT,
    SqlAlchemyDocumentSchema,
    apply_to_record,
    instance_state,
    is_mapped,
    mixed_columns,
)

__all__ = [
    "SQLALCHEMY_DOCUMENT",
    "SqlAlchemyDocumentSchema",
    "apply_to_record",
    "instance_state",
    "is_mapped",
    "mixed_columns",
]
