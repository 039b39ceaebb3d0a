"""Pydantic models for patch files read from disk."""

from __future__ import annotations

import logging
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

log = logging.getLogger(__name__)


class PatchOperationModel(BaseModel):
    """One entry of a JSON Patch document.

    ``op`` stays a plain string: unknown kinds are reported by the orchestrator, with
    the offending operation attached, rather than rejected here.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)
    _logged_extra_keys: ClassVar[set[str]] = set()

    op: str
    path: str
    value: Any = None
    from_: str | None = Field(default=None, alias="from")
    context: Any = None

    def model_post_init(self, _context: object, /) -> None:
        extras = self.__pydantic_extra__
        if not extras:
            return
        new_keys = set(extras).difference(self._logged_extra_keys)
        if not new_keys:
            return
        self._logged_extra_keys.update(new_keys)
        log.warning("Patch operation: unmodeled keys: %s", ", ".join(sorted(new_keys)))

    def to_operation(self) -> dict[str, Any]:
        """Plain mapping with only the keys present in the file."""

        return self.model_dump(by_alias=True, exclude_unset=True)
