"""Shared Pydantic base model helpers."""

from __future__ import annotations

import json
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict

ModelT = TypeVar("ModelT", bound="RtfBaseModel")


class RtfBaseModel(BaseModel):
    """Immutable model with forbidden extras and stable JSON output.

    ``model_copy(update=...)`` skips validation; use :meth:`copy_with` when
    the changed value comes from a caller and has constraints to honor.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    def copy_with(self: ModelT, **changes: Any) -> ModelT:
        """Return a validated copy with ``changes`` applied."""
        return type(self).model_validate({**dict(self), **changes})

    def to_dict(self) -> dict[str, Any]:
        """Return a deterministic dict representation."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=False)

    def to_json(self) -> str:
        """Return deterministic JSON with sorted keys."""
        return json.dumps(self.to_dict(), sort_keys=True, ensure_ascii=True)
