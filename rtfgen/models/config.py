"""Config model."""

from __future__ import annotations

import string

from pydantic import Field, constr, field_validator

from .base import RtfBaseModel

NonEmptyStr = constr(min_length=1)


class Config(RtfBaseModel):
    project_root: NonEmptyStr = Field(..., description="Project root directory")
    inputs_dir: NonEmptyStr = Field(..., description="Inputs directory")
    runs_dir: NonEmptyStr = Field(..., description="Runs output directory")
    template_prefix: NonEmptyStr = Field("%%", description="Opening placeholder delimiter")
    template_suffix: NonEmptyStr = Field("%%", description="Closing placeholder delimiter")

    @field_validator("template_prefix", "template_suffix")
    @classmethod
    def _punctuation_only(cls, value: str) -> str:
        if any(char not in string.punctuation for char in value):
            raise ValueError(f"Delimiter must be ASCII punctuation: {value!r}")
        return value
