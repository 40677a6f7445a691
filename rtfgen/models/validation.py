"""ValidationReport contracts."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import Field

from .base import RtfBaseModel

# Every finding is a warning.
ValidationSeverity = Literal["WARN"]
ViolationType = Literal[
    "UNKNOWN_FONT",
    "UNKNOWN_COLOR",
    "UNKNOWN_STYLE",
]


class ValidationViolation(RtfBaseModel):
    location: str
    violation_type: ViolationType
    severity: ValidationSeverity
    index: int
    recommended_action: Optional[str] = None


class ValidationReport(RtfBaseModel):
    violations: List[ValidationViolation] = Field(default_factory=list)
