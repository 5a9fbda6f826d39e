"""
Pydantic models for translator scenarios and their outcomes.

A Scenario is an immutable test-case record. A ScenarioResult is what one
execution of a scenario produced; the comparison itself is strict string
equality and ignores ``should_pass``.
"""

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class InputKind(str, Enum):
    """Kinds of input surface the harness knows how to write into."""
    VALUE_FIELD = "value_field"
    EDITABLE_REGION = "editable_region"

    @classmethod
    def from_tag(cls, tag: str) -> "InputKind":
        """Map an element's tag name to the injection protocol it needs."""
        if tag.lower() in ("textarea", "input"):
            return cls.VALUE_FIELD
        return cls.EDITABLE_REGION


class Scenario(BaseModel):
    """One data-driven test case."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., description="Stable identifier, used for evidence filenames")
    name: str = Field(..., description="Human-readable description")
    input: str = Field(..., description="Singlish text typed into the translator")
    expected: str = Field(..., description="Exact Sinhala output expected")
    should_pass: bool = Field(
        default=True,
        alias="shouldPass",
        description="Author's intent only; never changes the assertion"
    )

    @field_validator('id')
    @classmethod
    def validate_id(cls, v: str) -> str:
        """Ensure id is usable as a filename."""
        if not v or not v.strip():
            raise ValueError("Scenario id cannot be empty")
        if any(ch in v for ch in '/\\'):
            raise ValueError(f"Scenario id cannot contain path separators: {v!r}")
        return v.strip()

    @field_validator('input')
    @classmethod
    def validate_input(cls, v: str) -> str:
        if not v:
            raise ValueError("Scenario input cannot be empty")
        return v

    @property
    def title(self) -> str:
        return f"{self.id}: {self.name}"


class ScenarioResult(BaseModel):
    """Outcome of running one scenario through the harness."""

    model_config = ConfigDict(frozen=True)

    scenario: Scenario
    actual: str
    injected: str = Field(..., description="Input surface content read back after injection")
    input_selector: str
    input_kind: InputKind
    navigation_attempts: int = Field(..., ge=1)
    screenshot: Optional[Path] = None

    @property
    def matched(self) -> bool:
        return self.actual == self.scenario.expected

    @property
    def status_line(self) -> str:
        status = "✓ PASS" if self.matched else "✗ FAIL"
        intent = "Expected to PASS" if self.scenario.should_pass else "Expected to FAIL"
        return f"TC ID: {self.scenario.id} | Status: {status} | {intent}"
