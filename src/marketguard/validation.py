"""Validation result types for marketguard.

``ValidationResult`` is the append-only error list that every checking
stage writes into. ``ValidationReport`` is its serialized form, written
to the ``--out`` file.
"""

from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, Field


class ValidationReport(BaseModel):
    """Structured outcome of one validation run."""

    ok: bool = Field(description="True when no errors were found")
    errors: list[str] = Field(
        default_factory=list,
        description="Error messages in discovery order",
    )

    def write(self, path: Path) -> None:
        """Write the report as pretty-printed JSON."""
        path.write_text(self.model_dump_json(indent=2), encoding="utf-8")


@dataclass
class ValidationResult:
    """Accumulated errors of a validation run.

    Attributes:
        errors: Error messages in the order they were discovered.
    """

    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True if no errors have been recorded."""
        return len(self.errors) == 0

    def add(self, message: str) -> None:
        """Record one error message."""
        self.errors.append(message)

    def extend(self, messages: list[str]) -> None:
        """Record several error messages, preserving their order."""
        self.errors.extend(messages)

    def to_report(self) -> ValidationReport:
        """Snapshot the current state as a ValidationReport."""
        return ValidationReport(ok=self.ok, errors=list(self.errors))
