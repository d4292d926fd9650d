"""Exceptions raised by the triage acuity package."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["BatchLengthError", "PresetNotFoundError", "TriageAcuityError"]


class TriageAcuityError(Exception):
    """Base class for library errors."""


@dataclass(eq=False)
class BatchLengthError(TriageAcuityError, ValueError):
    vitals: int
    resource_counts: int

    def __str__(self) -> str:
        return (
            f"Batch inputs differ in length: {self.vitals} vitals vs "
            f"{self.resource_counts} resource counts"
        )


@dataclass(eq=False)
class PresetNotFoundError(TriageAcuityError, KeyError):
    kind: str
    name: str

    def __str__(self) -> str:
        return f"Unknown {self.kind} '{self.name}'"
