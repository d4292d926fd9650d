"""Vital-sign observation schema."""

from __future__ import annotations

from typing import Literal, Tuple

from .common import StrictModel

VitalName = Literal["hr", "rr", "sbp", "dbp", "temp", "spo2", "gcs"]

# Positional order shared by weight vectors, reference ranges and exports.
VITAL_FIELDS: Tuple[VitalName, ...] = ("hr", "rr", "sbp", "dbp", "temp", "spo2", "gcs")
NUM_VITALS = len(VITAL_FIELDS)

__all__ = ["NUM_VITALS", "VITAL_FIELDS", "VitalName", "Vitals", "vital_index"]


def vital_index(name: str) -> int:
    """Return the positional index of vital *name* (``hr`` is 0, ``gcs`` is 6)."""

    try:
        return VITAL_FIELDS.index(name)  # type: ignore[arg-type]
    except ValueError:
        raise KeyError(f"Unknown vital '{name}'") from None


class Vitals(StrictModel):
    """One observation. Zero means "not measured" for every field."""

    hr: int = 0
    rr: int = 0
    sbp: int = 0
    dbp: int = 0
    temp: float = 0.0
    spo2: int = 0
    gcs: int = 0

    def is_present(self, name: VitalName) -> bool:
        value = getattr(self, name)
        # Temperature uses != 0, integer vitals use > 0.
        if name == "temp":
            return value != 0.0
        return value > 0

    def present_fields(self) -> Tuple[VitalName, ...]:
        return tuple(name for name in VITAL_FIELDS if self.is_present(name))

    def present_count(self) -> int:
        return len(self.present_fields())

    def any_present(self) -> bool:
        return any(self.is_present(name) for name in VITAL_FIELDS)

    def values(self) -> Tuple[float, ...]:
        """Return the seven raw values as floats in positional order."""

        return tuple(float(getattr(self, name)) for name in VITAL_FIELDS)
