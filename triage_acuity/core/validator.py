"""Validation and sanitisation of scoring inputs.

The scoring engine never calls these helpers itself; integrators use them
upstream when strict input hygiene is required.
"""

from __future__ import annotations

import math
from typing import Dict, Literal, Protocol, Sequence, Tuple

from ..schemas.common import StrictModel
from ..schemas.vitals import VITAL_FIELDS, Vitals, VitalName

VitalStatus = Literal["ok", "clamped", "invalid", "missing"]

__all__ = [
    "CRITICAL_BOUNDS",
    "ParamsLike",
    "ParamsReport",
    "VitalStatus",
    "VitalsReport",
    "clamp_resource_count",
    "clamp_vitals",
    "params_valid",
    "sanitize_vitals",
    "validate_params",
    "validate_vitals",
    "vitals_and_resources_valid",
    "vitals_valid",
    "within_critical_bounds",
]

# Absolute physiological bounds; zero stays the "missing" sentinel.
CRITICAL_BOUNDS: Dict[VitalName, Tuple[float, float]] = {
    "hr": (20, 300),
    "rr": (0, 60),
    "sbp": (40, 300),
    "dbp": (20, 200),
    "temp": (30.0, 45.0),
    "spo2": (0, 100),
    "gcs": (3, 15),
}


class VitalsReport(StrictModel):
    valid: bool
    hr: VitalStatus
    rr: VitalStatus
    sbp: VitalStatus
    dbp: VitalStatus
    temp: VitalStatus
    spo2: VitalStatus
    gcs: VitalStatus
    clamped: Vitals

    def status(self, name: VitalName) -> VitalStatus:
        return getattr(self, name)

    def fields_with_status(self, status: VitalStatus) -> Tuple[VitalName, ...]:
        return tuple(name for name in VITAL_FIELDS if self.status(name) == status)


def within_critical_bounds(name: VitalName, value: float) -> bool:
    low, high = CRITICAL_BOUNDS[name]
    return low <= value <= high


def _clamp(name: VitalName, value):
    if value == 0:
        return value
    low, high = CRITICAL_BOUNDS[name]
    if name != "temp":
        low, high = int(low), int(high)
    if value < low:
        return low
    if value > high:
        return high
    return value


def clamp_vitals(vitals: Vitals) -> Vitals:
    """Return a copy with every present value forced into its critical bounds."""

    return Vitals(**{name: _clamp(name, getattr(vitals, name)) for name in VITAL_FIELDS})


def validate_vitals(vitals: Vitals, *, clamp: bool = False) -> VitalsReport:
    """Classify each vital as ok, missing or out of range.

    Out-of-range values are reported as ``invalid``, or as ``clamped`` when
    *clamp* is true. ``valid`` is false whenever any raw value is out of range.
    The report always carries the clamped copy of *vitals*.
    """

    statuses: Dict[str, VitalStatus] = {}
    valid = True
    for name in VITAL_FIELDS:
        value = getattr(vitals, name)
        if value == 0:
            statuses[name] = "missing"
        elif within_critical_bounds(name, value):
            statuses[name] = "ok"
        else:
            statuses[name] = "clamped" if clamp else "invalid"
            valid = False
    return VitalsReport(valid=valid, clamped=clamp_vitals(vitals), **statuses)


def vitals_valid(vitals: Vitals) -> bool:
    return validate_vitals(vitals).valid


def sanitize_vitals(vitals: Vitals) -> Tuple[Vitals, bool]:
    """Return ``(vitals, False)`` when already valid, else the clamped copy and True."""

    report = validate_vitals(vitals, clamp=True)
    if report.valid:
        return vitals, False
    return report.clamped, True


def clamp_resource_count(count: int, max_resources: int) -> int:
    """Clamp *count* to ``[0, max_resources]``; 0 when *max_resources* <= 0."""

    if max_resources <= 0:
        return 0
    if count < 0:
        return 0
    if count > max_resources:
        return max_resources
    return count


def vitals_and_resources_valid(vitals: Vitals, resource_count: int, max_resources: int) -> bool:
    if not vitals_valid(vitals):
        return False
    if max_resources <= 0:
        return resource_count == 0
    return 0 <= resource_count <= max_resources


class ParamsLike(Protocol):
    """Structural description of a parameter set."""

    @property
    def weight_vector(self) -> Sequence[float]: ...

    @property
    def max_resources(self) -> int: ...

    @property
    def resource_weight(self) -> float: ...

    @property
    def t1(self) -> float: ...

    @property
    def t2(self) -> float: ...

    @property
    def t3(self) -> float: ...

    @property
    def t4(self) -> float: ...


class ParamsReport(StrictModel):
    valid: bool
    weights_ok: bool
    thresholds_ok: bool
    max_resources_ok: bool
    resource_weight_ok: bool


def validate_params(params: ParamsLike) -> ParamsReport:
    weights_ok = all(math.isfinite(w) and 0 <= w <= 1 for w in params.weight_vector)
    max_resources_ok = params.max_resources >= 0
    resource_weight_ok = math.isfinite(params.resource_weight) and params.resource_weight >= 0
    t1, t2, t3, t4 = params.t1, params.t2, params.t3, params.t4
    thresholds_ok = t1 > t2 > t3 > t4 > 0 and t1 <= 1
    return ParamsReport(
        valid=weights_ok and max_resources_ok and resource_weight_ok and thresholds_ok,
        weights_ok=weights_ok,
        thresholds_ok=thresholds_ok,
        max_resources_ok=max_resources_ok,
        resource_weight_ok=resource_weight_ok,
    )


def params_valid(params: ParamsLike) -> bool:
    return validate_params(params).valid
