"""Parameter sets governing acuity scoring and level assignment.

A :class:`ParameterSet` is never validated on construction. Builder methods
return new instances without validation so that calibration code can pass
through provisionally invalid states; call :meth:`ParameterSet.is_valid`
before handing a set to an engine.
"""

from __future__ import annotations

import math
from functools import lru_cache
from typing import Sequence, Tuple

from ..content import preset_entry
from ..schemas.common import StrictModel
from ..schemas.vitals import NUM_VITALS, VITAL_FIELDS, VitalName
from .validator import params_valid

__all__ = [
    "PRESET_NAMES",
    "ParameterSet",
    "VitalWeights",
    "default_params",
    "lenient_params",
    "preset",
    "research_params",
    "strict_params",
]

PRESET_NAMES = ("default", "strict", "lenient", "research")


class VitalWeights(StrictModel):
    hr: float
    rr: float
    sbp: float
    dbp: float
    temp: float
    spo2: float
    gcs: float

    @classmethod
    def from_sequence(cls, weights: Sequence[float]) -> "VitalWeights":
        if len(weights) != NUM_VITALS:
            raise ValueError(f"Expected {NUM_VITALS} weights, got {len(weights)}")
        return cls(**{name: float(w) for name, w in zip(VITAL_FIELDS, weights)})

    @classmethod
    def uniform(cls, value: float = 1.0 / NUM_VITALS) -> "VitalWeights":
        return cls.from_sequence([value] * NUM_VITALS)

    def get(self, name: VitalName) -> float:
        return getattr(self, name)

    def as_tuple(self) -> Tuple[float, ...]:
        return tuple(getattr(self, name) for name in VITAL_FIELDS)

    def total(self) -> float:
        return sum(self.as_tuple())


class ParameterSet(StrictModel):
    """Weights, resource parameters and the thresholds ``t1 > t2 > t3 > t4``."""

    weights: VitalWeights
    max_resources: int
    resource_weight: float
    t1: float
    t2: float
    t3: float
    t4: float

    @property
    def weight_vector(self) -> Tuple[float, ...]:
        return self.weights.as_tuple()

    def is_valid(self) -> bool:
        """Check weights in [0, 1], non-negative resource terms and ordered thresholds."""

        return params_valid(self)

    def weight_sum(self) -> float:
        return self.weights.total()

    def divisor(self) -> float:
        """Normalisation denominator shared by every score computed with this set."""

        return self.weight_sum() + self.resource_weight

    def thresholds(self) -> Tuple[float, float, float, float]:
        return (self.t1, self.t2, self.t3, self.t4)

    def threshold_band(self, level: int) -> Tuple[float, float]:
        """Return ``(low, high)`` score bounds for *level*; ``(0, 0)`` when unknown."""

        bands = {
            1: (self.t1, 1.0),
            2: (self.t2, self.t1),
            3: (self.t3, self.t2),
            4: (self.t4, self.t3),
            5: (0.0, self.t4),
        }
        return bands.get(int(level), (0.0, 0.0))

    def continuous_level(self, score: float) -> float:
        """Piecewise-linear level in [1, 5] for display; use ``from_score`` for the real level."""

        t1, t2, t3, t4 = self.thresholds()
        if score >= t1:
            if t1 >= 1:
                return 1.0
            return 1.0 + (1.0 - score) / (1.0 - t1) * 0.5
        if score >= t2:
            return 1.5 + (t1 - score) / (t1 - t2) * 0.5
        if score >= t3:
            return 2.0 + (t2 - score) / (t2 - t3) * 0.5
        if score >= t4:
            return 2.5 + (t3 - score) / (t3 - t4) * 0.5
        if t4 <= 0:
            return 5.0
        return 3.0 + (t4 - score) / t4 * 2.0

    def is_stricter_than(self, other: "ParameterSet") -> bool:
        """True when every threshold is lower than *other*'s, so more scores land in high levels."""

        return all(mine < theirs for mine, theirs in zip(self.thresholds(), other.thresholds()))

    # Builder operations. None of these validate.

    def with_thresholds(self, t1: float, t2: float, t3: float, t4: float) -> "ParameterSet":
        return self.model_copy(update={"t1": t1, "t2": t2, "t3": t3, "t4": t4})

    def with_threshold_list(self, thresholds: Sequence[float]) -> "ParameterSet":
        if len(thresholds) != 4:
            return self
        return self.with_thresholds(*thresholds)

    def with_weight(self, name: VitalName, weight: float) -> "ParameterSet":
        if name not in VITAL_FIELDS:
            return self
        weights = self.weights.model_copy(update={name: weight})
        return self.model_copy(update={"weights": weights})

    def with_weights(self, weights: Sequence[float]) -> "ParameterSet":
        return self.model_copy(update={"weights": VitalWeights.from_sequence(weights)})

    def with_weights_from(self, other: "ParameterSet") -> "ParameterSet":
        return self.model_copy(update={"weights": other.weights})

    def with_resources(self, max_resources: int, resource_weight: float) -> "ParameterSet":
        return self.model_copy(update={"max_resources": max_resources, "resource_weight": resource_weight})

    def scaled_weights(self, factor: float) -> "ParameterSet":
        """Multiply every weight by *factor*, then rescale so the largest weight is 1."""

        if factor <= 0:
            return self
        scaled = [w * factor for w in self.weight_vector]
        peak = max(scaled)
        if peak > 0:
            scaled = [w / peak for w in scaled]
        return self.with_weights(scaled)

    def normalized_weights(self) -> "ParameterSet":
        total = self.weight_sum()
        if total <= 0:
            return self
        return self.with_weights([w / total for w in self.weight_vector])

    def uniform_weights(self) -> "ParameterSet":
        return self.model_copy(update={"weights": VitalWeights.uniform()})

    def geometric_thresholds(self, low: float, high: float) -> "ParameterSet":
        """Space T4..T1 evenly in log-space strictly between *low* and *high*."""

        if low <= 0 or high <= low or high > 1:
            return self
        log_low = math.log(low)
        step = (math.log(high) - log_low) / 5
        t4, t3, t2, t1 = (math.exp(log_low + k * step) for k in range(1, 5))
        return self.with_thresholds(min(t1, 1.0), t2, t3, t4)


@lru_cache(maxsize=len(PRESET_NAMES))
def preset(name: str = "default") -> ParameterSet:
    """Return the named preset (``default``, ``strict``, ``lenient`` or ``research``)."""

    entry = preset_entry(name)
    t1, t2, t3, t4 = entry["thresholds"]
    return ParameterSet(
        weights=VitalWeights(**entry["weights"]),
        max_resources=entry["max_resources"],
        resource_weight=entry["resource_weight"],
        t1=t1,
        t2=t2,
        t3=t3,
        t4=t4,
    )


def default_params() -> ParameterSet:
    return preset("default")


def strict_params() -> ParameterSet:
    return preset("strict")


def lenient_params() -> ParameterSet:
    return preset("lenient")


def research_params() -> ParameterSet:
    return preset("research")
