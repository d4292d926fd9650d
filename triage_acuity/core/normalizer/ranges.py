"""Reference ranges and deviation helpers for vital signs.

A reference range is a ``(mid, half_width)`` pair. For an observed value the
normalised deviation is ``min(1, |value - mid| / half_width)``; a half-width
of zero or less switches that vital off.
"""

from __future__ import annotations

import math
from functools import lru_cache
from typing import Sequence, Tuple

from ...content import range_profile_entry
from ...schemas.common import StrictModel
from ...schemas.vitals import NUM_VITALS, VITAL_FIELDS, VitalName

__all__ = [
    "ReferenceRange",
    "ReferenceRanges",
    "adult_ranges",
    "clamp_to_range",
    "deviation",
    "in_range",
    "normalize_linear",
    "pediatric_ranges",
    "reference_ranges",
]


def deviation(value: float, mid: float, half_width: float) -> float:
    """Return ``min(1, |value - mid| / half_width)``, or 0 when *half_width* <= 0."""

    if half_width <= 0:
        return 0.0
    d = abs(value - mid) / half_width
    if d > 1:
        return 1.0
    return d


def normalize_linear(x: float, low: float, high: float) -> float:
    """Map *x* from ``[low, high]`` onto ``[0, 1]``, clamping outside values."""

    if low >= high:
        return 0.0
    if x <= low:
        return 0.0
    if x >= high:
        return 1.0
    return (x - low) / (high - low)


def clamp_to_range(x: float, low: float, high: float) -> float:
    if low > high:
        return low
    return max(low, min(high, x))


def in_range(x: float, low: float, high: float) -> bool:
    if low > high:
        return False
    return low <= x <= high


class ReferenceRange(StrictModel):
    mid: float
    half_width: float

    @property
    def enabled(self) -> bool:
        return self.half_width > 0

    def deviation(self, value: float) -> float:
        return deviation(value, self.mid, self.half_width)


class ReferenceRanges(StrictModel):
    """Seven reference ranges in the fixed vital order."""

    hr: ReferenceRange
    rr: ReferenceRange
    sbp: ReferenceRange
    dbp: ReferenceRange
    temp: ReferenceRange
    spo2: ReferenceRange
    gcs: ReferenceRange

    @classmethod
    def from_pairs(cls, pairs: Sequence[Sequence[float]]) -> "ReferenceRanges":
        """Build from seven ``(mid, half_width)`` pairs in positional order."""

        if len(pairs) != NUM_VITALS:
            raise ValueError(f"Expected {NUM_VITALS} reference ranges, got {len(pairs)}")
        return cls(
            **{
                name: ReferenceRange(mid=float(pair[0]), half_width=float(pair[1]))
                for name, pair in zip(VITAL_FIELDS, pairs)
            }
        )

    def get(self, name: VitalName) -> ReferenceRange:
        return getattr(self, name)

    def at(self, index: int) -> ReferenceRange:
        return getattr(self, VITAL_FIELDS[index])

    def pairs(self) -> Tuple[Tuple[float, float], ...]:
        return tuple((self.get(name).mid, self.get(name).half_width) for name in VITAL_FIELDS)

    def with_range(self, name: VitalName, mid: float, half_width: float) -> "ReferenceRanges":
        return self.model_copy(update={name: ReferenceRange(mid=mid, half_width=half_width)})

    def merged_with(self, other: "ReferenceRanges") -> "ReferenceRanges":
        """Return a copy taking every range of *other* whose half-width is positive."""

        updates = {name: other.get(name) for name in VITAL_FIELDS if other.get(name).enabled}
        return self.model_copy(update=updates)

    def scaled_half_widths(self, factor: float) -> "ReferenceRanges":
        if factor <= 0:
            return self
        return self.model_copy(
            update={
                name: ReferenceRange(mid=self.get(name).mid, half_width=self.get(name).half_width * factor)
                for name in VITAL_FIELDS
            }
        )

    def is_valid(self) -> bool:
        """True when every half-width is non-negative and every number finite."""

        for mid, half_width in self.pairs():
            if half_width < 0 or not math.isfinite(mid) or not math.isfinite(half_width):
                return False
        return True

    def weighted_deviation_sum(
        self, values: Sequence[float], weights: Sequence[float]
    ) -> Tuple[float, float]:
        """Return ``(sum w_i * d_i, sum w_i)`` over present, enabled, weighted vitals.

        *values* and *weights* are positional. Temperature is present when non-zero,
        every other vital when strictly positive.
        """

        total = 0.0
        weight_total = 0.0
        for index, name in enumerate(VITAL_FIELDS):
            weight = weights[index]
            if weight <= 0:
                continue
            value = values[index]
            if name == "temp":
                if value == 0:
                    continue
            elif value <= 0:
                continue
            ref = self.get(name)
            if not ref.enabled:
                continue
            total += weight * ref.deviation(value)
            weight_total += weight
        return total, weight_total


@lru_cache(maxsize=8)
def reference_ranges(profile: str = "adult") -> ReferenceRanges:
    """Return the bundled reference range *profile* (``adult`` or ``pediatric``)."""

    entry = range_profile_entry(profile)
    return ReferenceRanges.from_pairs([entry[name] for name in VITAL_FIELDS])


def adult_ranges() -> ReferenceRanges:
    return reference_ranges("adult")


def pediatric_ranges() -> ReferenceRanges:
    return reference_ranges("pediatric")
