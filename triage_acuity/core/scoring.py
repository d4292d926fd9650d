"""Parametric acuity formula.

For every vital that is present and has a positive reference half-width::

    d_i = min(1, |x_i - mid_i| / half_width_i)
    V   = sum(w_i * d_i) / sum(w_i)          (over those vitals only)
    R   = resource_weight * min(1, resource_count / max_resources)
    s   = (V + R) / (sum of all seven weights + resource_weight)

``V`` is normalised by the weights of the vitals actually observed, while the
final score is normalised by the full divisor of the parameter set. A patient
with few observed vitals therefore cannot reach an extreme score unless those
vitals carry most of the weight. Every step has a guard so that any finite
input yields a finite score in [0, 1].
"""

from __future__ import annotations

import math
from typing import Optional, Sequence

from ..schemas.vitals import Vitals
from .normalizer.ranges import ReferenceRanges, adult_ranges
from .params import ParameterSet

__all__ = [
    "acuity",
    "acuity_raw",
    "normalize_score",
    "resource_component",
    "vital_component",
]


def vital_component(
    vitals: Vitals,
    weights: Sequence[float],
    ranges: Optional[ReferenceRanges] = None,
) -> float:
    """Weighted mean deviation over present vitals, in [0, 1].

    Returns 0 when no weighted vital is present.
    """

    if ranges is None:
        ranges = adult_ranges()
    total, weight_total = ranges.weighted_deviation_sum(vitals.values(), weights)
    if weight_total <= 0:
        return 0.0
    component = total / weight_total
    if component > 1:
        return 1.0
    return component


def resource_component(resource_count: int, max_resources: int, weight: float) -> float:
    """Saturating resource term ``weight * min(1, count / max)``."""

    if max_resources <= 0 or weight <= 0 or resource_count <= 0:
        return 0.0
    ratio = resource_count / max_resources
    if ratio > 1:
        ratio = 1.0
    return weight * ratio


def acuity_raw(vital: float, resource: float) -> float:
    return vital + resource


def normalize_score(raw: float, divisor: float) -> float:
    """Divide *raw* by *divisor* and clamp to [0, 1]; 0 for a non-positive divisor."""

    if divisor <= 0:
        return 0.0
    score = raw / divisor
    if math.isnan(score):
        return 0.0
    if score > 1:
        return 1.0
    if score < 0:
        return 0.0
    return score


def acuity(
    vitals: Vitals,
    resource_count: int,
    params: ParameterSet,
    ranges: Optional[ReferenceRanges] = None,
) -> float:
    """Normalised acuity score in [0, 1] for one observation."""

    vital = vital_component(vitals, params.weight_vector, ranges)
    resource = resource_component(resource_count, params.max_resources, params.resource_weight)
    return normalize_score(acuity_raw(vital, resource), params.divisor())
