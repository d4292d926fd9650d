"""Descriptive statistics over acuity scores, levels and evaluations.

Every helper returns zeros for empty input instead of raising.
"""

from __future__ import annotations

import math
import statistics
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Sequence, Tuple

from ..core.engine import Evaluation
from ..core.levels import Level, level_counts

__all__ = [
    "AcuitySummary",
    "LevelStats",
    "ScoreStats",
    "ci95",
    "count_by_level",
    "count_where",
    "exact_agreement",
    "filter_by_level",
    "filter_high_acuity",
    "filter_low_acuity",
    "mae",
    "mean",
    "median",
    "pearson",
    "percentile",
    "rmse",
    "standard_error",
    "stdev",
    "summarize_evaluations",
    "variance",
    "within_level",
    "within_tolerance",
]

_Z_95 = 1.96


def mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return math.fsum(values) / len(values)


def variance(values: Sequence[float]) -> float:
    """Sample variance (n - 1 divisor); 0 for fewer than two values."""

    if len(values) < 2:
        return 0.0
    return statistics.variance(values)


def stdev(values: Sequence[float]) -> float:
    return math.sqrt(variance(values))


def standard_error(values: Sequence[float]) -> float:
    if len(values) < 2:
        return 0.0
    return stdev(values) / math.sqrt(len(values))


def ci95(values: Sequence[float]) -> Tuple[float, float]:
    """Normal-approximation 95% interval for the mean; ``(0, 0)`` for n < 2."""

    if len(values) < 2:
        return 0.0, 0.0
    mu, se = mean(values), standard_error(values)
    return mu - _Z_95 * se, mu + _Z_95 * se


def median(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return float(statistics.median(values))


def percentile(values: Sequence[float], p: float) -> float:
    """*p*-th percentile (0..100) with linear interpolation between order statistics."""

    if not values or p < 0 or p > 100:
        return 0.0
    ordered = sorted(values)
    k = p / 100 * (len(ordered) - 1)
    lower = int(k)
    if lower >= len(ordered) - 1:
        return float(ordered[-1])
    frac = k - lower
    return ordered[lower] * (1 - frac) + ordered[lower + 1] * frac


def count_where(values: Iterable, predicate: Callable[[object], bool]) -> int:
    return sum(1 for value in values if predicate(value))


def pearson(x: Sequence[float], y: Sequence[float]) -> float:
    if len(x) != len(y) or len(x) < 2:
        return 0.0
    mx, my = mean(x), mean(y)
    sxy = sum((a - mx) * (b - my) for a, b in zip(x, y))
    sxx = sum((a - mx) ** 2 for a in x)
    syy = sum((b - my) ** 2 for b in y)
    if sxx == 0 or syy == 0:
        return 0.0
    return sxy / (math.sqrt(sxx) * math.sqrt(syy))


def rmse(predicted: Sequence[float], reference: Sequence[float]) -> float:
    if len(predicted) != len(reference) or not predicted:
        return 0.0
    return math.sqrt(sum((p - r) ** 2 for p, r in zip(predicted, reference)) / len(predicted))


def mae(predicted: Sequence[float], reference: Sequence[float]) -> float:
    if len(predicted) != len(reference) or not predicted:
        return 0.0
    return sum(abs(p - r) for p, r in zip(predicted, reference)) / len(predicted)


def within_tolerance(predicted: Sequence[float], reference: Sequence[float], tolerance: float) -> float:
    if len(predicted) != len(reference) or not predicted:
        return 0.0
    hits = sum(1 for p, r in zip(predicted, reference) if abs(p - r) <= tolerance)
    return hits / len(predicted)


def exact_agreement(predicted: Sequence[int], reference: Sequence[int]) -> float:
    if len(predicted) != len(reference) or not predicted:
        return 0.0
    return sum(1 for p, r in zip(predicted, reference) if p == r) / len(predicted)


def within_level(predicted: Sequence[int], reference: Sequence[int]) -> float:
    """Share of pairs at most one level apart."""

    return within_tolerance(predicted, reference, 1)


@dataclass(frozen=True)
class ScoreStats:
    n: int = 0
    mean: float = 0.0
    stdev: float = 0.0
    se: float = 0.0
    ci95_low: float = 0.0
    ci95_high: float = 0.0
    min: float = 0.0
    max: float = 0.0
    p25: float = 0.0
    p50: float = 0.0
    p75: float = 0.0

    @classmethod
    def compute(cls, scores: Sequence[float]) -> "ScoreStats":
        if not scores:
            return cls()
        low, high = ci95(scores)
        return cls(
            n=len(scores),
            mean=mean(scores),
            stdev=stdev(scores),
            se=standard_error(scores),
            ci95_low=low,
            ci95_high=high,
            min=float(min(scores)),
            max=float(max(scores)),
            p25=percentile(scores, 25),
            p50=percentile(scores, 50),
            p75=percentile(scores, 75),
        )


@dataclass(frozen=True)
class LevelStats:
    counts: Dict[Level, int] = field(default_factory=dict)
    total: int = 0
    proportions: Dict[Level, float] = field(default_factory=dict)

    @classmethod
    def compute(cls, levels: Iterable[int]) -> "LevelStats":
        counts = level_counts(levels)
        total = sum(counts.values())
        proportions = {
            level: (count / total if total else 0.0) for level, count in counts.items()
        }
        return cls(counts=counts, total=total, proportions=proportions)


# Aggregates over engine evaluations


def count_by_level(results: Iterable[Evaluation], level: Level) -> int:
    return sum(1 for result in results if result.level == level)


def filter_by_level(results: Iterable[Evaluation], level: Level) -> List[Evaluation]:
    return [result for result in results if result.level == level]


def filter_high_acuity(results: Iterable[Evaluation]) -> List[Evaluation]:
    return [result for result in results if result.level.is_high_acuity]


def filter_low_acuity(results: Iterable[Evaluation]) -> List[Evaluation]:
    return [result for result in results if result.level.is_low_acuity]


@dataclass(frozen=True)
class AcuitySummary:
    n: int = 0
    min: float = 0.0
    max: float = 0.0
    mean: float = 0.0
    level_counts: Dict[Level, int] = field(default_factory=dict)


def summarize_evaluations(results: Sequence[Evaluation]) -> AcuitySummary:
    if not results:
        return AcuitySummary(level_counts=level_counts([]))
    scores = [result.acuity for result in results]
    return AcuitySummary(
        n=len(results),
        min=min(scores),
        max=max(scores),
        mean=mean(scores),
        level_counts=level_counts(result.level for result in results),
    )
