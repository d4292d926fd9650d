"""Scoring engine bound to one immutable parameter set."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from ..errors import BatchLengthError
from ..schemas.common import StrictModel
from ..schemas.vitals import Vitals
from .levels import Level, from_score
from .normalizer.ranges import ReferenceRanges, reference_ranges
from .params import ParameterSet, preset
from .scoring import acuity
from .validator import clamp_resource_count

__all__ = ["Evaluation", "ScoringEngine"]

logger = logging.getLogger(__name__)


class Evaluation(StrictModel):
    acuity: float
    level: Level


class ScoringEngine:
    """Evaluate acuity and level for vitals plus an expected resource count.

    The engine holds a frozen :class:`ParameterSet` and reference ranges and
    keeps no other state, so one instance can be shared across threads.

    ======================== =============================================
    Method                   Returns
    ======================== =============================================
    ``acuity``               score in [0, 1]
    ``level``                :class:`Level`
    ``score_and_level``      ``(score, level)``
    ``evaluate``             :class:`Evaluation`
    ``acuity_with_ranges``   score using per-call reference ranges
    ``batch_*``              index-aligned lists; unequal inputs raise
                             :class:`BatchLengthError`
    ======================== =============================================
    """

    def __init__(self, params: ParameterSet, ranges: Optional[ReferenceRanges] = None) -> None:
        self._params = params
        self._ranges = ranges if ranges is not None else reference_ranges("adult")
        if not params.is_valid():
            logger.warning(
                "Scoring engine built with an invalid parameter set (thresholds=%s); "
                "scores will not be clinically meaningful",
                params.thresholds(),
            )
        logger.debug("Scoring engine ready with thresholds=%s", params.thresholds())

    @classmethod
    def from_preset(cls, name: str = "default", ranges_profile: str = "adult") -> "ScoringEngine":
        return cls(preset(name), reference_ranges(ranges_profile))

    @classmethod
    def default(cls) -> "ScoringEngine":
        return cls.from_preset("default")

    @classmethod
    def strict(cls) -> "ScoringEngine":
        return cls.from_preset("strict")

    @classmethod
    def lenient(cls) -> "ScoringEngine":
        return cls.from_preset("lenient")

    @classmethod
    def research(cls) -> "ScoringEngine":
        return cls.from_preset("research")

    @classmethod
    def from_settings(cls, settings=None) -> "ScoringEngine":
        if settings is None:
            from ..config import get_settings

            settings = get_settings()
        return cls.from_preset(settings.preset, settings.reference_ranges)

    @property
    def params(self) -> ParameterSet:
        return self._params

    @property
    def ranges(self) -> ReferenceRanges:
        return self._ranges

    def with_params(self, params: ParameterSet) -> "ScoringEngine":
        """Return a new engine with *params* and the same ranges."""

        return ScoringEngine(params, self._ranges)

    # Single evaluation

    def acuity(self, vitals: Vitals, resource_count: int) -> float:
        return acuity(vitals, resource_count, self._params, self._ranges)

    def level(self, vitals: Vitals, resource_count: int) -> Level:
        return from_score(self.acuity(vitals, resource_count), self._params)

    def score_and_level(self, vitals: Vitals, resource_count: int) -> Tuple[float, Level]:
        score = self.acuity(vitals, resource_count)
        return score, from_score(score, self._params)

    def evaluate(self, vitals: Vitals, resource_count: int) -> Evaluation:
        score, level = self.score_and_level(vitals, resource_count)
        return Evaluation(acuity=score, level=level)

    def acuity_with_ranges(self, vitals: Vitals, resource_count: int, ranges: ReferenceRanges) -> float:
        """Score with *ranges* in place of the engine's own reference ranges."""

        return acuity(vitals, resource_count, self._params, ranges)

    def score_and_level_with_ranges(
        self, vitals: Vitals, resource_count: int, ranges: ReferenceRanges
    ) -> Tuple[float, Level]:
        score = self.acuity_with_ranges(vitals, resource_count, ranges)
        return score, from_score(score, self._params)

    def score_and_level_clamped(self, vitals: Vitals, resource_count: int) -> Tuple[float, Level]:
        """Clamp *resource_count* to ``[0, max_resources]`` before scoring."""

        count = clamp_resource_count(resource_count, self._params.max_resources)
        return self.score_and_level(vitals, count)

    # Batch evaluation

    def _check_lengths(self, vitals: Sequence[Vitals], resource_counts: Sequence[int]) -> None:
        if len(vitals) != len(resource_counts):
            logger.warning(
                "Rejecting batch: %d vitals vs %d resource counts", len(vitals), len(resource_counts)
            )
            raise BatchLengthError(len(vitals), len(resource_counts))

    def batch_acuity(self, vitals: Sequence[Vitals], resource_counts: Sequence[int]) -> List[float]:
        self._check_lengths(vitals, resource_counts)
        return [self.acuity(v, count) for v, count in zip(vitals, resource_counts)]

    def batch_level(self, vitals: Sequence[Vitals], resource_counts: Sequence[int]) -> List[Level]:
        self._check_lengths(vitals, resource_counts)
        return [self.level(v, count) for v, count in zip(vitals, resource_counts)]

    def batch_score_and_level(
        self, vitals: Sequence[Vitals], resource_counts: Sequence[int]
    ) -> Tuple[List[float], List[Level]]:
        self._check_lengths(vitals, resource_counts)
        scores: List[float] = []
        levels: List[Level] = []
        for v, count in zip(vitals, resource_counts):
            score, level = self.score_and_level(v, count)
            scores.append(score)
            levels.append(level)
        return scores, levels

    def batch_evaluate(self, vitals: Sequence[Vitals], resource_counts: Sequence[int]) -> List[Evaluation]:
        self._check_lengths(vitals, resource_counts)
        return [self.evaluate(v, count) for v, count in zip(vitals, resource_counts)]
