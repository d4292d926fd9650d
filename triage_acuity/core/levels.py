"""Five-level triage classification.

Scores map onto levels by sequential threshold comparison, most urgent first:

    s >= T1        -> 1 Resuscitation
    T2 <= s < T1   -> 2 Emergent
    T3 <= s < T2   -> 3 Urgent
    T4 <= s < T3   -> 4 Less urgent
    s < T4         -> 5 Non-urgent

A score equal to a threshold falls on the more urgent side.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Dict, Iterable, List, Optional, Tuple

from .normalizer.text import normalize_label
from .validator import ParamsLike

__all__ = [
    "Level",
    "all_levels",
    "count_high_acuity",
    "count_low_acuity",
    "from_score",
    "level_counts",
    "level_proportions",
    "parse_level",
]


class Level(IntEnum):
    RESUSCITATION = 1
    EMERGENT = 2
    URGENT = 3
    LESS_URGENT = 4
    NON_URGENT = 5

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def short_code(self) -> str:
        return _SHORT_CODES[self]

    @property
    def wait_time_minutes(self) -> int:
        """Suggested maximum wait; guidance only."""

        return _WAIT_MINUTES[self]

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @property
    def recommended_actions(self) -> Tuple[str, ...]:
        return _ACTIONS[self]

    @property
    def is_high_acuity(self) -> bool:
        return self <= Level.EMERGENT

    @property
    def is_low_acuity(self) -> bool:
        return self >= Level.LESS_URGENT

    def more_acute_than(self, other: "Level") -> bool:
        return int(self) < int(other)

    def less_acute_than(self, other: "Level") -> bool:
        return int(self) > int(other)

    def distance(self, other: "Level") -> int:
        return abs(int(self) - int(other))

    @classmethod
    def from_int(cls, value: int) -> Optional["Level"]:
        try:
            return cls(value)
        except ValueError:
            return None

    @classmethod
    def parse(cls, value: object) -> Optional["Level"]:
        """Parse a digit, label or short code (case and accent insensitive)."""

        return _PARSE_TABLE.get(normalize_label(value))


_LABELS: Dict[Level, str] = {
    Level.RESUSCITATION: "Resuscitation",
    Level.EMERGENT: "Emergent",
    Level.URGENT: "Urgent",
    Level.LESS_URGENT: "Less urgent",
    Level.NON_URGENT: "Non-urgent",
}

_SHORT_CODES: Dict[Level, str] = {
    Level.RESUSCITATION: "R",
    Level.EMERGENT: "E",
    Level.URGENT: "U",
    Level.LESS_URGENT: "L",
    Level.NON_URGENT: "N",
}

_WAIT_MINUTES: Dict[Level, int] = {
    Level.RESUSCITATION: 0,
    Level.EMERGENT: 15,
    Level.URGENT: 60,
    Level.LESS_URGENT: 120,
    Level.NON_URGENT: 240,
}

_DESCRIPTIONS: Dict[Level, str] = {
    Level.RESUSCITATION: "Requires immediate life-saving intervention; do not delay.",
    Level.EMERGENT: "High risk; should be seen within 15 minutes.",
    Level.URGENT: "Urgent but stable; target within 60 minutes.",
    Level.LESS_URGENT: "Less urgent; target within 120 minutes.",
    Level.NON_URGENT: "Non-urgent; target within 240 minutes.",
}

_ACTIONS: Dict[Level, Tuple[str, ...]] = {
    Level.RESUSCITATION: (
        "Immediate assessment",
        "Life-saving interventions as indicated",
        "Continuous monitoring",
    ),
    Level.EMERGENT: ("Rapid assessment", "Stabilisation", "Re-evaluate within 15 min"),
    Level.URGENT: ("Assessment within 60 min", "Routine monitoring", "Re-evaluate as needed"),
    Level.LESS_URGENT: (
        "Assessment within 120 min",
        "Routine care",
        "Re-evaluate if condition changes",
    ),
    Level.NON_URGENT: (
        "Assessment within 240 min",
        "Routine care",
        "May use fast-track if available",
    ),
}

_PARSE_TABLE: Dict[str, Level] = {}
for _level in Level:
    for _key in (str(int(_level)), _LABELS[_level], _SHORT_CODES[_level], _level.name):
        _PARSE_TABLE[normalize_label(_key)] = _level
del _level, _key


def from_score(score: float, params: ParamsLike) -> Level:
    """Map a normalised score onto a level using *params*' thresholds."""

    if score >= params.t1:
        return Level.RESUSCITATION
    if score >= params.t2:
        return Level.EMERGENT
    if score >= params.t3:
        return Level.URGENT
    if score >= params.t4:
        return Level.LESS_URGENT
    return Level.NON_URGENT


def parse_level(value: object) -> Optional[Level]:
    return Level.parse(value)


def level_counts(levels: Iterable[int]) -> Dict[Level, int]:
    """Count occurrences of each level; values outside 1..5 are skipped."""

    counts = {level: 0 for level in Level}
    for value in levels:
        level = Level.from_int(value)
        if level is not None:
            counts[level] += 1
    return counts


def level_proportions(levels: Iterable[int]) -> Dict[Level, float]:
    counts = level_counts(levels)
    total = sum(counts.values())
    if total == 0:
        return {level: 0.0 for level in Level}
    return {level: count / total for level, count in counts.items()}


def count_high_acuity(levels: Iterable[int]) -> int:
    return sum(1 for value in levels if value in (1, 2))


def count_low_acuity(levels: Iterable[int]) -> int:
    return sum(1 for value in levels if value in (4, 5))


def all_levels() -> List[Level]:
    return list(Level)
