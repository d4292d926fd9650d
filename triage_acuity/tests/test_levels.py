from __future__ import annotations

import pytest

from triage_acuity.core.levels import (
    Level,
    all_levels,
    count_high_acuity,
    count_low_acuity,
    from_score,
    level_counts,
    level_proportions,
    parse_level,
)
from triage_acuity.core.params import default_params


@pytest.mark.parametrize(
    "score, expected",
    [
        (1.0, Level.RESUSCITATION),
        (0.85, Level.RESUSCITATION),
        (0.8499, Level.EMERGENT),
        (0.60, Level.EMERGENT),
        (0.5999, Level.URGENT),
        (0.35, Level.URGENT),
        (0.3499, Level.LESS_URGENT),
        (0.15, Level.LESS_URGENT),
        (0.1499, Level.NON_URGENT),
        (0.0, Level.NON_URGENT),
    ],
)
def test_from_score_partition(score, expected):
    assert from_score(score, default_params()) is expected


def test_levels_never_become_less_urgent_as_score_rises():
    params = default_params()
    previous = Level.NON_URGENT
    for step in range(101):
        level = from_score(step / 100, params)
        assert level <= previous
        previous = level


def test_level_metadata():
    assert Level.EMERGENT.label == "Emergent"
    assert Level.NON_URGENT.short_code == "N"
    assert Level.URGENT.wait_time_minutes == 60
    assert Level.RESUSCITATION.wait_time_minutes == 0
    assert Level.RESUSCITATION.recommended_actions
    assert "15 minutes" in Level.EMERGENT.description


def test_acuity_groups():
    assert Level.RESUSCITATION.is_high_acuity and Level.EMERGENT.is_high_acuity
    assert not Level.URGENT.is_high_acuity and not Level.URGENT.is_low_acuity
    assert Level.LESS_URGENT.is_low_acuity and Level.NON_URGENT.is_low_acuity


def test_comparisons():
    assert Level.RESUSCITATION.more_acute_than(Level.URGENT)
    assert Level.NON_URGENT.less_acute_than(Level.LESS_URGENT)
    assert Level.EMERGENT.distance(Level.NON_URGENT) == 3


def test_from_int():
    assert Level.from_int(4) is Level.LESS_URGENT
    assert Level.from_int(0) is None
    assert Level.from_int(6) is None


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2", Level.EMERGENT),
        (3, Level.URGENT),
        (Level.EMERGENT, Level.EMERGENT),
        ("emergent", Level.EMERGENT),
        ("Less urgent", Level.LESS_URGENT),
        ("less-urgent", Level.LESS_URGENT),
        ("LESS_URGENT", Level.LESS_URGENT),
        ("  Non-Urgent ", Level.NON_URGENT),
        ("r", Level.RESUSCITATION),
        ("Résuscitation", Level.RESUSCITATION),
    ],
)
def test_parse(value, expected):
    assert Level.parse(value) is expected


@pytest.mark.parametrize("value", ["", "critical", "7", None, True, 2.0])
def test_parse_unknown(value):
    assert Level.parse(value) is None


def test_counts_and_proportions():
    levels = [1, 2, 2, 5, 0, 9]
    counts = level_counts(levels)
    assert counts[Level.EMERGENT] == 2
    assert sum(counts.values()) == 4
    proportions = level_proportions(levels)
    assert proportions[Level.EMERGENT] == pytest.approx(0.5)
    assert level_proportions([])[Level.URGENT] == 0.0
    assert count_high_acuity(levels) == 3
    assert count_low_acuity(levels) == 1
    assert all_levels() == [Level(n) for n in range(1, 6)]


def test_score_between_first_thresholds_is_emergent():
    assert from_score(0.72, default_params()) is Level.EMERGENT


def test_parse_level_function():
    assert parse_level("U") is Level.URGENT
    assert parse_level("nope") is None
