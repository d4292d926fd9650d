from __future__ import annotations

import math

import pytest

from triage_acuity.core.normalizer.ranges import (
    ReferenceRanges,
    adult_ranges,
    clamp_to_range,
    deviation,
    in_range,
    normalize_linear,
    pediatric_ranges,
    reference_ranges,
)
from triage_acuity.errors import PresetNotFoundError


def test_deviation_zero_at_midpoint():
    assert deviation(80, 80, 40) == 0.0


@pytest.mark.parametrize("value", [40, 120])
def test_deviation_is_one_at_band_edge(value):
    assert deviation(value, 80, 40) == 1.0


def test_deviation_caps_beyond_band():
    assert deviation(400, 80, 40) == 1.0


@pytest.mark.parametrize("k", [0.5, 7, 25, 90])
def test_deviation_is_symmetric(k):
    assert deviation(80 - k, 80, 40) == deviation(80 + k, 80, 40)


@pytest.mark.parametrize("half_width", [0, -3])
def test_non_positive_half_width_disables(half_width):
    assert deviation(150, 80, half_width) == 0.0


def test_adult_profile_matches_bundled_data():
    ranges = adult_ranges()
    assert ranges.hr.mid == 80 and ranges.hr.half_width == 40
    assert ranges.temp.mid == 37.0 and ranges.temp.half_width == 2.0
    assert ranges.at(6) == ranges.gcs
    assert ranges.is_valid()


def test_pediatric_profile_differs_from_adult():
    assert pediatric_ranges().hr.mid == 100
    assert pediatric_ranges() != adult_ranges()


def test_unknown_profile():
    with pytest.raises(PresetNotFoundError):
        reference_ranges("neonatal")


def test_with_range_returns_new_value():
    ranges = adult_ranges()
    changed = ranges.with_range("hr", 90, 30)
    assert changed.hr.mid == 90
    assert ranges.hr.mid == 80


def test_merge_takes_only_enabled_ranges():
    overrides = ReferenceRanges.from_pairs([(0, 0), (0, 0), (0, 0), (0, 0), (38.0, 1.5), (0, 0), (0, 0)])
    merged = adult_ranges().merged_with(overrides)
    assert merged.temp.mid == 38.0
    assert merged.hr == adult_ranges().hr


def test_scaled_half_widths():
    scaled = adult_ranges().scaled_half_widths(2)
    assert scaled.rr.half_width == 20
    assert adult_ranges().scaled_half_widths(0) is adult_ranges()


def test_invalid_ranges_detected():
    assert not adult_ranges().with_range("sbp", 120, -1).is_valid()
    assert not adult_ranges().with_range("sbp", math.nan, 40).is_valid()


def test_from_pairs_requires_seven():
    with pytest.raises(ValueError):
        ReferenceRanges.from_pairs([(80, 40)])


def test_weighted_deviation_sum_skips_missing_and_disabled():
    ranges = adult_ranges().with_range("rr", 16, 0)
    values = (120, 30, 0, 0, 0, 0, 0)
    weights = (0.5, 0.5, 0.5, 0.5, 0.5, 0.5, 0.5)
    total, weight_total = ranges.weighted_deviation_sum(values, weights)
    assert total == pytest.approx(0.5)
    assert weight_total == pytest.approx(0.5)


def test_linear_helpers():
    assert normalize_linear(5, 0, 10) == 0.5
    assert normalize_linear(-1, 0, 10) == 0.0
    assert normalize_linear(5, 10, 0) == 0.0
    assert clamp_to_range(12, 0, 10) == 10
    assert clamp_to_range(5, 10, 0) == 10
    assert in_range(10, 0, 10)
    assert not in_range(5, 10, 0)
