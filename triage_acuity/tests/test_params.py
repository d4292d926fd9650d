from __future__ import annotations

import math

import pytest
from pydantic import ValidationError

from triage_acuity.core.params import (
    PRESET_NAMES,
    ParameterSet,
    VitalWeights,
    default_params,
    lenient_params,
    preset,
    research_params,
    strict_params,
)
from triage_acuity.core.validator import validate_params
from triage_acuity.errors import PresetNotFoundError


def test_default_preset_values():
    params = default_params()
    assert params.thresholds() == (0.85, 0.60, 0.35, 0.15)
    assert params.weights.rr == pytest.approx(0.22)
    assert params.max_resources == 6
    assert params.resource_weight == pytest.approx(0.25)
    assert params.weight_sum() == pytest.approx(1.0)
    assert params.divisor() == pytest.approx(1.25)


@pytest.mark.parametrize("name", PRESET_NAMES)
def test_every_preset_is_valid(name):
    assert preset(name).is_valid()


def test_presets_share_weights():
    weights = default_params().weights
    for params in (strict_params(), lenient_params(), research_params()):
        assert params.weights == weights


def test_preset_ordering():
    assert strict_params().is_stricter_than(default_params())
    assert default_params().is_stricter_than(lenient_params())
    assert not lenient_params().is_stricter_than(default_params())


def test_unknown_preset():
    with pytest.raises(PresetNotFoundError) as excinfo:
        preset("aggressive")
    assert isinstance(excinfo.value, KeyError)
    assert "aggressive" in str(excinfo.value)


def test_parameter_sets_are_frozen():
    params = default_params()
    with pytest.raises(ValidationError):
        params.t1 = 0.5


def test_builders_return_new_instances():
    params = default_params()
    changed = params.with_thresholds(0.9, 0.7, 0.5, 0.3)
    assert changed.t1 == 0.9
    assert params.t1 == 0.85


def test_misordered_thresholds_are_invalid():
    params = default_params().with_thresholds(0.5, 0.6, 0.35, 0.15)
    report = validate_params(params)
    assert not report.valid
    assert not report.thresholds_ok
    assert report.weights_ok


@pytest.mark.parametrize(
    "params, flag",
    [
        (default_params().with_resources(-1, 0.25), "max_resources_ok"),
        (default_params().with_resources(6, -0.1), "resource_weight_ok"),
        (default_params().with_weight("hr", 1.5), "weights_ok"),
        (default_params().with_weight("spo2", math.nan), "weights_ok"),
        (default_params().with_thresholds(1.2, 0.6, 0.35, 0.15), "thresholds_ok"),
        (default_params().with_thresholds(0.85, 0.6, 0.35, 0.0), "thresholds_ok"),
    ],
)
def test_invalid_parameter_sets(params, flag):
    report = validate_params(params)
    assert report.valid is False
    assert getattr(report, flag) is False


def test_threshold_list_requires_four_values():
    params = default_params()
    assert params.with_threshold_list([0.9, 0.5]) is params
    assert params.with_threshold_list([0.9, 0.7, 0.5, 0.3]).thresholds() == (0.9, 0.7, 0.5, 0.3)


def test_unknown_weight_name_is_ignored():
    params = default_params()
    assert params.with_weight("lactate", 1.0) is params


def test_scaled_weights_peak_at_one():
    scaled = default_params().scaled_weights(2.0)
    assert max(scaled.weight_vector) == pytest.approx(1.0)
    assert scaled.weights.hr == pytest.approx(0.18 / 0.22)


def test_normalized_weights_sum_to_one():
    params = default_params().with_weights([1, 1, 1, 1, 0, 0, 0]).normalized_weights()
    assert params.weight_sum() == pytest.approx(1.0)
    assert params.weights.hr == pytest.approx(0.25)


def test_uniform_weights():
    params = default_params().uniform_weights()
    assert len(set(params.weight_vector)) == 1
    assert params.weight_sum() == pytest.approx(1.0)


def test_geometric_thresholds():
    params = default_params().geometric_thresholds(0.1, 0.9)
    t1, t2, t3, t4 = params.thresholds()
    assert 0.9 > t1 > t2 > t3 > t4 > 0.1
    assert params.is_valid()
    assert default_params().geometric_thresholds(0, 0.9) is default_params()


def test_threshold_band():
    params = default_params()
    assert params.threshold_band(1) == (0.85, 1.0)
    assert params.threshold_band(3) == (0.35, 0.60)
    assert params.threshold_band(5) == (0.0, 0.15)
    assert params.threshold_band(9) == (0.0, 0.0)


@pytest.mark.parametrize(
    "score, expected",
    [(1.0, 1.0), (0.85, 1.5), (0.6, 2.0), (0.35, 2.5), (0.0, 5.0)],
)
def test_continuous_level(score, expected):
    assert default_params().continuous_level(score) == pytest.approx(expected)


def test_weights_from_sequence_requires_seven():
    with pytest.raises(ValueError):
        VitalWeights.from_sequence([0.1, 0.2])


def test_parameter_set_rejects_unknown_fields():
    with pytest.raises(ValidationError):
        ParameterSet(
            weights=VitalWeights.uniform(),
            max_resources=6,
            resource_weight=0.25,
            t1=0.85,
            t2=0.6,
            t3=0.35,
            t4=0.15,
            t5=0.05,
        )
