from __future__ import annotations

import pytest
from pydantic import ValidationError

from triage_acuity.schemas.vitals import VITAL_FIELDS, Vitals, vital_index


def test_zero_means_missing():
    vitals = Vitals(hr=110, spo2=95)
    assert vitals.present_fields() == ("hr", "spo2")
    assert vitals.present_count() == 2
    assert Vitals().any_present() is False


def test_negative_temperature_counts_as_present():
    assert Vitals(temp=-1.5).is_present("temp") is True


def test_negative_integer_vital_counts_as_missing():
    vitals = Vitals(hr=-5, gcs=-1)
    assert vitals.is_present("hr") is False
    assert vitals.is_present("gcs") is False
    assert vitals.any_present() is False


def test_values_follow_positional_order():
    vitals = Vitals(hr=1, rr=2, sbp=3, dbp=4, temp=5.5, spo2=6, gcs=7)
    assert vitals.values() == (1.0, 2.0, 3.0, 4.0, 5.5, 6.0, 7.0)
    assert [vital_index(name) for name in VITAL_FIELDS] == list(range(7))


def test_unknown_vital_index():
    with pytest.raises(KeyError):
        vital_index("lactate")


def test_vitals_are_immutable():
    vitals = Vitals(hr=90)
    with pytest.raises(ValidationError):
        vitals.hr = 100


def test_unexpected_fields_rejected():
    with pytest.raises(ValidationError):
        Vitals(hr=90, lactate=4)
