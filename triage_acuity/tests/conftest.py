from __future__ import annotations

import pytest

from triage_acuity.config import get_settings
from triage_acuity.schemas.vitals import Vitals


@pytest.fixture
def reset_settings():
    get_settings.cache_clear()
    yield get_settings
    get_settings.cache_clear()


@pytest.fixture
def emergent_vitals() -> Vitals:
    return Vitals(hr=120, rr=24, sbp=90, spo2=92)


@pytest.fixture
def midpoint_vitals() -> Vitals:
    return Vitals(hr=80, rr=16, sbp=120, dbp=80, temp=37.0, spo2=98, gcs=15)


@pytest.fixture
def extreme_vitals() -> Vitals:
    return Vitals(hr=200, rr=40, sbp=60, dbp=20, temp=41.0, spo2=80, gcs=3)
