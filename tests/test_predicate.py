from datetime import datetime, timezone

import pytest

from app.domain import passes
from app.models import ComfortPolicy, HourlySample


def _policy(**overrides) -> ComfortPolicy:
    values = {
        "min_temperature_c": 15.0,
        "max_temperature_c": 25.0,
        "max_humidity_pct": 60.0,
        "max_uv_index": 6.0,
        "max_cloud_cover_pct": 50.0,
        "allow_precipitation": False,
    }
    values.update(overrides)
    return ComfortPolicy(**values)


def _sample(**overrides) -> HourlySample:
    values = {
        "time": datetime(2025, 6, 1, 12, tzinfo=timezone.utc),
        "temperature_c": 20.0,
        "humidity_pct": 40.0,
        "precipitation_probability_pct": 0.0,
        "uv_index": 3.0,
        "cloud_cover_pct": 10.0,
    }
    values.update(overrides)
    return HourlySample(**values)


def test_comfortable_hour_passes():
    assert passes(_policy(), _sample()) is True


@pytest.mark.parametrize("humidity, expected", [(60.0, True), (60.0001, False)])
def test_humidity_ceiling_is_inclusive(humidity, expected):
    assert passes(_policy(), _sample(humidity_pct=humidity)) is expected


@pytest.mark.parametrize(
    "probability, expected", [(19.999, True), (20.0, False), (20.001, False)]
)
def test_precipitation_cutoff_is_strict(probability, expected):
    sample = _sample(precipitation_probability_pct=probability)
    assert passes(_policy(allow_precipitation=False), sample) is expected


def test_precipitation_ignored_when_allowed():
    sample = _sample(precipitation_probability_pct=95.0)
    assert passes(_policy(allow_precipitation=True), sample) is True


@pytest.mark.parametrize("temperature, expected", [(15.0, True), (25.0, True), (14.9, False), (25.1, False)])
def test_temperature_bounds_are_inclusive(temperature, expected):
    assert passes(_policy(), _sample(temperature_c=temperature)) is expected


def test_uv_and_cloud_ceilings():
    assert passes(_policy(), _sample(uv_index=6.0)) is True
    assert passes(_policy(), _sample(uv_index=6.1)) is False
    assert passes(_policy(), _sample(cloud_cover_pct=50.0)) is True
    assert passes(_policy(), _sample(cloud_cover_pct=50.5)) is False


def test_inverted_temperature_range_never_passes():
    policy = _policy(min_temperature_c=30.0, max_temperature_c=10.0)
    for temperature in (5.0, 10.0, 20.0, 30.0, 35.0):
        assert passes(policy, _sample(temperature_c=temperature)) is False


def test_policy_is_immutable():
    policy = _policy()
    with pytest.raises(Exception):
        policy.max_uv_index = 11.0
