import math

from fitcompare.core.analytics.numeric import (
    finite_bounds,
    finite_max,
    finite_mean,
    is_finite,
    to_json_safe,
)
from fitcompare.core.analytics.power import normalized_power


def test_finite_bounds_skip_nan_and_infinity():
    assert finite_bounds([10, math.nan, 30, math.inf, 5]) == (5.0, 30.0)
    assert finite_bounds([None, -math.inf]) is None
    assert finite_bounds([]) is None


def test_missing_values_are_not_zero():
    assert finite_mean([None, 100, 200]) == 150.0
    assert finite_max([None, -5, math.nan]) == -5.0


def test_is_finite():
    assert is_finite(3)
    assert not is_finite(None)
    assert not is_finite(True)
    assert not is_finite("x")


def test_to_json_safe():
    assert to_json_safe([1, math.nan, None, math.inf, 2.5]) == [1, None, None, None, 2.5]


def test_normalized_power_basic():
    # constant power should equal itself
    powers = [200] * 120
    assert 195 <= normalized_power(powers) <= 205


def test_normalized_power_missing_samples_count_as_zero():
    assert normalized_power([]) == 0
    assert normalized_power([None] * 10) == 0
    assert normalized_power([200, None] * 60) < 200
