import numpy as np
import pytest

from shiftplan.curves import IntervalCurve
from shiftplan.models import CallerLoadStaffing, DistributionStaffing, FixedStaffing
from shiftplan.scaling import scale_count, scale_spec, scale_specs


def test_scale_count():
    assert scale_count(10, 0.5) == 5
    assert scale_count(5, 0.5) == 3  # 2.5 rounds away from zero
    assert scale_count(1, 0.01) == 1
    assert scale_count(0, 3.0) == 0


def test_fixed_staffing_keeps_window():
    spec = FixedStaffing(count=8, start_seconds=3600, end_seconds=7200, preferred_shift_length=4)
    out = scale_spec(spec, 1.5)
    assert out.count == 12
    assert (out.start_seconds, out.end_seconds, out.preferred_shift_length) == (3600, 7200, 4)


def test_distribution_is_scaled_per_interval():
    values = np.zeros(48)
    values[10:14] = [1, 2, 4, 10]
    spec = DistributionStaffing(curve=IntervalCurve(values), last_interval_open_end=True)

    out = scale_spec(spec, 0.2)
    assert out.curve.to_list()[10:14] == [1.0, 1.0, 1.0, 2.0]
    assert out.curve[0] == 0.0
    assert out.last_interval_open_end is True
    # source spec untouched
    assert spec.curve[13] == 10.0


def test_caller_load_budget_is_scaled():
    spec = CallerLoadStaffing(available_half_hours=20, weights={"A": 1.0})
    assert scale_spec(spec, 0.25).available_half_hours == 5
    assert scale_spec(spec, 0.001).available_half_hours == 1
    assert scale_spec(spec, 0.25).weights == {"A": 1.0}


def test_identity_ratio_changes_nothing():
    curve = IntervalCurve(np.arange(24, dtype=float))
    specs = [
        FixedStaffing(count=3),
        DistributionStaffing(curve=curve),
        CallerLoadStaffing(available_half_hours=40, weights={"A": 2.0}),
    ]
    out = scale_specs(specs, 1.0)
    assert out[0] == specs[0]
    assert out[1].curve == curve
    assert out[2].available_half_hours == 40


def test_positive_values_never_scale_to_zero():
    rng = np.random.default_rng(3)
    values = rng.integers(1, 50, size=96).astype(float)
    for ratio in (0.001, 0.01, 0.3, 2.0):
        out = scale_spec(DistributionStaffing(curve=IntervalCurve(values)), ratio)
        assert (out.curve.values >= 1).all()


def test_invalid_ratio_is_rejected():
    with pytest.raises(ValueError):
        scale_spec(FixedStaffing(count=1), 0.0)
    with pytest.raises(ValueError):
        scale_count(3, float("inf"))
