import numpy as np
import pytest

from shiftplan.curves import IntervalCurve, new_curve, round_half_away
from shiftplan.errors import GranularityMismatchError, NegativeDemandError, NoLoadSignalError


def test_new_curve_fills_every_interval():
    c = new_curve(48, 2.0)
    assert c.granularity == 48
    assert c.interval_seconds == 1800
    assert c.to_list() == [2.0] * 48


def test_unsupported_granularity_is_rejected():
    with pytest.raises(GranularityMismatchError):
        IntervalCurve(np.ones(50))
    with pytest.raises(GranularityMismatchError):
        new_curve(48).resample(12)


def test_negative_values_are_rejected():
    values = np.ones(24)
    values[5] = -1.0
    with pytest.raises(NegativeDemandError) as exc:
        IntervalCurve(values)
    assert exc.value.details["index"] == 5


def test_resample_preserves_mass_between_all_granularities():
    rng = np.random.default_rng(7)
    for n in (24, 48, 96):
        c = IntervalCurve(rng.integers(0, 20, size=n).astype(float))
        for m in (24, 48, 96):
            assert c.resample(m).sum() == pytest.approx(c.sum(), abs=1e-6)


def test_resample_splits_when_stretching_and_sums_when_compressing():
    c24 = new_curve(24, 4.0)
    c96 = c24.resample(96)
    assert c96.to_list() == [1.0] * 96

    c48 = IntervalCurve(np.arange(48, dtype=float))
    c24b = c48.resample(24)
    assert c24b[0] == 0.0 + 1.0
    assert c24b[23] == 46.0 + 47.0


def test_resample_factors_keeps_rates():
    f = new_curve(48, 0.8)
    assert f.resample_factors(96).to_list() == pytest.approx([0.8] * 96)
    assert f.resample_factors(24).to_list() == pytest.approx([0.8] * 24)


def test_scale_rounds_half_away_from_zero():
    values = np.zeros(24)
    values[0] = 2.5
    values[1] = 3.5
    out = IntervalCurve(values).scale(1.0, keep_positive=False)
    assert out[0] == 3.0
    assert out[1] == 4.0


def test_scale_keeps_positive_intervals_at_least_one():
    values = np.zeros(48)
    values[10] = 1.0
    values[11] = 3.0
    out = IntervalCurve(values).scale(0.1)
    assert out[10] == 1.0
    assert out[11] == 1.0
    assert out[0] == 0.0


def test_identity_scale_of_integer_curve_is_exact():
    c = IntervalCurve(np.arange(96, dtype=float) % 7)
    assert c.scale(1.0) == c


def test_scale_rejects_nonpositive_ratio():
    with pytest.raises(ValueError):
        new_curve(48, 1.0).scale(0.0)


def test_curve_does_not_alias_its_input():
    src = np.ones(48)
    c = IntervalCurve(src)
    src[0] = 99.0
    assert c[0] == 1.0

    with pytest.raises(ValueError):
        c.values[0] = 5.0

    scaled = c.scale(2.0)
    assert c[0] == 1.0
    assert scaled[0] == 2.0


def test_normalize_turns_counts_into_density():
    c = IntervalCurve(np.r_[np.full(24, 1.0), np.full(24, 3.0)])
    d = c.normalize()
    assert d.sum() == pytest.approx(1.0)
    assert d[30] == pytest.approx(3.0 / 96.0)

    with pytest.raises(NoLoadSignalError):
        new_curve(24).normalize()


def test_multiply_and_add():
    base = new_curve(96, 2.0)
    assert base.multiply(new_curve(24, 1.5)).to_list() == pytest.approx([3.0] * 96)
    assert base.add(new_curve(48, 1.0)).sum() == pytest.approx(2.0 * 96 + 48.0)


def test_interval_labels():
    labels = new_curve(48).interval_labels()
    assert labels[0] == "00:00"
    assert labels[1] == "00:30"
    assert labels[-1] == "23:30"


def test_round_half_away_handles_negative_values():
    assert round_half_away(-2.5) == -3.0
    assert round_half_away(2.4) == 2.0
