import numpy as np
import pytest

from shiftplan.curves import IntervalCurve, new_curve
from shiftplan.errors import NegativeDemandError
from shiftplan.overlays import (
    OverlayScope,
    apply_overlay_values,
    apply_overlays,
    constant_overlay,
    resolve_overlay,
    resolve_scopes,
)


def test_surcharge_is_applied_after_productivity():
    out = apply_overlay_values([10], [0.9], [1.1])
    assert out.tolist() == [10.0]  # round(9.9)


def test_apply_overlays_on_curves():
    base = new_curve(48, 10.0)
    out = apply_overlays(base, productivity=constant_overlay(0.5), surcharge=constant_overlay(1.25))
    assert out.to_list() == [6.0] * 48  # round(6.25)


def test_missing_overlays_are_neutral():
    base = IntervalCurve(np.arange(24, dtype=float))
    assert apply_overlays(base) == base


def test_overlay_is_resampled_as_factor():
    base = new_curve(96, 3.0)
    out = apply_overlays(base, productivity=constant_overlay(2.0, granularity=24))
    assert out.to_list() == [6.0] * 96


def test_group_overlay_overrides_global():
    local = constant_overlay(0.8)
    callcenter = constant_overlay(0.9)
    model = constant_overlay(1.0)

    assert resolve_overlay(local, callcenter, model) is local
    assert resolve_overlay(None, callcenter, model) is callcenter
    assert resolve_overlay(None, None, None) == constant_overlay(1.0)


def test_resolve_scopes_picks_kind():
    group = OverlayScope(efficiency=constant_overlay(0.7))
    model = OverlayScope(efficiency=constant_overlay(1.0), addition=constant_overlay(1.2))

    assert resolve_scopes("efficiency", group, None, model)[0] == pytest.approx(0.7)
    assert resolve_scopes("addition", group, None, model)[0] == pytest.approx(1.2)

    with pytest.raises(ValueError):
        group.get("speed")


def test_invalid_overlays_are_rejected():
    with pytest.raises(ValueError):
        apply_overlay_values([1, 2], [1.0])
    with pytest.raises(ValueError):
        apply_overlay_values([1, 2], [1.0, -0.5])
    with pytest.raises(ValueError):
        constant_overlay(-1.0)


def test_base_is_not_modified():
    base = np.array([4.0, 5.0])
    apply_overlay_values(base, [2.0, 2.0])
    assert base.tolist() == [4.0, 5.0]


def test_negative_base_is_rejected():
    with pytest.raises(NegativeDemandError):
        apply_overlay_values([3.0, -1.0], [1.0, 1.0])
