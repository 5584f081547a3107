import pytest

from shiftplan.config import DEFAULT_PLANNING, PlanningDefaults, load_defaults_from_env
from shiftplan.errors import InvalidConstraintError


def test_builtin_defaults():
    assert DEFAULT_PLANNING.preferred_shift_length == 16
    assert DEFAULT_PLANNING.minimum_shift_length == 1
    assert DEFAULT_PLANNING.overlays.efficiency is None
    assert DEFAULT_PLANNING.overlays.addition is None


def test_defaults_from_env(monkeypatch):
    monkeypatch.setenv("SHIFTPLAN_PREFERRED_SHIFT_LENGTH", "12")
    monkeypatch.setenv("SHIFTPLAN_MINIMUM_SHIFT_LENGTH", " 4 ")
    d = load_defaults_from_env()
    assert (d.preferred_shift_length, d.minimum_shift_length) == (12, 4)


def test_unset_env_keeps_builtin_defaults(monkeypatch):
    monkeypatch.delenv("SHIFTPLAN_PREFERRED_SHIFT_LENGTH", raising=False)
    monkeypatch.delenv("SHIFTPLAN_MINIMUM_SHIFT_LENGTH", raising=False)
    assert load_defaults_from_env() == DEFAULT_PLANNING


def test_invalid_env_values(monkeypatch):
    monkeypatch.setenv("SHIFTPLAN_PREFERRED_SHIFT_LENGTH", "eight")
    with pytest.raises(InvalidConstraintError) as exc:
        load_defaults_from_env()
    assert exc.value.to_dict()["error_code"] == "INVALID_CONSTRAINT"


def test_contradictory_defaults_are_rejected():
    with pytest.raises(InvalidConstraintError):
        PlanningDefaults(preferred_shift_length=4, minimum_shift_length=6)
    with pytest.raises(InvalidConstraintError):
        PlanningDefaults(preferred_shift_length=0)
