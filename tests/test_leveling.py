# tests/test_leveling.py
from naplan_tutor.leveling import clamp_level, update_level


def test_level_up_at_80_percent():
    assert update_level(1, 8, 10) == 2


def test_level_down_at_50_percent():
    assert update_level(3, 5, 10) == 2


def test_level_stays_between_50_and_80_percent():
    assert update_level(2, 6, 10) == 2


def test_level_capped_at_5():
    assert update_level(5, 10, 10) == 5


def test_level_floored_at_1():
    assert update_level(1, 0, 10) == 1


def test_zero_total_does_not_divide_by_zero():
    assert update_level(3, 0, 0) == 2


def test_clamp_level():
    assert clamp_level(0) == 1
    assert clamp_level(9) == 5
    assert clamp_level(3) == 3
