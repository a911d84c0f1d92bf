"""
Tests for floor scaling.
"""

import pytest

from dungeon_combat.core.constants import MAX_SCALING_FLOOR
from dungeon_combat.core.scaling import (
    get_effective_floor,
    get_scaling_info,
    is_floor_beyond_scaling_limit,
    scale_stat,
    scale_weapon_damage,
    scaling_factor,
    scaling_steps,
)


@pytest.mark.parametrize("floor", [1, 2, 10, 19, 20])
def test_no_scaling_up_to_baseline(floor):
    """
    Test that floors up to the baseline use the unscaled stats.
    """
    assert scaling_factor(floor) == 1.0
    assert scaling_steps(floor) == 0


@pytest.mark.parametrize(
    "floor, expected",
    [
        (21, 1.1),
        (40, 1.1),
        (41, 1.2),
        (100, 1.4),
        (101, 1.5),
        (500, 3.4),
    ],
)
def test_scaling_factor_grows_in_steps(floor, expected):
    """
    Test that the factor grows by one step every twenty floors.
    """
    assert scaling_factor(floor) == pytest.approx(expected)


@pytest.mark.parametrize("floor", [500, 501, 750, 10_000])
def test_scaling_factor_is_capped(floor):
    """
    Test that the factor stops growing at the maximum scaling floor.
    """
    assert scaling_factor(floor) == scaling_factor(MAX_SCALING_FLOOR)


def test_scaling_factor_is_monotonic():
    """
    Test that the factor never decreases as the floor grows.
    """
    factors = [scaling_factor(floor) for floor in range(1, 700)]
    assert factors == sorted(factors)


def test_effective_floor_is_clamped():
    """
    Test that the effective floor stays within [1, MAX_SCALING_FLOOR].
    """
    assert get_effective_floor(0) == 1
    assert get_effective_floor(-5) == 1
    assert get_effective_floor(42) == 42
    assert get_effective_floor(MAX_SCALING_FLOOR + 1) == MAX_SCALING_FLOOR


@pytest.mark.parametrize(
    "value, floor, expected",
    [
        (10, 1, 10),
        (10, 21, 11),
        (3, 21, 4),
        (10, 61, 13),
        (0, 300, 0),
        (2, 500, 7),
    ],
)
def test_scale_stat_rounds_up(value, floor, expected):
    """
    Test that scaled stats are rounded up and computed exactly.
    """
    assert scale_stat(value, floor) == expected


def test_weapon_damage_uses_the_same_factor():
    """
    Test that weapon damage scales like monster stats.
    """
    assert scale_weapon_damage(4, 1) == 4
    assert scale_weapon_damage(4, 41) == 5


def test_beyond_scaling_limit():
    """
    Test the check for floors past the scaling cap.
    """
    assert not is_floor_beyond_scaling_limit(MAX_SCALING_FLOOR)
    assert is_floor_beyond_scaling_limit(MAX_SCALING_FLOOR + 1)


def test_scaling_info_below_cap():
    """
    Test the display summary of a floor below the cap.
    """
    info = get_scaling_info(45)
    assert info["current_floor"] == 45
    assert info["effective_floor"] == 45
    assert info["is_at_cap"] is False
    assert info["scaling_factor"] == pytest.approx(1.2)
    assert "effective floor: 45" in info["message"]


def test_scaling_info_at_cap():
    """
    Test the display summary of a floor past the cap.
    """
    info = get_scaling_info(900)
    assert info["effective_floor"] == MAX_SCALING_FLOOR
    assert info["is_at_cap"] is True
    assert "Maximum scaling" in info["message"]
