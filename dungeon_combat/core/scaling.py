"""
Floor scaling for the combat engine.

Monster stats and weapon damage grow with the floor index: nothing changes up
to the baseline floor, then every step of floors adds a fixed percentage,
until the maximum scaling floor where growth stops. Crit chance never scales.
"""

from typing import Any

from .constants import (
    MAX_SCALING_FLOOR,
    SCALING_BASELINE_FLOOR,
    SCALING_STEP_FLOORS,
    SCALING_STEP_PERCENT,
)


def get_effective_floor(floor: int) -> int:
    """
    Returns the floor used for scaling calculations.

    Args:
        floor (int):
            The current floor index.

    Returns:
        int:
            The floor clamped to [1, MAX_SCALING_FLOOR].

    """
    return max(1, min(floor, MAX_SCALING_FLOOR))


def scaling_steps(floor: int) -> int:
    """Returns how many scaling steps apply on the given floor."""
    effective = get_effective_floor(floor)
    if effective <= SCALING_BASELINE_FLOOR:
        return 0
    return (effective - 1) // SCALING_STEP_FLOORS


def scaling_factor(floor: int) -> float:
    """
    Returns the stat multiplier for the given floor.

    Args:
        floor (int):
            The current floor index.

    Returns:
        float:
            1.0 up to the baseline floor, then 1.0 plus one step per
            SCALING_STEP_FLOORS floors, constant past MAX_SCALING_FLOOR.

    """
    return (100 + scaling_steps(floor) * SCALING_STEP_PERCENT) / 100


def scale_stat(value: int, floor: int) -> int:
    """
    Scales a base stat for the given floor, rounding up.

    Integer arithmetic keeps the result exact, e.g. 10 at factor 1.3 is 13.

    Args:
        value (int):
            The unscaled stat.
        floor (int):
            The current floor index.

    Returns:
        int:
            The scaled stat.

    """
    percent = 100 + scaling_steps(floor) * SCALING_STEP_PERCENT
    return -(-value * percent // 100)


def scale_weapon_damage(base_damage: int, floor: int) -> int:
    """Returns the damage of a weapon on the given floor."""
    return scale_stat(base_damage, floor)


def is_floor_beyond_scaling_limit(floor: int) -> bool:
    """Checks whether the floor is past the point where scaling stops."""
    return floor > MAX_SCALING_FLOOR


def get_scaling_info(floor: int) -> dict[str, Any]:
    """
    Summarises the scaling state of a floor for display purposes.

    Args:
        floor (int):
            The current floor index.

    Returns:
        dict[str, Any]:
            The floor, the effective floor, whether the cap is reached, the
            scaling factor and a short message.

    """
    effective = get_effective_floor(floor)
    at_cap = floor >= MAX_SCALING_FLOOR
    if at_cap:
        message = f"⚠️ Maximum scaling reached at floor {MAX_SCALING_FLOOR}"
    else:
        message = f"📊 Scaling active (effective floor: {effective})"
    return {
        "current_floor": floor,
        "effective_floor": effective,
        "is_at_cap": at_cap,
        "scaling_factor": scaling_factor(floor),
        "message": message,
    }
