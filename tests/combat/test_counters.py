"""
Tests for counter resolution.
"""

import pytest

from dungeon_combat.combat.counters import dodge_healing, resolve_counters
from dungeon_combat.core.constants import CounterType, DamageSource, WeaponCategory
from dungeon_combat.effects.effect import (
    DamageEffect,
    DefensiveAbilityEffect,
    ManaCostEffect,
)


def declare(ability_id):
    return DefensiveAbilityEffect(source_id="hero", ability_id=ability_id)


def weapon_hit(category):
    return DamageEffect(
        source_id="rat", amount=3, source=DamageSource.WEAPON, category=category
    )


@pytest.mark.parametrize(
    "ability_id, counter_type, negates, counter_damage, heals",
    [
        ("counter", CounterType.COUNTER, {DamageSource.WEAPON}, 2, False),
        ("silence", CounterType.SILENCE, {DamageSource.SPELL}, 3, False),
        ("dodge", CounterType.DODGE, {DamageSource.WEAPON}, 0, True),
    ],
)
def test_counter_table(ability_id, counter_type, negates, counter_damage, heals):
    """
    Test that each defensive ability maps to its counter.
    """
    (counter,) = resolve_counters([declare(ability_id)])
    assert counter.type == counter_type
    assert counter.negates == negates
    assert counter.counter_damage == counter_damage
    assert counter.heals is heals
    assert counter.source_id == "hero"


def test_non_defensive_effects_are_ignored():
    effects = [ManaCostEffect(source_id="hero", amount=1), weapon_hit(None)]
    assert resolve_counters(effects) == []


def test_unknown_defensive_ability_is_ignored():
    assert resolve_counters([declare("parry")]) == []


def test_multiple_counters_are_independent():
    counters = resolve_counters([declare("counter"), declare("silence")])
    assert [c.type for c in counters] == [CounterType.COUNTER, CounterType.SILENCE]


def test_negation_by_source():
    """
    Test that a counter negates by damage source, not by weapon category.
    """
    (counter,) = resolve_counters([declare("counter")])
    assert counter.negates_damage(weapon_hit(WeaponCategory.MELEE))
    assert counter.negates_damage(weapon_hit(WeaponCategory.RANGED))
    spell = DamageEffect(source_id="rat", amount=2, source=DamageSource.SPELL)
    assert not counter.negates_damage(spell)


@pytest.mark.parametrize(
    "opponent_effects, expected",
    [
        ([weapon_hit(WeaponCategory.MELEE)], 2),
        ([weapon_hit(WeaponCategory.RANGED)], 3),
        ([weapon_hit(WeaponCategory.MAGIC)], 2),
        ([], 2),
        ([weapon_hit(WeaponCategory.RANGED), weapon_hit(WeaponCategory.MELEE)], 3),
    ],
)
def test_dodge_healing(opponent_effects, expected):
    """
    Test that dodging heals more against ranged attacks.
    """
    assert dodge_healing(opponent_effects) == expected
