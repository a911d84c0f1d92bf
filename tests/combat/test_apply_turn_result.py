"""
Tests for applying a turn result to a combatant.
"""

from datetime import datetime, timezone

import pytest

from dungeon_combat.combat.application import apply_turn_result
from dungeon_combat.combat.combatant import create_combatant
from dungeon_combat.combat.turn_result import TurnResult
from dungeon_combat.core.constants import Side, TransitionKind
from dungeon_combat.effects.effect_manager import TransitionInstruction
from dungeon_combat.effects.status_effect import AppliedStatusEffect

NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


def petrified_expiry(combatant_id):
    return TransitionInstruction(
        combatant_id=combatant_id,
        kind=TransitionKind.DIVIDE_HEALTH,
        effect_id="petrified",
        divisor=2,
    )


@pytest.fixture
def hero():
    hero = create_combatant("hero", "Hero", health=20, mana=10)
    return hero.model_copy(update={"current_health": 15, "current_mana": 5})


def test_damage_and_costs_are_subtracted(hero):
    result = TurnResult(player_damage=4, player_mana_cost=2, monster_damage=99)
    updated = apply_turn_result(hero, result, Side.PLAYER)
    assert updated.current_health == 11
    assert updated.current_mana == 3


def test_values_are_clamped(hero):
    """
    Test that health and mana stay between zero and their maximums.
    """
    updated = apply_turn_result(
        hero, TurnResult(player_damage=50, player_mana_cost=50), Side.PLAYER
    )
    assert updated.current_health == 0
    assert updated.current_mana == 0

    updated = apply_turn_result(
        hero, TurnResult(player_healing=50, player_mana_restore=50), Side.PLAYER
    )
    assert updated.current_health == 20
    assert updated.current_mana == 10


def test_monster_side_uses_monster_fields(hero):
    result = TurnResult(player_damage=4, monster_damage=1, monster_healing=3)
    updated = apply_turn_result(hero, result, Side.MONSTER)
    assert updated.current_health == 17


def test_status_effects_and_flag_are_replaced(hero):
    burning = AppliedStatusEffect(type="burning", duration=1, applied_at=NOW)
    result = TurnResult(player_status_effects=[burning], player_death_prevented=True)
    updated = apply_turn_result(hero, result, Side.PLAYER)
    assert updated.active_status_effects == [burning]
    assert updated.death_prevention_used


def test_health_division_transition(hero):
    """
    Test that an expiry transition divides health, rounding up.
    """
    result = TurnResult(player_transitions=[petrified_expiry("hero")])
    updated = apply_turn_result(hero, result, Side.PLAYER)
    assert updated.current_health == 8


def test_transitions_follow_the_side_not_the_id(hero):
    """
    Test that the other side's expiry leaves a combatant with the same id alone.
    """
    result = TurnResult(monster_transitions=[petrified_expiry("hero")])
    updated = apply_turn_result(hero, result, Side.PLAYER)
    assert updated.current_health == 15

    updated = apply_turn_result(hero, result, Side.MONSTER)
    assert updated.current_health == 8


def test_input_record_is_untouched(hero):
    apply_turn_result(hero, TurnResult(player_damage=3), Side.PLAYER)
    assert hero.current_health == 15
