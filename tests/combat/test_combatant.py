"""
Tests for combatants and monster spawning.
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from dungeon_combat.combat.combatant import (
    Combatant,
    MonsterTemplate,
    create_combatant,
    spawn_monster,
)
from dungeon_combat.effects.status_effect import AppliedStatusEffect

NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def dragon():
    return MonsterTemplate(
        id="black_dragon",
        name="Black Dragon",
        floor_number=20,
        health=20,
        mana=20,
        armor=1,
        crit_chance=7,
    )


def test_create_combatant_starts_full():
    hero = create_combatant("hero", "Hero", health=12, mana=6, armor=1, crit_chance=5)
    assert hero.current_health == hero.max_health == 12
    assert hero.current_mana == hero.max_mana == 6
    assert hero.active_status_effects == []
    assert not hero.death_prevention_used
    assert hero.is_alive()


def test_spawn_monster_at_base_strength(dragon):
    monster = spawn_monster(dragon, 20)
    assert monster.max_health == 20
    assert monster.current_mana == 20
    assert monster.armor == 1


def test_spawn_monster_scales_stats_but_not_crit(dragon):
    """
    Test that health, mana and armor scale with the floor and crit does not.
    """
    monster = spawn_monster(dragon, 61)
    assert monster.max_health == 26
    assert monster.current_health == 26
    assert monster.max_mana == 26
    assert monster.armor == 2
    assert monster.crit_chance == 7


def test_spawn_monster_overrides(dragon):
    monster = spawn_monster(dragon, 1, id="dragon_2")
    assert monster.id == "dragon_2"


def test_duplicate_status_effects_are_rejected():
    """
    Test that a combatant cannot host two instances of one effect type.
    """
    burning = AppliedStatusEffect(type="burning", duration=2, applied_at=NOW)
    with pytest.raises(ValidationError):
        Combatant(
            id="hero",
            name="Hero",
            current_health=10,
            max_health=10,
            current_mana=0,
            max_mana=0,
            armor=0,
            crit_chance=0,
            active_status_effects=[burning, burning],
        )


def test_negative_health_is_rejected():
    hero = create_combatant("hero", "Hero", health=10, mana=0)
    with pytest.raises(ValidationError):
        hero.current_health = -1


def test_get_status_effect():
    hero = create_combatant("hero", "Hero", health=10, mana=0)
    burning = AppliedStatusEffect(type="burning", duration=2, applied_at=NOW)
    hero.active_status_effects = [burning]
    assert hero.get_status_effect("burning") == burning
    assert hero.get_status_effect("frozen") is None
