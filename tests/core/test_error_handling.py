"""
Tests for the engine's validation helpers.
"""

import pytest

from dungeon_combat.combat.combatant import Combatant, create_combatant
from dungeon_combat.core.error_handling import (
    CombatEngineError,
    CombatStateError,
    InvalidFloorError,
    require_floor,
    require_model,
)


@pytest.mark.parametrize("floor", [1, 20, 501])
def test_require_floor_accepts_positive_integers(floor):
    assert require_floor(floor) == floor


@pytest.mark.parametrize("floor", [0, -3, 1.5, "3", None, True])
def test_require_floor_rejects_invalid_values(floor, mocker):
    """
    Test that invalid floors are logged and raised.
    """
    log = mocker.patch("dungeon_combat.core.error_handling.log_error")
    with pytest.raises(InvalidFloorError):
        require_floor(floor)
    log.assert_called_once()


def test_require_model_returns_instances_unchanged():
    hero = create_combatant("hero", "Hero", health=10, mana=5)
    assert require_model(hero, Combatant, "attacker") is hero


def test_require_model_validates_mappings():
    """
    Test that a plain mapping is validated into the model.
    """
    data = {
        "id": "hero",
        "name": "Hero",
        "current_health": 10,
        "max_health": 10,
        "current_mana": 5,
        "max_mana": 5,
        "armor": 1,
        "crit_chance": 5,
    }
    hero = require_model(data, Combatant, "attacker")
    assert isinstance(hero, Combatant)
    assert hero.armor == 1


def test_require_model_rejects_missing_numeric_fields():
    """
    Test that a combatant missing a numeric field is a state error, not zero.
    """
    data = {"id": "hero", "name": "Hero", "current_health": 10}
    with pytest.raises(CombatStateError) as exc_info:
        require_model(data, Combatant, "attacker", {"turn": 3})
    assert exc_info.value.context["param_name"] == "attacker"
    assert exc_info.value.context["turn"] == 3
    assert isinstance(exc_info.value, CombatEngineError)
