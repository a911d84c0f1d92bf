"""
Ability module for the combat engine.

Defines the static ability data and the default ability-effect calculator,
which turns an offensive, healing or utility ability into primitive effects.
Defensive declarations and death prevention are handled by the effect
generator before the calculator is consulted.
"""

from collections.abc import Callable
from random import Random
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from dungeon_combat.core.constants import DamageSource
from dungeon_combat.effects.effect import (
    DamageEffect,
    Effect,
    HealingEffect,
    StatusEffectApplication,
)
from dungeon_combat.effects.status_effect import (
    StatusEffectChance,
    StatusLookup,
)


class Ability(BaseModel):
    """
    Represents an ability from the data tables.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(
        description="Unique identifier of the ability.",
    )
    name: str = Field(
        description="The name of the ability.",
    )
    category: str = Field(
        "utility",
        description="offensive, defensive, healing, utility, debuff or passive.",
    )
    mana_cost: int = Field(
        0,
        ge=0,
        description="Mana spent every time the ability is used.",
    )
    damage: int = Field(
        0,
        ge=0,
        description="Flat damage dealt to the opponent.",
    )
    heal_amount: int = Field(
        0,
        ge=0,
        description="Flat healing received by the user.",
    )
    ignore_armor: bool = Field(
        False,
        description="If True, the ability's damage pierces armor.",
    )
    status_effects: list[StatusEffectChance] = Field(
        default_factory=list,
        description="Status effects the ability inflicts.",
    )
    health_restore: int = Field(
        0,
        ge=0,
        description="Health restored when the ability prevents a death.",
    )
    mana_restore: int = Field(
        0,
        ge=0,
        description="Mana restored when the ability prevents a death.",
    )
    description: str = ""
    emoji: str = "❔"
    fallback: bool = Field(
        False,
        description="True for the stand-in returned for unknown ability ids.",
    )


def fallback_ability(ability_id: str) -> Ability:
    """Build the inert ability used when an ability id is not in the data tables."""
    return Ability(id=ability_id, name=ability_id, fallback=True)


def roll_chance(rng: Random, chance: float) -> bool:
    """
    Roll a percentage chance.

    Args:
        rng (Random):
            The random source of the turn.
        chance (float):
            The chance, from 0 to 100.

    Returns:
        bool:
            True if a uniform roll in [0, 100) lands below the chance.
            Certain and impossible chances do not consume a roll.
    """
    if chance >= 100:
        return True
    if chance <= 0:
        return False
    return rng.random() * 100 < chance


def calculate_ability_effects(
    ability: Ability,
    attacker: Any,
    defender: Any,
    lookup_status: StatusLookup,
    rng: Random,
) -> list[Effect]:
    """
    Compute the damage, healing and status effects of an ability.

    Args:
        ability (Ability):
            The ability being used.
        attacker (Combatant):
            The combatant using the ability.
        defender (Combatant):
            The opposing combatant.
        lookup_status (StatusLookup):
            Resolves a status effect id to its definition, or None.
        rng (Random):
            The random source of the turn.

    Returns:
        list[Effect]:
            The generated effects, in order: damage, healing, statuses.
    """
    effects: list[Effect] = []

    if ability.damage > 0:
        effects.append(
            DamageEffect(
                source_id=attacker.id,
                amount=ability.damage,
                source=DamageSource.ABILITY,
                origin_id=ability.id,
                ignore_armor=ability.ignore_armor,
            )
        )

    if ability.heal_amount > 0:
        effects.append(
            HealingEffect(
                source_id=attacker.id,
                amount=ability.heal_amount,
                origin_id=ability.id,
            )
        )

    for entry in ability.status_effects:
        definition = lookup_status(entry.effect_id)
        if definition is None:
            continue
        if not roll_chance(rng, entry.chance):
            continue
        effects.append(
            StatusEffectApplication(
                source_id=attacker.id,
                effect=definition,
                target=entry.target,
            )
        )

    return effects


AbilityEffectCalculator = Callable[
    [Ability, Any, Any, StatusLookup, Random], list[Effect]
]
