"""
Counter resolution for the combat engine.

A combatant that declares a defensive ability this turn holds a counter: it
negates every incoming damage effect of the matching source, may deal fixed
counter damage to the opponent and, for dodge, heals its holder.
"""

from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict, Field

from dungeon_combat.core.constants import (
    COUNTER_ABILITY_ID,
    COUNTER_DAMAGE,
    DODGE_ABILITY_ID,
    DODGE_HEAL_VS_MELEE,
    DODGE_HEAL_VS_RANGED,
    SILENCE_ABILITY_ID,
    SILENCE_DAMAGE,
    CounterType,
    DamageSource,
    WeaponCategory,
)
from dungeon_combat.core.logging import log_debug
from dungeon_combat.effects.effect import DamageEffect, DefensiveAbilityEffect, Effect


class Counter(BaseModel):
    """
    A defensive counter held by a combatant for one turn.
    """

    model_config = ConfigDict(frozen=True)

    type: CounterType
    source_id: str = Field(
        description="Id of the combatant holding the counter.",
    )
    negates: frozenset[DamageSource] = Field(
        description="Incoming damage sources the counter negates.",
    )
    counter_damage: int = Field(
        0,
        ge=0,
        description="Damage dealt to the opponent when the counter is declared.",
    )
    heals: bool = Field(
        False,
        description="If True, the holder heals based on the opponent's weapon.",
    )

    def negates_damage(self, effect: DamageEffect) -> bool:
        return effect.source in self.negates


_COUNTER_TABLE: dict[str, tuple[CounterType, frozenset[DamageSource], int, bool]] = {
    COUNTER_ABILITY_ID: (
        CounterType.COUNTER,
        frozenset({DamageSource.WEAPON}),
        COUNTER_DAMAGE,
        False,
    ),
    SILENCE_ABILITY_ID: (
        CounterType.SILENCE,
        frozenset({DamageSource.SPELL}),
        SILENCE_DAMAGE,
        False,
    ),
    DODGE_ABILITY_ID: (
        CounterType.DODGE,
        frozenset({DamageSource.WEAPON}),
        0,
        True,
    ),
}


def resolve_counters(effects: Sequence[Effect]) -> list[Counter]:
    """
    Extract the counters declared by one side's effects.

    Args:
        effects (Sequence[Effect]):
            The effects generated by one combatant this turn.

    Returns:
        list[Counter]:
            One counter per known defensive declaration, in order. Unknown
            declarations are ignored.
    """
    counters: list[Counter] = []
    for effect in effects:
        if not isinstance(effect, DefensiveAbilityEffect):
            continue
        entry = _COUNTER_TABLE.get(effect.ability_id)
        if entry is None:
            log_debug(f"Ignoring unknown defensive ability {effect.ability_id}")
            continue
        counter_type, negates, counter_damage, heals = entry
        counters.append(
            Counter(
                type=counter_type,
                source_id=effect.source_id,
                negates=negates,
                counter_damage=counter_damage,
                heals=heals,
            )
        )
    return counters


def dodge_healing(opponent_effects: Sequence[Effect]) -> int:
    """
    Compute the healing granted by a dodge.

    Dodging a ranged attack heals more than dodging anything else. The
    category of the opponent's first weapon damage decides.

    Args:
        opponent_effects (Sequence[Effect]):
            The effects generated by the opponent this turn.

    Returns:
        int:
            The healing received by the dodging combatant.
    """
    first_weapon_hit = next(
        (
            e
            for e in opponent_effects
            if isinstance(e, DamageEffect) and e.source == DamageSource.WEAPON
        ),
        None,
    )
    if first_weapon_hit is not None and first_weapon_hit.category == WeaponCategory.RANGED:
        return DODGE_HEAL_VS_RANGED
    return DODGE_HEAL_VS_MELEE
