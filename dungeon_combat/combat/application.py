"""
Applies a TurnResult to a combatant record.

The engine only proposes changes. This helper is the one mutation path the
caller can use to turn a result into the next combatant record.
"""

import math

from dungeon_combat.core.constants import Side, TransitionKind

from .combatant import Combatant
from .turn_result import TurnResult


def apply_turn_result(combatant: Combatant, result: TurnResult, side: Side) -> Combatant:
    """
    Build the combatant record that follows a turn.

    Args:
        combatant (Combatant):
            The combatant before the turn. Not modified.
        result (TurnResult):
            The outcome of the turn.
        side (Side):
            The side the combatant fought on.

    Returns:
        Combatant:
            A new record with damage and mana cost subtracted, healing and
            mana restore added (clamped to the maximums), the new status
            effects attached and the end-of-effect transitions applied.
    """
    health = max(0, combatant.current_health - result.damage_for(side))
    mana = max(0, combatant.current_mana - result.mana_cost_for(side))
    health = min(combatant.max_health, health + result.healing_for(side))
    mana = min(combatant.max_mana, mana + result.mana_restore_for(side))

    for transition in result.transitions_for(side):
        match transition.kind:
            case TransitionKind.DIVIDE_HEALTH:
                health = math.ceil(health / transition.divisor)

    return combatant.model_copy(
        update={
            "current_health": health,
            "current_mana": mana,
            "active_status_effects": list(result.status_effects_for(side)),
            "death_prevention_used": combatant.death_prevention_used
            or result.death_prevented_for(side),
        }
    )
