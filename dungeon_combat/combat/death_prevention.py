"""
Death prevention check for the combat engine.

Once per battle, a combatant that declared death prevention this turn
survives a lethal turn with one health left and receives a small restore.
"""

from collections.abc import Sequence

from pydantic import BaseModel, Field

from dungeon_combat.core.logging import log_debug
from dungeon_combat.effects.effect import DeathPreventionEffect, Effect

from .combatant import Combatant


class DeathPreventionOutcome(BaseModel):
    """The adjusted incoming damage and the restore of a death check."""

    damage: int = Field(
        description="Incoming damage after the check.",
    )
    triggered: bool = False
    health_restore: int = 0
    mana_restore: int = 0
    messages: list[str] = Field(default_factory=list)


def check_death_prevention(
    combatant: Combatant,
    incoming_damage: int,
    own_effects: Sequence[Effect],
) -> DeathPreventionOutcome:
    """
    Check whether a combatant cheats death this turn.

    Args:
        combatant (Combatant):
            The combatant about to receive the damage.
        incoming_damage (int):
            The total damage the combatant would take this turn.
        own_effects (Sequence[Effect]):
            The effects the combatant generated this turn.

    Returns:
        DeathPreventionOutcome:
            The incoming damage unchanged when the check does not trigger.
            Otherwise, damage that leaves exactly one health, the restore
            amounts and the narrative messages.
    """
    outcome = DeathPreventionOutcome(damage=incoming_damage)
    if combatant.current_health - incoming_damage > 0:
        return outcome
    if combatant.death_prevention_used:
        return outcome
    declaration = next(
        (e for e in own_effects if isinstance(e, DeathPreventionEffect)), None
    )
    if declaration is None:
        return outcome

    outcome.damage = max(0, combatant.current_health - 1)
    outcome.triggered = True
    outcome.health_restore = declaration.health_restore
    outcome.mana_restore = declaration.mana_restore
    outcome.messages = [
        f"💀 {combatant.name} was about to die, but {declaration.ability_name} activated!",
        f"🕊️ {combatant.name} cheated death and restored "
        f"{declaration.health_restore} health and "
        f"{declaration.mana_restore} mana!",
    ]
    log_debug(
        f"Death prevented for {combatant.id}",
        {"incoming": incoming_damage, "damage": outcome.damage},
    )
    return outcome
