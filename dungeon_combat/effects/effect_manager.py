"""
Status effect engine for the combat engine.

Attaches newly declared status effects to a combatant, respecting the
stacking rules, and ticks the effects a combatant hosts once per turn:
damage, healing and mana over time, instant restores, transient combat
modifiers, duration bookkeeping, expiry and end-of-effect transitions.

Nothing here mutates a combatant. Both operations return new effect lists,
and expiry transitions are returned as instructions for the caller.
"""

from collections.abc import Sequence
from datetime import datetime

from pydantic import BaseModel, Field

from dungeon_combat.combat.combatant import Combatant
from dungeon_combat.core.constants import TransitionKind
from dungeon_combat.core.logging import log_debug

from .status_effect import (
    PERMANENT_DURATION,
    AppliedStatusEffect,
    StatusEffectDefinition,
    StatusLookup,
)


class CombatModifiers(BaseModel):
    """
    Transient combat modifiers granted by a combatant's status effects.

    Rebuilt from scratch every turn. The presentation layer reads the
    disablement flags to restrict the next action menu.
    """

    damage_multiplier: float = 1.0
    damage_vulnerability: float = 1.0
    armor_reduction: float = 0.0
    crit_bonus: int = 0
    damage_reduction: float = 0.0
    disable_weapons: bool = False
    disable_magic: bool = False
    disable_all_actions: bool = False
    disable_primary_weapon: bool = False
    untargetable: bool = False
    effect_immunity: bool = False

    def absorb(self, definition: StatusEffectDefinition) -> None:
        """
        Fold the modifier fields of a status effect into these modifiers.

        Multipliers compound, crit bonuses add up, reductions keep the
        strongest value and flags are combined with OR.

        Args:
            definition (StatusEffectDefinition):
                The definition of an active status effect.
        """
        self.damage_multiplier *= definition.damage_multiplier
        self.damage_vulnerability *= definition.damage_vulnerability
        self.armor_reduction = max(self.armor_reduction, definition.armor_reduction)
        self.crit_bonus += definition.crit_bonus
        self.damage_reduction = max(self.damage_reduction, definition.damage_reduction)
        self.disable_weapons |= definition.disable_weapons
        self.disable_magic |= definition.disable_magic
        self.disable_all_actions |= definition.disable_all_actions
        self.disable_primary_weapon |= definition.disable_primary_weapon
        self.untargetable |= definition.untargetable
        self.effect_immunity |= definition.effect_immunity


class TransitionInstruction(BaseModel):
    """
    A mutation the caller must apply to a combatant before the next turn.
    """

    combatant_id: str = Field(
        description="The combatant the transition applies to.",
    )
    kind: TransitionKind
    effect_id: str = Field(
        description="The expired status effect that declared the transition.",
    )
    divisor: float = Field(
        1.0,
        gt=0,
        description="For DIVIDE_HEALTH, health becomes ceil(health / divisor).",
    )


class StatusTick(BaseModel):
    """Everything one combatant's status effects produced this turn."""

    damage: int = 0
    healing: int = 0
    mana_restore: int = 0
    messages: list[str] = Field(default_factory=list)
    remaining_effects: list[AppliedStatusEffect] = Field(default_factory=list)
    modifiers: CombatModifiers = Field(default_factory=CombatModifiers)
    transitions: list[TransitionInstruction] = Field(default_factory=list)


def _duration_rank(duration: int) -> float:
    """Order durations with permanent effects above every timed one."""
    return float("inf") if duration == PERMANENT_DURATION else float(duration)


def apply_status_effect(
    effects: Sequence[AppliedStatusEffect],
    definition: StatusEffectDefinition,
    now: datetime,
    duration: int | None = None,
    power: int | None = None,
) -> list[AppliedStatusEffect]:
    """
    Attach a status effect to a combatant's effect list.

    If the combatant already hosts an effect of the same type, a stackable
    definition adds its duration and power to the existing instance, while a
    non-stackable one keeps the longer duration and takes the new power only
    when its duration wins. Otherwise a fresh instance is appended.

    Args:
        effects (Sequence[AppliedStatusEffect]):
            The effects currently hosted by the combatant. Not modified.
        definition (StatusEffectDefinition):
            The status effect to apply.
        now (datetime):
            Timestamp recorded on fresh instances.
        duration (int | None):
            Overrides the definition's duration.
        power (int | None):
            Overrides the definition's power.

    Returns:
        list[AppliedStatusEffect]:
            The new effect list, still holding one instance per type.

    """
    new_duration = definition.duration if duration is None else duration
    new_power = definition.power if power is None else power

    updated: list[AppliedStatusEffect] = []
    found = False
    for existing in effects:
        if existing.type != definition.id:
            updated.append(existing)
            continue
        found = True
        if definition.stackable:
            if PERMANENT_DURATION in (existing.duration, new_duration):
                stacked_duration = PERMANENT_DURATION
            else:
                stacked_duration = existing.duration + new_duration
            updated.append(
                existing.model_copy(
                    update={
                        "duration": stacked_duration,
                        "power": existing.power + new_power,
                    }
                )
            )
        elif _duration_rank(new_duration) > _duration_rank(existing.duration):
            updated.append(
                existing.model_copy(
                    update={"duration": new_duration, "power": new_power}
                )
            )
        else:
            updated.append(existing)

    if not found:
        updated.append(
            AppliedStatusEffect(
                type=definition.id,
                duration=new_duration,
                power=new_power,
                applied_at=now,
            )
        )

    log_debug(
        f"Applied {definition.id}",
        {"duration": new_duration, "power": new_power, "refreshed": found},
    )
    return updated


def tick_status_effects(
    combatant: Combatant,
    lookup_status: StatusLookup,
    effects: Sequence[AppliedStatusEffect] | None = None,
) -> StatusTick:
    """
    Run one turn of every status effect a combatant hosts.

    Args:
        combatant (Combatant):
            The host of the effects. Not modified.
        lookup_status (StatusLookup):
            Resolves an effect type to its definition, or None.
        effects (Sequence[AppliedStatusEffect] | None):
            The effects to tick, when they differ from the ones currently
            attached to the combatant (e.g. after this turn's applications).

    Returns:
        StatusTick:
            The aggregated deltas, messages, modifiers and transitions, and
            the effects that remain active afterwards.

    """
    combatant_id = combatant.id
    combatant_name = combatant.name
    if effects is None:
        effects = combatant.active_status_effects
    tick = StatusTick()

    for applied in effects:
        definition = lookup_status(applied.type)
        if definition is None:
            # Unknown types stay attached untouched.
            tick.remaining_effects.append(applied)
            continue

        power = max(applied.power, 1)
        clauses: list[str] = []

        if definition.damage_per_turn:
            amount = definition.damage_per_turn * power
            tick.damage += amount
            clauses.append(f"takes {amount} damage")
        if definition.health_per_turn:
            amount = definition.health_per_turn * power
            tick.healing += amount
            clauses.append(f"heals {amount} health")
        if definition.mana_per_turn:
            amount = definition.mana_per_turn * power
            tick.mana_restore += amount
            clauses.append(f"restores {amount} mana")

        message = ""
        if clauses:
            message = (
                f"{combatant_name} {' and '.join(clauses)} from {definition.name}"
            )

        if definition.is_instant() and (
            definition.health_restore or definition.mana_restore
        ):
            tick.healing += definition.health_restore
            tick.mana_restore += definition.mana_restore
            instant = (
                f"{combatant_name} is instantly restored "
                f"{definition.health_restore} health and "
                f"{definition.mana_restore} mana by {definition.name}"
            )
            message = f"{message}. {instant}" if message else instant

        tick.modifiers.absorb(definition)

        if applied.is_permanent():
            if message:
                message += " (permanent)"
            tick.remaining_effects.append(applied)
        elif applied.duration > 0:
            remaining = applied.duration - 1
            if remaining > 0:
                tick.remaining_effects.append(
                    applied.model_copy(update={"duration": remaining})
                )
            else:
                if message:
                    message += f" ({definition.name} effect ends)"
                else:
                    message = f"{definition.name} wears off {combatant_name}"
                if definition.has_expiry_transition():
                    tick.transitions.append(
                        TransitionInstruction(
                            combatant_id=combatant_id,
                            kind=TransitionKind.DIVIDE_HEALTH,
                            effect_id=definition.id,
                            divisor=definition.health_multiplier,
                        )
                    )
        # Instant effects (duration 0) are dropped after their single tick.

        if message:
            tick.messages.append(message)

    log_debug(
        f"Ticked status effects of {combatant_id}",
        {
            "damage": tick.damage,
            "healing": tick.healing,
            "mana": tick.mana_restore,
            "remaining": len(tick.remaining_effects),
        },
    )
    return tick
