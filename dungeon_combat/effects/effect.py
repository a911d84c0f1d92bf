"""
Effect module for the combat engine.

An Effect is a primitive, per-turn outcome generated from an Action. Effects
are never persisted: the effect generator produces a fresh list for each side
every turn and the resolver folds them into a TurnResult.

The union is closed. Consumers dispatch with ``match`` and finish with
``assert_never`` so that adding a new kind fails loudly wherever it is not
handled.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from dungeon_combat.core.constants import (
    DamageSource,
    EffectKind,
    EffectTarget,
    WeaponCategory,
)

from .status_effect import StatusEffectDefinition


class BaseEffect(BaseModel):
    """Fields shared by every effect."""

    model_config = ConfigDict(frozen=True)

    source_id: str = Field(
        description="Id of the combatant whose action generated the effect.",
    )


class DamageEffect(BaseEffect):
    """Damage dealt to the opponent. Subject to counters and armor."""

    kind: Literal[EffectKind.DAMAGE] = EffectKind.DAMAGE

    amount: int = Field(ge=0)
    source: DamageSource = Field(
        description="What dealt the damage; counters negate by source.",
    )
    category: WeaponCategory | None = Field(
        None,
        description="Weapon category for weapon damage, None otherwise.",
    )
    origin_id: str = Field(
        "",
        description="Id of the weapon, ability or spell that dealt the damage.",
    )
    ignore_armor: bool = False


class SelfDamageEffect(BaseEffect):
    """Health paid by the acting combatant. Never negated."""

    kind: Literal[EffectKind.SELF_DAMAGE] = EffectKind.SELF_DAMAGE

    amount: int = Field(ge=0)
    origin_id: str = ""


class ManaCostEffect(BaseEffect):
    """Mana paid by the acting combatant."""

    kind: Literal[EffectKind.MANA_COST] = EffectKind.MANA_COST

    amount: int = Field(ge=0)


class HealingEffect(BaseEffect):
    """Healing received by the acting combatant."""

    kind: Literal[EffectKind.HEALING] = EffectKind.HEALING

    amount: int = Field(ge=0)
    origin_id: str = ""


class CriticalHitEffect(BaseEffect):
    """Marks that a weapon attack rolled a critical hit."""

    kind: Literal[EffectKind.CRITICAL_HIT] = EffectKind.CRITICAL_HIT

    attacker_name: str
    weapon_name: str


class StatusEffectApplication(BaseEffect):
    """A status effect to attach to a combatant once damage is resolved."""

    kind: Literal[EffectKind.STATUS_EFFECT] = EffectKind.STATUS_EFFECT

    effect: StatusEffectDefinition
    target: EffectTarget = EffectTarget.OPPONENT


class DefensiveAbilityEffect(BaseEffect):
    """Declares a defensive ability (counter, silence, dodge) for this turn."""

    kind: Literal[EffectKind.DEFENSIVE_ABILITY] = EffectKind.DEFENSIVE_ABILITY

    ability_id: str


class DeathPreventionEffect(BaseEffect):
    """Declares the one-shot death prevention for this turn."""

    kind: Literal[EffectKind.DEATH_PREVENTION] = EffectKind.DEATH_PREVENTION

    ability_id: str
    ability_name: str = "Accepting Fate"
    health_restore: int = Field(ge=0)
    mana_restore: int = Field(ge=0)


Effect = Annotated[
    Union[
        DamageEffect,
        SelfDamageEffect,
        ManaCostEffect,
        HealingEffect,
        CriticalHitEffect,
        StatusEffectApplication,
        DefensiveAbilityEffect,
        DeathPreventionEffect,
    ],
    Field(discriminator="kind"),
]
