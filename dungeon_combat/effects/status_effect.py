"""
Status effect module for the combat engine.

Defines the static description of a status effect, as found in the data
tables, and the instance of a status effect attached to a combatant.
"""

from collections.abc import Callable
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from dungeon_combat.core.constants import EffectPolarity, EffectTarget

PERMANENT_DURATION = -1
INSTANT_DURATION = 0


class StatusEffectDefinition(BaseModel):
    """
    Static definition of a status effect, keyed by id in the data tables.

    A definition can deal damage, heal or restore mana every turn, grant
    transient combat modifiers, disable actions, restore health and mana
    instantly, and declare a transition that happens when it expires.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(
        description="Unique identifier of the status effect.",
    )
    name: str = Field(
        description="The display name of the status effect.",
    )
    emoji: str = Field(
        "❔",
        description="The emoji shown next to the effect name.",
    )
    polarity: EffectPolarity = Field(
        EffectPolarity.NEUTRAL,
        description="Whether the effect helps or hurts its host.",
    )
    description: str = Field(
        "",
        description="A brief description of the status effect.",
    )
    duration: int = Field(
        ge=PERMANENT_DURATION,
        description=(
            "The duration of the effect in turns. "
            "-1 for permanent effects, 0 for instant effects."
        ),
    )
    stackable: bool = Field(
        False,
        description="If True, re-applications add duration and power.",
    )
    power: int = Field(
        1,
        ge=1,
        description="The power a single application contributes.",
    )

    # Per-turn deltas.
    damage_per_turn: int = Field(0, ge=0)
    health_per_turn: int = Field(0, ge=0)
    mana_per_turn: int = Field(0, ge=0)

    # Instant, one-shot restores (only used when duration is 0).
    health_restore: int = Field(0, ge=0)
    mana_restore: int = Field(0, ge=0)

    # Combat modifiers.
    damage_multiplier: float = Field(1.0, ge=0)
    damage_vulnerability: float = Field(1.0, ge=0)
    armor_reduction: float = Field(0.0, ge=0)
    crit_bonus: int = Field(0, ge=0)
    damage_reduction: float = Field(0.0, ge=0)

    # Disablement flags.
    disable_weapons: bool = False
    disable_magic: bool = False
    disable_all_actions: bool = False
    disable_primary_weapon: bool = False

    # Status flags.
    untargetable: bool = False
    effect_immunity: bool = False

    health_multiplier: float = Field(
        1.0,
        gt=0,
        description=(
            "Divisor applied to the host's health when the effect expires. "
            "Values above 1 emit a DIVIDE_HEALTH transition."
        ),
    )

    @property
    def display_name(self) -> str:
        return f"{self.emoji} {self.name}"

    def is_permanent(self) -> bool:
        """Check if the effect never expires."""
        return self.duration == PERMANENT_DURATION

    def is_instant(self) -> bool:
        """Check if the effect applies once and expires immediately."""
        return self.duration == INSTANT_DURATION

    def has_expiry_transition(self) -> bool:
        """Check if the effect declares a mutation to apply on expiry."""
        return self.health_multiplier > 1.0

    def model_post_init(self, _: Any) -> None:
        if self.is_instant() and self.stackable:
            raise ValueError(f"Instant effect '{self.id}' cannot be stackable.")


class AppliedStatusEffect(BaseModel):
    """
    Represents a status effect attached to a combatant.

    A combatant hosts at most one instance per effect type.
    """

    type: str = Field(
        description="The id of the StatusEffectDefinition this instance refers to.",
    )
    duration: int = Field(
        ge=PERMANENT_DURATION,
        description="Remaining turns, -1 for permanent effects.",
    )
    power: int = Field(
        1,
        ge=1,
        description="Multiplier applied to the per-turn deltas.",
    )
    applied_at: datetime = Field(
        description="When the effect was first applied.",
    )

    def is_permanent(self) -> bool:
        return self.duration == PERMANENT_DURATION


class StatusEffectChance(BaseModel):
    """
    A status effect that a weapon, ability or spell may inflict.
    """

    model_config = ConfigDict(frozen=True)

    effect_id: str = Field(
        description="The id of the status effect to inflict.",
    )
    chance: float = Field(
        100.0,
        ge=0,
        le=100,
        description="Percentage chance that the effect is inflicted.",
    )
    target: EffectTarget = Field(
        EffectTarget.OPPONENT,
        description="Who receives the effect.",
    )


StatusLookup = Callable[[str], StatusEffectDefinition | None]
