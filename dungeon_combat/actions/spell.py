"""
Spell module for the combat engine.

Spells deal flat damage, may heal their caster or cost health, and may
inflict status effects, each gated by its own percentage chance.
"""

from pydantic import BaseModel, ConfigDict, Field

from dungeon_combat.core.constants import FALLBACK_SPELL_DAMAGE
from dungeon_combat.effects.status_effect import StatusEffectChance


class Spell(BaseModel):
    """
    Represents a spell from the static spell table.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(
        description="Unique identifier of the spell.",
    )
    name: str = Field(
        description="The name of the spell.",
    )
    rarity: str = "common"
    damage: int = Field(
        0,
        ge=0,
        description="Flat damage dealt to the opponent.",
    )
    mana_cost: int = Field(
        0,
        ge=0,
        description="Mana spent to cast the spell.",
    )
    health_cost: int = Field(
        0,
        ge=0,
        description="Health the caster pays to cast the spell.",
    )
    healing: int = Field(
        0,
        ge=0,
        description="Flat healing received by the caster.",
    )
    effects: list[StatusEffectChance] = Field(
        default_factory=list,
        description="Status effects the spell may inflict.",
    )
    description: str = ""
    fallback: bool = Field(
        False,
        description="True for the stand-in returned for unknown spell ids.",
    )


def fallback_spell(spell_id: str) -> Spell:
    """Build the bolt used when a spell id is not in the spell table."""
    return Spell(
        id=spell_id,
        name="Arcane Bolt",
        damage=FALLBACK_SPELL_DAMAGE,
        fallback=True,
    )
