"""
Combatant module for the combat engine.

A Combatant is the value record of a player avatar or monster instance that
takes part in a battle. The engine reads combatants and proposes deltas; it
never mutates them. Monster combatants are spawned from static templates with
their stats scaled for the current floor.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from dungeon_combat.core.scaling import scale_stat
from dungeon_combat.effects.status_effect import AppliedStatusEffect


class Combatant(BaseModel):
    """
    A participant in a one-on-one battle.

    All numeric fields are required: a record missing one of them is an
    upstream bug in session state construction and fails validation.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(
        min_length=1,
        description="Identifier of the combatant, unique within a battle.",
    )
    name: str = Field(
        description="The name used in turn messages.",
    )
    current_health: int = Field(ge=0)
    max_health: int = Field(ge=1)
    current_mana: int = Field(ge=0)
    max_mana: int = Field(ge=0)
    armor: int = Field(ge=0)
    crit_chance: float = Field(
        ge=0,
        le=100,
        description="Percentage chance of a critical hit with weapons.",
    )
    active_status_effects: list[AppliedStatusEffect] = Field(
        default_factory=list,
        description="Status effects currently attached, one per type.",
    )
    death_prevention_used: bool = Field(
        False,
        description="True once death prevention has triggered in this battle.",
    )

    @model_validator(mode="after")
    def _check_invariants(self) -> "Combatant":
        seen: set[str] = set()
        for applied in self.active_status_effects:
            if applied.type in seen:
                raise ValueError(
                    f"Duplicate status effect '{applied.type}' on {self.id}."
                )
            seen.add(applied.type)
        return self

    def is_alive(self) -> bool:
        return self.current_health > 0

    def get_status_effect(self, effect_type: str) -> AppliedStatusEffect | None:
        """Returns the attached instance of the given type, if any."""
        return next(
            (e for e in self.active_status_effects if e.type == effect_type), None
        )


class MonsterTemplate(BaseModel):
    """
    Static description of a monster, at its base (unscaled) strength.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    floor_number: int = Field(
        ge=1,
        description="The base floor the monster guards.",
    )
    health: int = Field(ge=1)
    mana: int = Field(ge=0)
    armor: int = Field(ge=0)
    crit_chance: float = Field(0, ge=0, le=100)
    weapons: list[str] = Field(default_factory=list)
    abilities: list[str] = Field(default_factory=list)
    spells: list[str] = Field(default_factory=list)
    emoji: str = "👹"


def spawn_monster(template: MonsterTemplate, floor: int, **overrides: Any) -> Combatant:
    """
    Instantiate a monster combatant with stats scaled for the floor.

    Health, mana and armor scale; crit chance does not.

    Args:
        template (MonsterTemplate):
            The monster's base stats.
        floor (int):
            The floor the battle takes place on.
        **overrides:
            Extra Combatant fields, e.g. a battle-specific id.

    Returns:
        Combatant:
            The monster at full health and mana.
    """
    health = scale_stat(template.health, floor)
    mana = scale_stat(template.mana, floor)
    fields: dict[str, Any] = {
        "id": template.id,
        "name": template.name,
        "current_health": health,
        "max_health": health,
        "current_mana": mana,
        "max_mana": mana,
        "armor": scale_stat(template.armor, floor),
        "crit_chance": template.crit_chance,
    }
    fields.update(overrides)
    return Combatant(**fields)


def create_combatant(
    id: str,
    name: str,
    health: int,
    mana: int,
    armor: int = 0,
    crit_chance: float = 0,
) -> Combatant:
    """Build a combatant at full health and mana, e.g. a hero at battle start."""
    return Combatant(
        id=id,
        name=name,
        current_health=health,
        max_health=health,
        current_mana=mana,
        max_mana=mana,
        armor=armor,
        crit_chance=crit_chance,
    )
