from pydantic import BaseModel, ConfigDict, Field

from dungeon_combat.core.constants import (
    FALLBACK_WEAPON_DAMAGE,
    WeaponCategory,
)
from dungeon_combat.effects.status_effect import StatusEffectChance


class Weapon(BaseModel):
    """
    Represents a weapon that can be used by combatants.

    Weapon damage scales with the floor and can be doubled by a critical hit.
    Some weapons cost their wielder health and some can inflict status effects.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(
        description="Unique identifier of the weapon.",
    )
    name: str = Field(
        description="The name of the weapon.",
    )
    category: WeaponCategory = Field(
        WeaponCategory.MELEE,
        description="Melee, ranged or magic; dodge heals more against ranged.",
    )
    rarity: str = Field(
        "common",
        description="The rarity tier of the weapon.",
    )
    damage: int = Field(
        ge=0,
        description="Base damage before floor scaling.",
    )
    health_cost: int = Field(
        0,
        ge=0,
        description="Health the wielder loses every time the weapon is used.",
    )
    effects: list[StatusEffectChance] = Field(
        default_factory=list,
        description="Status effects the weapon can inflict.",
    )
    description: str = ""
    emoji: str = "⚔️"
    fallback: bool = Field(
        False,
        description="True for the stand-in returned for unknown weapon ids.",
    )


def fallback_weapon(weapon_id: str) -> Weapon:
    """
    Build the basic attack used when a weapon id is not in the data tables.

    Args:
        weapon_id (str):
            The unknown weapon id.

    Returns:
        Weapon:
            A flat, unscaled melee attack.
    """
    return Weapon(
        id=weapon_id,
        name="Basic Attack",
        category=WeaponCategory.MELEE,
        damage=FALLBACK_WEAPON_DAMAGE,
        fallback=True,
    )
