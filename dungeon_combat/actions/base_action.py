"""
Base action module for the combat engine.

An Action is the single choice a combatant makes for a turn: use a weapon,
an ability or a spell, identified by the id it has in the data tables.
"""

from pydantic import BaseModel, ConfigDict, Field

from dungeon_combat.core.constants import ActionKind


class Action(BaseModel):
    """
    A combatant's chosen action for one turn. Immutable for that turn.
    """

    model_config = ConfigDict(frozen=True)

    kind: ActionKind = Field(
        description="Whether the action uses a weapon, an ability or a spell.",
    )
    id: str = Field(
        min_length=1,
        description="The weapon, ability or spell id in the data tables.",
    )

    @classmethod
    def weapon(cls, weapon_id: str) -> "Action":
        return cls(kind=ActionKind.WEAPON, id=weapon_id)

    @classmethod
    def ability(cls, ability_id: str) -> "Action":
        return cls(kind=ActionKind.ABILITY, id=ability_id)

    @classmethod
    def spell(cls, spell_id: str) -> "Action":
        return cls(kind=ActionKind.SPELL, id=spell_id)

    def __str__(self) -> str:
        return f"{self.kind.emoji} {self.kind.display_name}({self.id})"
