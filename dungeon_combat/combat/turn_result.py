"""
Turn result module for the combat engine.

The TurnResult is the complete outcome of one simultaneous turn. The engine
proposes it; the caller applies it to its own combatant records, either by
hand or with ``apply_turn_result``.
"""

from pydantic import BaseModel, Field

from dungeon_combat.core.constants import DamageSource, Side
from dungeon_combat.effects.effect_manager import (
    CombatModifiers,
    TransitionInstruction,
)
from dungeon_combat.effects.status_effect import AppliedStatusEffect


class NegationRecord(BaseModel):
    """Trace of a damage effect negated by a counter."""

    target: Side = Field(
        description="The side that would have received the damage.",
    )
    source: DamageSource
    amount: int
    origin_id: str = ""
    message: str = ""


class TurnResult(BaseModel):
    """
    The outcome of one turn, for both sides.

    Damage and mana cost are subtracted by the caller, healing and mana
    restore are added, clamped to the combatant's maximums. The status effect
    lists replace the combatants' current lists.
    """

    player_damage: int = 0
    monster_damage: int = 0
    player_mana_cost: int = 0
    monster_mana_cost: int = 0
    player_healing: int = 0
    monster_healing: int = 0
    player_mana_restore: int = 0
    monster_mana_restore: int = 0
    critical_hits: list[str] = Field(
        default_factory=list,
        description="Narrative messages for the critical hits of the turn.",
    )
    messages: list[str] = Field(default_factory=list)
    negations: list[NegationRecord] = Field(default_factory=list)
    player_death_prevented: bool = False
    monster_death_prevented: bool = False
    player_status_effects: list[AppliedStatusEffect] = Field(default_factory=list)
    monster_status_effects: list[AppliedStatusEffect] = Field(default_factory=list)
    player_modifiers: CombatModifiers = Field(default_factory=CombatModifiers)
    monster_modifiers: CombatModifiers = Field(default_factory=CombatModifiers)
    player_transitions: list[TransitionInstruction] = Field(
        default_factory=list,
        description="End-of-effect instructions for the player combatant.",
    )
    monster_transitions: list[TransitionInstruction] = Field(default_factory=list)

    @property
    def transitions(self) -> list[TransitionInstruction]:
        """Every transition of the turn, player side first."""
        return [*self.player_transitions, *self.monster_transitions]

    def damage_for(self, side: Side) -> int:
        return self.player_damage if side == Side.PLAYER else self.monster_damage

    def mana_cost_for(self, side: Side) -> int:
        return self.player_mana_cost if side == Side.PLAYER else self.monster_mana_cost

    def healing_for(self, side: Side) -> int:
        return self.player_healing if side == Side.PLAYER else self.monster_healing

    def mana_restore_for(self, side: Side) -> int:
        if side == Side.PLAYER:
            return self.player_mana_restore
        return self.monster_mana_restore

    def death_prevented_for(self, side: Side) -> bool:
        if side == Side.PLAYER:
            return self.player_death_prevented
        return self.monster_death_prevented

    def status_effects_for(self, side: Side) -> list[AppliedStatusEffect]:
        if side == Side.PLAYER:
            return self.player_status_effects
        return self.monster_status_effects

    def modifiers_for(self, side: Side) -> CombatModifiers:
        return self.player_modifiers if side == Side.PLAYER else self.monster_modifiers

    def transitions_for(self, side: Side) -> list[TransitionInstruction]:
        if side == Side.PLAYER:
            return self.player_transitions
        return self.monster_transitions
