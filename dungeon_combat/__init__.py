"""
Turn resolution and status effect engine for a floor-progression dungeon
crawler.

Given the action chosen by each side of a one-on-one battle, the engine
computes the complete outcome of one simultaneous turn and returns it as a
TurnResult. The caller owns the combatant records and applies the result.
"""

from dungeon_combat.actions.base_action import Action
from dungeon_combat.combat.application import apply_turn_result
from dungeon_combat.combat.combatant import (
    Combatant,
    MonsterTemplate,
    create_combatant,
    spawn_monster,
)
from dungeon_combat.combat.resolver import resolve_turn
from dungeon_combat.combat.turn_result import NegationRecord, TurnResult
from dungeon_combat.core.constants import ActionKind, Side
from dungeon_combat.core.content import ContentRepository, load_default_content
from dungeon_combat.core.error_handling import (
    CombatEngineError,
    CombatStateError,
    ContentError,
    InvalidFloorError,
)
from dungeon_combat.core.logging import setup_logging
from dungeon_combat.core.scaling import scaling_factor
from dungeon_combat.effects.effect_manager import (
    CombatModifiers,
    TransitionInstruction,
)

__all__ = [
    "Action",
    "ActionKind",
    "CombatEngineError",
    "CombatModifiers",
    "CombatStateError",
    "Combatant",
    "ContentError",
    "ContentRepository",
    "InvalidFloorError",
    "MonsterTemplate",
    "NegationRecord",
    "Side",
    "TransitionInstruction",
    "TurnResult",
    "apply_turn_result",
    "create_combatant",
    "load_default_content",
    "resolve_turn",
    "scaling_factor",
    "setup_logging",
    "spawn_monster",
]
