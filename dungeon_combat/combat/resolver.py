"""
Simultaneous turn resolver for the combat engine.

Both combatants act at the same time. The resolver generates both effect
lists, resolves counters, folds damage after negation and armor into the
turn totals, applies counter retaliation, checks death prevention, attaches
the new status effects and finally ticks every active status effect. It
returns a TurnResult and never mutates the combatants it is given.
"""

from collections.abc import Sequence
from datetime import datetime, timezone
from random import Random

from typing_extensions import assert_never

from dungeon_combat.actions.ability import (
    AbilityEffectCalculator,
    calculate_ability_effects,
)
from dungeon_combat.actions.base_action import Action
from dungeon_combat.core.constants import CounterType, EffectTarget, Side
from dungeon_combat.core.content import ContentRepository, load_default_content
from dungeon_combat.core.error_handling import require_floor, require_model
from dungeon_combat.core.logging import log_debug
from dungeon_combat.effects.effect import (
    CriticalHitEffect,
    DamageEffect,
    DeathPreventionEffect,
    DefensiveAbilityEffect,
    Effect,
    HealingEffect,
    ManaCostEffect,
    SelfDamageEffect,
    StatusEffectApplication,
)
from dungeon_combat.effects.effect_generator import generate_effects
from dungeon_combat.effects.effect_manager import (
    CombatModifiers,
    apply_status_effect,
    tick_status_effects,
)

from .combatant import Combatant
from .counters import Counter, dodge_healing, resolve_counters
from .death_prevention import check_death_prevention
from .turn_result import NegationRecord, TurnResult

_PREFIX = {Side.PLAYER: "player", Side.MONSTER: "monster"}


def _add(result: TurnResult, side: Side, field: str, amount: int) -> None:
    """Add an amount to one side's total, e.g. ``player_damage``."""
    name = f"{_PREFIX[side]}_{field}"
    setattr(result, name, getattr(result, name) + amount)


def _fold_effects(
    result: TurnResult,
    side: Side,
    effects: Sequence[Effect],
    opponent: Combatant,
    opponent_counters: Sequence[Counter],
) -> None:
    """
    Fold one side's effects into the turn totals.

    Damage goes to the opponent, after negation and armor. Costs, self damage
    and healing go to the acting side and are never negated.
    """
    target = side.opponent
    for effect in effects:
        match effect:
            case DamageEffect():
                negating = next(
                    (c for c in opponent_counters if c.negates_damage(effect)), None
                )
                if negating is not None:
                    result.negations.append(
                        NegationRecord(
                            target=target,
                            source=effect.source,
                            amount=effect.amount,
                            origin_id=effect.origin_id,
                            message=(
                                f"{opponent.name}'s {negating.type.display_name} "
                                f"negated {effect.amount} "
                                f"{effect.source.display_name.lower()} damage"
                            ),
                        )
                    )
                    log_debug(
                        f"{effect.source} damage to {target} negated",
                        {"counter": negating.type, "amount": effect.amount},
                    )
                    continue
                damage = effect.amount
                if not effect.ignore_armor:
                    damage = max(0, damage - opponent.armor)
                _add(result, target, "damage", damage)
            case ManaCostEffect():
                _add(result, side, "mana_cost", effect.amount)
            case SelfDamageEffect():
                _add(result, side, "damage", effect.amount)
            case HealingEffect():
                _add(result, side, "healing", effect.amount)
            case CriticalHitEffect():
                result.critical_hits.append(
                    f"{effect.attacker_name} scored a critical hit "
                    f"with {effect.weapon_name}!"
                )
            case (
                StatusEffectApplication()
                | DefensiveAbilityEffect()
                | DeathPreventionEffect()
            ):
                # Handled by the later steps of the turn.
                pass
            case _:
                assert_never(effect)


def _apply_counters(
    result: TurnResult,
    side: Side,
    holder: Combatant,
    counters: Sequence[Counter],
    opponent_effects: Sequence[Effect],
) -> None:
    """Apply the retaliation damage and dodge healing of one side's counters."""
    for counter in counters:
        if counter.counter_damage > 0:
            _add(result, side.opponent, "damage", counter.counter_damage)
            result.messages.append(
                f"{holder.name} used {counter.type.display_name} "
                f"and dealt {counter.counter_damage} damage!"
            )
        elif counter.type == CounterType.DODGE:
            healing = dodge_healing(opponent_effects)
            _add(result, side, "healing", healing)
            result.messages.append(
                f"{holder.name} used Dodge and healed {healing} health!"
            )


def resolve_turn(
    attacker: Combatant,
    defender: Combatant,
    attacker_action: Action,
    defender_action: Action,
    floor: int,
    content: ContentRepository | None = None,
    rng: Random | None = None,
    now: datetime | None = None,
    ability_calculator: AbilityEffectCalculator = calculate_ability_effects,
) -> TurnResult:
    """
    Resolve one simultaneous turn between the player and the monster.

    Args:
        attacker (Combatant):
            The player-controlled combatant.
        defender (Combatant):
            The monster.
        attacker_action (Action):
            The player's action for the turn.
        defender_action (Action):
            The monster's action for the turn.
        floor (int):
            The floor index, 1 or higher.
        content (ContentRepository | None):
            The data tables. Defaults to the tables shipped with the package.
        rng (Random | None):
            The random source for crit and status effect rolls. Defaults to a
            fresh, unseeded generator.
        now (datetime | None):
            Timestamp recorded on newly attached status effects. Defaults to
            the current UTC time.
        ability_calculator (AbilityEffectCalculator):
            Computes the effects of offensive, healing and utility abilities.

    Returns:
        TurnResult:
            The aggregated outcome of the turn. Damage is the damage each
            side receives.

    Raises:
        CombatStateError: If a combatant or action is not a valid record.
        InvalidFloorError: If the floor is not an integer of at least 1.
    """
    player: Combatant = require_model(attacker, Combatant, "attacker")
    monster: Combatant = require_model(defender, Combatant, "defender")
    player_action: Action = require_model(attacker_action, Action, "attacker_action")
    monster_action: Action = require_model(defender_action, Action, "defender_action")
    floor = require_floor(floor, {"attacker": player.id, "defender": monster.id})
    content = content or load_default_content()
    rng = rng or Random()
    now = now or datetime.now(timezone.utc)

    combatants = {Side.PLAYER: player, Side.MONSTER: monster}
    result = TurnResult()

    # Step 1: resolver-local modifiers, discarded with the result.
    modifiers = {side: CombatModifiers() for side in Side}

    # Step 2: generate both effect lists.
    effects = {
        Side.PLAYER: generate_effects(
            player_action, player, monster, floor, content, rng, ability_calculator
        ),
        Side.MONSTER: generate_effects(
            monster_action, monster, player, floor, content, rng, ability_calculator
        ),
    }

    # Step 3: counters.
    counters = {side: resolve_counters(effects[side]) for side in Side}
    log_debug(
        "Counters resolved",
        {str(side): [str(c.type) for c in counters[side]] for side in Side},
    )

    # Step 4: damage, costs and healing.
    for side in Side:
        _fold_effects(
            result,
            side,
            effects[side],
            combatants[side.opponent],
            counters[side.opponent],
        )

    # Step 5: counter retaliation.
    for side in Side:
        _apply_counters(
            result, side, combatants[side], counters[side], effects[side.opponent]
        )

    # Step 6: death prevention.
    for side in Side:
        combatant = combatants[side]
        outcome = check_death_prevention(
            combatant, result.damage_for(side), effects[side]
        )
        if outcome.triggered:
            setattr(result, f"{_PREFIX[side]}_damage", outcome.damage)
            setattr(result, f"{_PREFIX[side]}_death_prevented", True)
            _add(result, side, "healing", outcome.health_restore)
            _add(result, side, "mana_restore", outcome.mana_restore)
            result.messages.extend(outcome.messages)

    # Step 7: attach the new status effects.
    status_effects = {
        side: list(combatants[side].active_status_effects) for side in Side
    }
    for side in Side:
        for effect in effects[side]:
            if not isinstance(effect, StatusEffectApplication):
                continue
            target = side if effect.target == EffectTarget.SELF else side.opponent
            status_effects[target] = apply_status_effect(
                status_effects[target], effect.effect, now
            )

    # Step 8: tick every active status effect.
    for side in Side:
        tick = tick_status_effects(
            combatants[side], content.get_status_effect, status_effects[side]
        )
        _add(result, side, "damage", tick.damage)
        _add(result, side, "healing", tick.healing)
        _add(result, side, "mana_restore", tick.mana_restore)
        result.messages.extend(tick.messages)
        setattr(result, f"{_PREFIX[side]}_transitions", tick.transitions)
        modifiers[side] = tick.modifiers
        setattr(result, f"{_PREFIX[side]}_status_effects", tick.remaining_effects)

    result.player_modifiers = modifiers[Side.PLAYER]
    result.monster_modifiers = modifiers[Side.MONSTER]

    log_debug(
        "Turn resolved",
        {
            "player_damage": result.player_damage,
            "monster_damage": result.monster_damage,
            "negations": len(result.negations),
        },
    )
    return result
