"""
Action effect generator for the combat engine.

Turns the action a combatant chose for the turn into the list of primitive
effects it produces. Generation reads the combatants and the data tables and
consumes rolls from the turn's random source, but never mutates anything.
"""

from random import Random

from typing_extensions import assert_never

from dungeon_combat.actions.ability import (
    AbilityEffectCalculator,
    calculate_ability_effects,
    roll_chance,
)
from dungeon_combat.actions.base_action import Action
from dungeon_combat.combat.combatant import Combatant
from dungeon_combat.core.constants import (
    DEATH_PREVENTION_ABILITY_ID,
    DEATH_PREVENTION_HEALTH_RESTORE,
    DEATH_PREVENTION_MANA_RESTORE,
    DEFENSIVE_ABILITY_IDS,
    FALLBACK_SPELL_DAMAGE,
    FALLBACK_WEAPON_DAMAGE,
    SELF_DAMAGE_ABILITIES,
    ActionKind,
    DamageSource,
    WeaponCategory,
)
from dungeon_combat.core.content import ContentRepository
from dungeon_combat.core.logging import log_debug
from dungeon_combat.core.scaling import scale_weapon_damage

from .effect import (
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
from .status_effect import StatusEffectChance


def generate_effects(
    action: Action,
    attacker: Combatant,
    defender: Combatant,
    floor: int,
    content: ContentRepository,
    rng: Random,
    ability_calculator: AbilityEffectCalculator = calculate_ability_effects,
) -> list[Effect]:
    """
    Generate the effects of a combatant's action for this turn.

    Args:
        action (Action):
            The action chosen by the attacker.
        attacker (Combatant):
            The combatant performing the action.
        defender (Combatant):
            The opposing combatant.
        floor (int):
            The floor the battle takes place on, used to scale weapon damage.
        content (ContentRepository):
            The data tables.
        rng (Random):
            The random source of the turn.
        ability_calculator (AbilityEffectCalculator):
            Computes the effects of abilities that are neither defensive nor
            death prevention.

    Returns:
        list[Effect]:
            The generated effects, possibly empty.
    """
    match action.kind:
        case ActionKind.WEAPON:
            effects = _weapon_effects(action.id, attacker, floor, content, rng)
        case ActionKind.ABILITY:
            effects = _ability_effects(
                action.id, attacker, defender, content, rng, ability_calculator
            )
        case ActionKind.SPELL:
            effects = _spell_effects(action.id, attacker, content, rng)
        case _:
            assert_never(action.kind)

    log_debug(
        f"{attacker.id} uses {action}",
        {"effects": [str(e.kind) for e in effects]},
    )
    return effects


def _status_applications(
    entries: list[StatusEffectChance],
    source_id: str,
    content: ContentRepository,
    rng: Random,
) -> list[Effect]:
    """Roll each inflictable status effect independently."""
    applications: list[Effect] = []
    for entry in entries:
        definition = content.get_status_effect(entry.effect_id)
        if definition is None:
            continue
        if roll_chance(rng, entry.chance):
            applications.append(
                StatusEffectApplication(
                    source_id=source_id,
                    effect=definition,
                    target=entry.target,
                )
            )
    return applications


def _weapon_effects(
    weapon_id: str,
    attacker: Combatant,
    floor: int,
    content: ContentRepository,
    rng: Random,
) -> list[Effect]:
    weapon = content.get_weapon(weapon_id)
    if weapon.fallback:
        return [
            DamageEffect(
                source_id=attacker.id,
                amount=FALLBACK_WEAPON_DAMAGE,
                source=DamageSource.WEAPON,
                category=WeaponCategory.MELEE,
                origin_id=weapon_id,
            )
        ]

    effects: list[Effect] = []
    damage = scale_weapon_damage(weapon.damage, floor)
    if roll_chance(rng, attacker.crit_chance):
        damage *= 2
        effects.append(
            CriticalHitEffect(
                source_id=attacker.id,
                attacker_name=attacker.name,
                weapon_name=weapon.name,
            )
        )
    effects.append(
        DamageEffect(
            source_id=attacker.id,
            amount=damage,
            source=DamageSource.WEAPON,
            category=weapon.category,
            origin_id=weapon.id,
        )
    )
    if weapon.health_cost > 0:
        effects.append(
            SelfDamageEffect(
                source_id=attacker.id,
                amount=weapon.health_cost,
                origin_id=weapon.id,
            )
        )
    effects.extend(_status_applications(weapon.effects, attacker.id, content, rng))
    return effects


def _ability_effects(
    ability_id: str,
    attacker: Combatant,
    defender: Combatant,
    content: ContentRepository,
    rng: Random,
    ability_calculator: AbilityEffectCalculator,
) -> list[Effect]:
    ability = content.get_ability(ability_id)
    if ability.fallback:
        return []

    effects: list[Effect] = []
    if ability.mana_cost > 0:
        effects.append(ManaCostEffect(source_id=attacker.id, amount=ability.mana_cost))

    if ability.id in DEFENSIVE_ABILITY_IDS:
        effects.append(
            DefensiveAbilityEffect(source_id=attacker.id, ability_id=ability.id)
        )
    elif ability.id == DEATH_PREVENTION_ABILITY_ID:
        effects.append(
            DeathPreventionEffect(
                source_id=attacker.id,
                ability_id=ability.id,
                ability_name=ability.name,
                health_restore=ability.health_restore
                or DEATH_PREVENTION_HEALTH_RESTORE,
                mana_restore=ability.mana_restore or DEATH_PREVENTION_MANA_RESTORE,
            )
        )
    else:
        effects.extend(
            ability_calculator(
                ability, attacker, defender, content.get_status_effect, rng
            )
        )
        self_damage = SELF_DAMAGE_ABILITIES.get(ability.id, 0)
        if self_damage > 0:
            effects.append(
                SelfDamageEffect(
                    source_id=attacker.id,
                    amount=self_damage,
                    origin_id=ability.id,
                )
            )
    return effects


def _spell_effects(
    spell_id: str,
    attacker: Combatant,
    content: ContentRepository,
    rng: Random,
) -> list[Effect]:
    spell = content.get_spell(spell_id)
    if spell.fallback:
        return [
            DamageEffect(
                source_id=attacker.id,
                amount=FALLBACK_SPELL_DAMAGE,
                source=DamageSource.SPELL,
                origin_id=spell_id,
            )
        ]

    effects: list[Effect] = []
    if spell.mana_cost > 0:
        effects.append(ManaCostEffect(source_id=attacker.id, amount=spell.mana_cost))
    if spell.health_cost > 0:
        effects.append(
            SelfDamageEffect(
                source_id=attacker.id,
                amount=spell.health_cost,
                origin_id=spell.id,
            )
        )
    if spell.damage > 0:
        effects.append(
            DamageEffect(
                source_id=attacker.id,
                amount=spell.damage,
                source=DamageSource.SPELL,
                origin_id=spell.id,
            )
        )
    if spell.healing > 0:
        effects.append(
            HealingEffect(
                source_id=attacker.id,
                amount=spell.healing,
                origin_id=spell.id,
            )
        )
    effects.extend(_status_applications(spell.effects, attacker.id, content, rng))
    return effects
