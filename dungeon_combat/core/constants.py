"""
Constants and enumerations for the combat engine.

Defines the tuning values used by floor scaling, counters and death
prevention, together with the enumerations for action kinds, damage sources,
weapon categories and the other closed vocabularies of a combat turn.
"""

from enum import Enum

# === Floor scaling ===

# Floors at or below this index use the unscaled base stats.
SCALING_BASELINE_FLOOR = 20
# Stats grow by one step every this many floors past the baseline.
SCALING_STEP_FLOORS = 20
# Size of one scaling step, in percent.
SCALING_STEP_PERCENT = 10
# Scaling stops growing past this floor.
MAX_SCALING_FLOOR = 500
# Monster templates repeat every this many floors.
MONSTER_FLOOR_LOOP = 20

# === Fallbacks for unknown data-table ids ===

FALLBACK_WEAPON_DAMAGE = 1
FALLBACK_SPELL_DAMAGE = 2

# === Defensive abilities ===

COUNTER_ABILITY_ID = "counter"
SILENCE_ABILITY_ID = "silence"
DODGE_ABILITY_ID = "dodge"
DEATH_PREVENTION_ABILITY_ID = "accepting_fate"

DEFENSIVE_ABILITY_IDS = frozenset(
    {COUNTER_ABILITY_ID, SILENCE_ABILITY_ID, DODGE_ABILITY_ID}
)

COUNTER_DAMAGE = 2
SILENCE_DAMAGE = 3
DODGE_HEAL_VS_MELEE = 2
DODGE_HEAL_VS_RANGED = 3

DEATH_PREVENTION_HEALTH_RESTORE = 4
DEATH_PREVENTION_MANA_RESTORE = 4

# Abilities that hurt their user, with the health they cost.
SELF_DAMAGE_ABILITIES: dict[str, int] = {
    "body_boulder": 2,
    "sacrificial_unholiness": 3,
    "blood_magic": 1,
    "demonic_pact": 2,
    "soul_burn": 2,
}


class NiceEnum(Enum):
    """An enumeration that provides a nicer string representation."""

    def __str__(self) -> str:
        return self.name

    @property
    def display_name(self) -> str:
        return self.name.lower().replace("_", " ").capitalize()


class Side(NiceEnum):
    """The two sides of a battle."""

    PLAYER = "PLAYER"
    MONSTER = "MONSTER"

    @property
    def opponent(self) -> "Side":
        return Side.MONSTER if self == Side.PLAYER else Side.PLAYER


class ActionKind(NiceEnum):
    """Defines what a combatant chose to do this turn."""

    WEAPON = "WEAPON"
    ABILITY = "ABILITY"
    SPELL = "SPELL"

    @property
    def emoji(self) -> str:
        """Returns the emoji associated with this action kind."""
        return {
            ActionKind.WEAPON: "🗡️",
            ActionKind.ABILITY: "🔥",
            ActionKind.SPELL: "🌟",
        }.get(self, "❔")


class DamageSource(NiceEnum):
    """Defines where a damage effect came from. Counters negate by source."""

    WEAPON = "WEAPON"
    ABILITY = "ABILITY"
    SPELL = "SPELL"


class WeaponCategory(NiceEnum):
    """Defines the category of a weapon."""

    MELEE = "MELEE"
    RANGED = "RANGED"
    MAGIC = "MAGIC"


class EffectKind(NiceEnum):
    """Defines the kinds of primitive effects an action can generate."""

    DAMAGE = "DAMAGE"
    SELF_DAMAGE = "SELF_DAMAGE"
    MANA_COST = "MANA_COST"
    HEALING = "HEALING"
    CRITICAL_HIT = "CRITICAL_HIT"
    STATUS_EFFECT = "STATUS_EFFECT"
    DEFENSIVE_ABILITY = "DEFENSIVE_ABILITY"
    DEATH_PREVENTION = "DEATH_PREVENTION"


class EffectTarget(NiceEnum):
    """Defines who receives a status effect application."""

    OPPONENT = "OPPONENT"
    SELF = "SELF"


class EffectPolarity(NiceEnum):
    """Defines whether a status effect helps or hurts its host."""

    POSITIVE = "POSITIVE"
    NEGATIVE = "NEGATIVE"
    NEUTRAL = "NEUTRAL"
    SPECIAL = "SPECIAL"


class CounterType(NiceEnum):
    """Defines the defensive counters a combatant can declare."""

    COUNTER = "COUNTER"
    SILENCE = "SILENCE"
    DODGE = "DODGE"


class TransitionKind(NiceEnum):
    """Defines the combatant mutations the caller must apply after a turn."""

    DIVIDE_HEALTH = "DIVIDE_HEALTH"
