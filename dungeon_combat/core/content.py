import json
from collections.abc import Callable
from functools import lru_cache
from pathlib import Path
from typing import Any

from catchery import log_warning
from pydantic import BaseModel, ValidationError

from dungeon_combat.actions.ability import Ability, fallback_ability
from dungeon_combat.actions.spell import Spell, fallback_spell
from dungeon_combat.combat.combatant import MonsterTemplate
from dungeon_combat.effects.status_effect import StatusEffectDefinition
from dungeon_combat.items.weapon import Weapon, fallback_weapon

from .constants import MONSTER_FLOOR_LOOP
from .error_handling import ContentError
from .logging import log_debug

DEFAULT_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


class ContentRepository:
    """
    One-stop registry for the static data tables, with by-id access.

    The tables are read-only for the repository's lifetime and every
    definition is a frozen model, so concurrent battles can share one
    repository without synchronization.

    Weapon, ability and spell lookups are total: an unknown id logs a
    data-integrity warning and returns a fallback definition. Status effect
    lookups return None for unknown ids, silently.
    """

    weapons: dict[str, Weapon]
    abilities: dict[str, Ability]
    spells: dict[str, Spell]
    status_effects: dict[str, StatusEffectDefinition]
    monsters: dict[str, MonsterTemplate]

    def __init__(self, data_dir: Path | None = None) -> None:
        """
        Initialize the ContentRepository.

        Args:
            data_dir (Path | None):
                The directory containing the data files. Defaults to the
                tables shipped with the package.

        """
        self.data_dir = data_dir or DEFAULT_DATA_DIR
        self.reload(self.data_dir)

    def reload(self, root: Path) -> None:
        """
        (Re)load all JSON assets from disk.

        Args:
            root (Path):
                The directory containing data files to load.
        """
        self.status_effects = _load_json_file(
            root / "status_effects.json",
            _loader(StatusEffectDefinition),
            "status effects",
        )
        self.weapons = _load_json_file(
            root / "weapons.json",
            _loader(Weapon),
            "weapons",
        )
        self.abilities = _load_json_file(
            root / "abilities.json",
            _loader(Ability),
            "abilities",
        )
        self.spells = _load_json_file(
            root / "spells.json",
            _loader(Spell),
            "spells",
        )
        self.monsters = _load_json_file(
            root / "monsters.json",
            _loader(MonsterTemplate),
            "monsters",
        )

    @classmethod
    def from_tables(
        cls,
        weapons: list[Weapon] | None = None,
        abilities: list[Ability] | None = None,
        spells: list[Spell] | None = None,
        status_effects: list[StatusEffectDefinition] | None = None,
        monsters: list[MonsterTemplate] | None = None,
    ) -> "ContentRepository":
        """
        Build a repository from in-memory definitions instead of files.

        Returns:
            ContentRepository:
                A repository holding exactly the given definitions.
        """
        repo = cls.__new__(cls)
        repo.data_dir = None
        repo.weapons = _index(weapons or [], "weapon")
        repo.abilities = _index(abilities or [], "ability")
        repo.spells = _index(spells or [], "spell")
        repo.status_effects = _index(status_effects or [], "status effect")
        repo.monsters = _index(monsters or [], "monster")
        return repo

    def get_weapon(self, weapon_id: str) -> Weapon:
        """Get a weapon by id, or the basic fallback attack if not found."""
        weapon = self.weapons.get(weapon_id)
        if weapon is None:
            log_warning(
                f"Weapon '{weapon_id}' not found, using fallback attack.",
                {"weapon_id": weapon_id},
            )
            return fallback_weapon(weapon_id)
        return weapon

    def get_ability(self, ability_id: str) -> Ability:
        """Get an ability by id, or an inert fallback if not found."""
        ability = self.abilities.get(ability_id)
        if ability is None:
            log_warning(
                f"Ability '{ability_id}' not found, it will have no effect.",
                {"ability_id": ability_id},
            )
            return fallback_ability(ability_id)
        return ability

    def get_spell(self, spell_id: str) -> Spell:
        """Get a spell by id, or the fallback bolt if not found."""
        spell = self.spells.get(spell_id)
        if spell is None:
            log_warning(
                f"Spell '{spell_id}' not found, using fallback spell.",
                {"spell_id": spell_id},
            )
            return fallback_spell(spell_id)
        return spell

    def get_status_effect(self, effect_id: str) -> StatusEffectDefinition | None:
        """Get a status effect definition by id, or None if not found."""
        return self.status_effects.get(effect_id)

    def get_monster(self, monster_id: str) -> MonsterTemplate | None:
        """Get a monster template by id, or None if not found."""
        return self.monsters.get(monster_id)

    def get_monster_for_floor(self, floor: int) -> MonsterTemplate | None:
        """
        Get the monster guarding a floor.

        Past the last base floor the monsters loop, so floor 21 is guarded by
        the floor 1 monster (with scaled stats).

        Args:
            floor (int):
                The floor index.

        Returns:
            MonsterTemplate | None:
                The template of the floor's monster, or None if no monster
                guards the looped base floor.
        """
        base_floor = ((floor - 1) % MONSTER_FLOOR_LOOP) + 1
        return next(
            (m for m in self.monsters.values() if m.floor_number == base_floor),
            None,
        )


@lru_cache(maxsize=1)
def load_default_content() -> ContentRepository:
    """Load the data tables shipped with the package, once per process."""
    return ContentRepository()


def _index(entries: list[Any], description: str) -> dict[str, Any]:
    """Index definitions by id, rejecting duplicates."""
    indexed: dict[str, Any] = {}
    for entry in entries:
        if entry.id in indexed:
            raise ContentError(f"Duplicate {description} id: {entry.id}")
        indexed[entry.id] = entry
    return indexed


def _loader(model: type[BaseModel]) -> Callable[[list[dict]], dict[str, Any]]:
    """Build a loader that validates each entry with the given model."""

    def load(data: list[dict]) -> dict[str, Any]:
        return _index([model.model_validate(entry) for entry in data], model.__name__)

    load.__name__ = f"load_{model.__name__.lower()}"
    return load


def _load_json_file(
    filepath: Path,
    loader_func: Callable[[list[dict]], dict[str, Any]],
    description: str,
) -> dict[str, Any]:
    """Helper to load and validate JSON files"""
    try:
        log_debug(f"Loading {description} using {loader_func.__name__}...")
        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")
        if not filepath.is_file():
            raise ValueError(f"Not a file: {filepath}")
        with open(filepath, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ValueError(f"Expected list in {filepath}, got {type(data).__name__}")
        return loader_func(data)
    except (json.JSONDecodeError, FileNotFoundError, ValidationError, ValueError) as e:
        raise ContentError(f"File {filepath} raised an error: {e}") from e
