"""Resolved, read-only facts for a single damage calculation."""

from dataclasses import dataclass
from typing import Optional, Tuple

from sulcalc.damage.stats import CombatantStats, calculate_stats
from sulcalc.game.data.game_data import GameData
from sulcalc.game.data.move import Move
from sulcalc.game.data.pokemon import Pokemon
from sulcalc.game.schema.combatant import AttackMove, Combatant
from sulcalc.game.schema.enums import Generation, Stat, Weather
from sulcalc.game.schema.field_state import FieldState
from sulcalc.game.schema.object_name_normalizer import normalize_name

# Before the physical/special split, a move's type decided its category.
PHYSICAL_TYPES = frozenset(
    {
        "Normal",
        "Fighting",
        "Flying",
        "Poison",
        "Ground",
        "Rock",
        "Bug",
        "Ghost",
        "Steel",
    }
)

MOLD_BREAKER_ABILITIES = frozenset({"moldbreaker", "teravolt", "turboblaze"})
UNBREAKABLE_ABILITIES = frozenset({"prismarmor", "shadowshield", "fullmetalbody"})


@dataclass(frozen=True)
class DamageContext:
    """Everything a modifier stage may read. Stages never mutate it.

    Ability and item ids are normalized (see `normalize_name`); abilities and
    items that did not exist in the context's generation are blank, and a defender
    ability suppressed by Mold Breaker is blank too.
    """

    gen: Generation
    attacker: Combatant
    defender: Combatant
    move: AttackMove
    field: FieldState
    move_data: Move
    attacker_species: Pokemon
    defender_species: Pokemon
    attacker_stats: CombatantStats
    defender_stats: CombatantStats
    attacker_ability: str
    defender_ability: str
    attacker_item: str
    defender_item: str
    category: str
    type_factors: Tuple[float, ...]

    @property
    def move_type(self) -> str:
        return self.move_data.type

    @property
    def is_physical(self) -> bool:
        return self.category == "Physical"

    @property
    def is_special(self) -> bool:
        return self.category == "Special"

    @property
    def is_critical(self) -> bool:
        return self.move.critical

    @property
    def is_spread(self) -> bool:
        return self.field.multi_battle and self.move_data.is_spread

    @property
    def effectiveness(self) -> float:
        total = 1.0
        for factor in self.type_factors:
            total *= factor
        return total

    @property
    def is_stab(self) -> bool:
        return self.move_type in self.attacker_species.types

    @property
    def attack_stat(self) -> Stat:
        return Stat.ATK if self.is_physical else Stat.SPA

    @property
    def defense_stat(self) -> Stat:
        return Stat.DEF if self.is_physical else Stat.SPD

    @property
    def attacker_max_hp(self) -> int:
        return self.attacker_stats.hp

    @property
    def defender_max_hp(self) -> int:
        return self.defender_stats.hp

    def attacker_hp(self) -> int:
        if self.attacker.current_hp is None:
            return self.attacker_max_hp
        return self.attacker.current_hp

    def defender_hp(self) -> int:
        if self.defender.current_hp is None:
            return self.defender_max_hp
        return self.defender.current_hp

    def attacker_grounded(self) -> bool:
        return self._grounded(
            self.attacker_species, self.attacker_ability, self.attacker_item
        )

    def defender_grounded(self) -> bool:
        return self._grounded(
            self.defender_species, self.defender_ability, self.defender_item
        )

    def _grounded(self, species: Pokemon, ability: str, item: str) -> bool:
        if "Flying" in species.types or ability == "levitate":
            return False
        return not (item == "airballoon" and self.gen >= Generation.B2W2)


def _ability_for_gen(game_data: GameData, name: str, gen: Generation) -> str:
    if not name or gen < Generation.ADV:
        return ""
    ability = game_data.get_ability(name)
    return normalize_name(ability.name) if ability.available_in(gen) else ""


def _item_for_gen(game_data: GameData, name: Optional[str], gen: Generation) -> str:
    if not name:
        return ""
    item = game_data.get_item(name)
    return normalize_name(item.name) if item.available_in(gen) else ""


def build_context(
    attacker: Combatant,
    defender: Combatant,
    move: AttackMove,
    field: FieldState,
    game_data: GameData,
) -> DamageContext:
    """Resolve the data records and derived facts a pipeline needs.

    Raises:
        ValueError: If a species, move, ability, item or nature is unknown
    """
    gen = field.gen
    move_data = game_data.get_move(move.name)
    attacker_species = game_data.get_pokemon(attacker.species)
    defender_species = game_data.get_pokemon(defender.species)

    attacker_ability = _ability_for_gen(
        game_data, attacker.ability or attacker_species.default_ability, gen
    )
    defender_ability = _ability_for_gen(
        game_data, defender.ability or defender_species.default_ability, gen
    )
    if (
        attacker_ability in MOLD_BREAKER_ABILITIES
        and defender_ability not in UNBREAKABLE_ABILITIES
    ):
        defender_ability = ""

    attacker_item = _item_for_gen(game_data, attacker.item, gen)
    defender_item = _item_for_gen(game_data, defender.item, gen)

    category = move_data.category
    if gen <= Generation.ADV and category != "Status":
        category = "Physical" if move_data.type in PHYSICAL_TYPES else "Special"

    type_chart = game_data.get_type_chart()
    type_factors = []
    for defender_type in defender_species.types:
        factor = type_chart.get_effectiveness(move_data.type, defender_type, gen)
        if (
            factor == 0.0
            and attacker_ability == "scrappy"
            and defender_type == "Ghost"
            and move_data.type in {"Normal", "Fighting"}
        ):
            factor = 1.0
        # Delta Stream removes Flying-type weaknesses.
        if (
            factor > 1.0
            and defender_type == "Flying"
            and gen >= Generation.ORAS
            and field.get_weather() == Weather.STRONG_WINDS
        ):
            factor = 1.0
        type_factors.append(factor)

    attacker_nature = (
        game_data.get_nature(attacker.nature) if attacker.nature else None
    )
    defender_nature = (
        game_data.get_nature(defender.nature) if defender.nature else None
    )

    return DamageContext(
        gen=gen,
        attacker=attacker,
        defender=defender,
        move=move,
        field=field,
        move_data=move_data,
        attacker_species=attacker_species,
        defender_species=defender_species,
        attacker_stats=calculate_stats(
            attacker_species, attacker, attacker_nature, gen
        ),
        defender_stats=calculate_stats(
            defender_species, defender, defender_nature, gen
        ),
        attacker_ability=attacker_ability,
        defender_ability=defender_ability,
        attacker_item=attacker_item,
        defender_item=defender_item,
        category=category,
        type_factors=tuple(type_factors),
    )
