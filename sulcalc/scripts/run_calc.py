"""Command line damage calculator.

Calculates every damage roll of one attack and logs the KO summary, e.g.:

    python -m sulcalc.scripts.run_calc --gen=7 --attacker=Heatran \
        --attacker_nature=Timid --attacker_evs=252,0,0,0,4,252 \
        --defender=Landorus-Therian --defender_nature=Impish \
        --defender_evs=252,0,216,0,24,16 --move="Lava Plume"

With --settings_dir, the generation, species and move of the last run are
remembered and used for any of those flags left out next time.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from absl import app, flags, logging

from sulcalc.damage.calculate import calculate
from sulcalc.damage.context import build_context
from sulcalc.damage.outcome import DamageOutcome, analyze
from sulcalc.game.data.game_data import GameData
from sulcalc.game.schema.combatant import (
    AttackMove,
    Combatant,
    EffortValues,
    IndividualValues,
)
from sulcalc.game.schema.enums import Generation, Terrain, Weather
from sulcalc.game.schema.field_state import FieldState
from sulcalc.store.settings_store import JsonFileStorage, SettingsStore

FLAGS = flags.FLAGS

SETTINGS_FILE = "settings.json"
SETTINGS_PREFIX = "sulcalc"
SAVE_ON = {"calculate": ["last.gen", "last.attacker", "last.defender", "last.move"]}

flags.DEFINE_string("gen", None, "Generation number or game, e.g. 7 or sm")
flags.DEFINE_string("attacker", None, "Attacking species")
flags.DEFINE_string("defender", None, "Defending species")
flags.DEFINE_string("move", None, "Move used by the attacker")

for _side in ("attacker", "defender"):
    flags.DEFINE_integer(f"{_side}_level", 100, f"Level of the {_side}")
    flags.DEFINE_list(
        f"{_side}_evs", "0,0,0,0,0,0", f"EVs of the {_side}, HP/Atk/Def/SpA/SpD/Spe"
    )
    flags.DEFINE_list(
        f"{_side}_ivs",
        "31,31,31,31,31,31",
        f"IVs of the {_side}, HP/Atk/Def/SpA/SpD/Spe",
    )
    flags.DEFINE_string(f"{_side}_nature", "Hardy", f"Nature of the {_side}")
    flags.DEFINE_string(
        f"{_side}_ability", "", f"Ability of the {_side} (default: first listed)"
    )
    flags.DEFINE_string(f"{_side}_item", None, f"Held item of the {_side}")

flags.DEFINE_integer("defender_hp", None, "Defender's current HP (default: full)")
flags.DEFINE_string("weather", "none", "Weather, e.g. rain or Delta Stream")
flags.DEFINE_string("terrain", "none", "Terrain, e.g. electric or Psychic Terrain")
flags.DEFINE_integer("hits", 1, "Number of identical hits to combine")
flags.DEFINE_bool("critical", False, "Whether the move lands a critical hit")
flags.DEFINE_bool("multi_battle", False, "Doubles or triples battle")
flags.DEFINE_string(
    "settings_dir",
    None,
    "Directory for remembered settings (default: nothing is remembered)",
)


def parse_spread(values: Sequence[str]) -> List[int]:
    """Parse six comma-separated flag values into integers.

    Raises:
        ValueError: If there are not exactly six integer values
    """
    if len(values) != 6:
        raise ValueError(f"Expected 6 values, got {len(values)}: {list(values)}")
    return [int(value) for value in values]


def make_combatant(
    species: str,
    level: int = 100,
    evs: Sequence[str] = ("0",) * 6,
    ivs: Sequence[str] = ("31",) * 6,
    nature: str = "Hardy",
    ability: str = "",
    item: Optional[str] = None,
    current_hp: Optional[int] = None,
) -> Combatant:
    """Build a Combatant from raw flag values."""
    return Combatant(
        species,
        level=level,
        evs=EffortValues.from_list(parse_spread(evs)),
        ivs=IndividualValues.from_list(parse_spread(ivs)),
        nature=nature,
        ability=ability,
        item=item or None,
        current_hp=current_hp,
    )


def resolve_inputs(
    given: Dict[str, Optional[str]], remembered: Dict[str, Any]
) -> Dict[str, str]:
    """Fill missing gen/attacker/defender/move values from remembered ones.

    Raises:
        app.UsageError: If a value is neither given nor remembered
    """
    resolved = {}
    for name, value in given.items():
        if value is None:
            value = remembered.get(name)
        if value is None:
            raise app.UsageError(f"--{name} is required")
        resolved[name] = str(value)
    return resolved


def run_calc(
    attacker: Combatant,
    defender: Combatant,
    move: AttackMove,
    field: FieldState,
    hits: int = 1,
) -> DamageOutcome:
    """Calculate the rolls of one attack and summarize the KO odds."""
    game_data = GameData()
    rolls = calculate(attacker, defender, move, field, game_data)
    context = build_context(attacker, defender, move, field, game_data)
    return analyze(
        rolls,
        defender_max_hp=context.defender_max_hp,
        defender_hp=context.defender_hp(),
        hits=hits,
    )


def main(argv: List[str]) -> None:
    """Entry point for the script."""
    logging.set_verbosity(logging.INFO)

    store = None
    remembered: Dict[str, Any] = {}
    if FLAGS.settings_dir:
        store = SettingsStore(
            save_on=SAVE_ON,
            prefix=SETTINGS_PREFIX,
            storage=JsonFileStorage(Path(FLAGS.settings_dir) / SETTINGS_FILE),
        )
        remembered = store.hydrate().get("last", {})

    inputs = resolve_inputs(
        {
            "gen": FLAGS.gen,
            "attacker": FLAGS.attacker,
            "defender": FLAGS.defender,
            "move": FLAGS.move,
        },
        remembered,
    )

    try:
        gen = Generation.from_name(inputs["gen"])
        field = FieldState(
            gen=gen,
            weather=Weather.from_name(FLAGS.weather),
            terrain=Terrain.from_name(FLAGS.terrain),
            multi_battle=FLAGS.multi_battle,
        )
        attacker = make_combatant(
            inputs["attacker"],
            level=FLAGS.attacker_level,
            evs=FLAGS.attacker_evs,
            ivs=FLAGS.attacker_ivs,
            nature=FLAGS.attacker_nature,
            ability=FLAGS.attacker_ability,
            item=FLAGS.attacker_item,
        )
        defender = make_combatant(
            inputs["defender"],
            level=FLAGS.defender_level,
            evs=FLAGS.defender_evs,
            ivs=FLAGS.defender_ivs,
            nature=FLAGS.defender_nature,
            ability=FLAGS.defender_ability,
            item=FLAGS.defender_item,
            current_hp=FLAGS.defender_hp,
        )
        move = AttackMove(inputs["move"], critical=FLAGS.critical)
        outcome = run_calc(attacker, defender, move, field, hits=FLAGS.hits)
    except ValueError as e:
        logging.error("%s", e)
        raise app.UsageError(str(e)) from e

    logging.info(
        "%s %s vs. %s in %s", attacker.species, move.name, defender.species, gen.name
    )
    logging.info("Rolls: %s", ", ".join(str(roll) for roll in outcome.rolls))
    logging.info("%s", outcome.describe())
    logging.info("Average damage: %.1f", outcome.average_damage)

    if store is not None:
        store.set("last.gen", int(gen))
        store.set("last.attacker", attacker.species)
        store.set("last.defender", defender.species)
        store.set("last.move", move.name)
        store.notify("calculate")


def run() -> None:
    app.run(main)


if __name__ == "__main__":
    run()
