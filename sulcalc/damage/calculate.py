"""Public entry points for damage calculation."""

from dataclasses import replace
from typing import Callable, List, Optional

from absl import logging

from sulcalc.damage.context import build_context
from sulcalc.damage.generations import PIPELINES
from sulcalc.exceptions import UnsupportedGenerationError
from sulcalc.game.data.game_data import GameData
from sulcalc.game.schema.combatant import AttackMove, Combatant
from sulcalc.game.schema.enums import Generation
from sulcalc.game.schema.field_state import FieldState


def calculate(
    attacker: Combatant,
    defender: Combatant,
    move: AttackMove,
    field: FieldState,
    game_data: Optional[GameData] = None,
) -> List[int]:
    """Calculate every damage roll for one attack.

    The rules of `field.gen` decide the formula and modifier order.

    Args:
        attacker: The Pokemon using the move
        defender: The Pokemon being hit
        move: The move and whether it lands a critical hit
        field: Generation, weather, terrain and other field-wide conditions
        game_data: Record source; the package's bundled tables by default

    Returns:
        Ascending damage values, one per random roll. A blocked or immune
        hit gives [0]; fixed-damage moves give a single value.

    Raises:
        UnsupportedGenerationError: If no rules exist for field.gen
        ValueError: If a species, move, ability, item or nature is unknown

    Example:
        >>> calculate(
        ...     Combatant("Heatran", nature="Timid", evs=EffortValues.from_list(
        ...         [252, 0, 0, 0, 4, 252])),
        ...     Combatant("Landorus-Therian", nature="Impish",
        ...         evs=EffortValues.from_list([252, 0, 216, 0, 24, 16])),
        ...     AttackMove("Lava Plume"),
        ...     FieldState(gen=Generation.SM),
        ... )[-1]
        150
    """
    try:
        pipeline = PIPELINES[Generation(field.gen)]
    except (KeyError, ValueError) as e:
        raise UnsupportedGenerationError(field.gen) from e

    if game_data is None:
        game_data = GameData()
    context = build_context(attacker, defender, move, field, game_data)
    logging.debug(
        "Calculating %s: %s -> %s with %s",
        pipeline.name,
        attacker.species,
        defender.species,
        move.name,
    )
    return pipeline.run(context)


def _calculate_in(gen: Generation) -> Callable[..., List[int]]:
    def calculate_for_gen(
        attacker: Combatant,
        defender: Combatant,
        move: AttackMove,
        field: Optional[FieldState] = None,
        game_data: Optional[GameData] = None,
    ) -> List[int]:
        if field is None:
            field = FieldState(gen=gen)
        elif field.gen != gen:
            field = replace(field, gen=gen)
        return calculate(attacker, defender, move, field, game_data)

    calculate_for_gen.__name__ = f"{gen.name.lower()}_calculate"
    calculate_for_gen.__doc__ = (
        f"Calculate damage rolls under {gen.name} rules, overriding field.gen."
    )
    return calculate_for_gen


rby_calculate = _calculate_in(Generation.RBY)
gsc_calculate = _calculate_in(Generation.GSC)
adv_calculate = _calculate_in(Generation.ADV)
hgss_calculate = _calculate_in(Generation.HGSS)
b2w2_calculate = _calculate_in(Generation.B2W2)
oras_calculate = _calculate_in(Generation.ORAS)
sm_calculate = _calculate_in(Generation.SM)
