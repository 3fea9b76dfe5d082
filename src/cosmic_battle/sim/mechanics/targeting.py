"""Boss target resolution -- pick which living unit an attack lands on."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cosmic_battle.sim.bosses import Targeting

if TYPE_CHECKING:
    from cosmic_battle.sim.core.entities import CombatUnit
    from cosmic_battle.sim.core.rng import BattleRNG


def resolve_target(
    alive: list[CombatUnit],
    targeting: Targeting,
    attack_index: int,
    rng: BattleRNG,
) -> int:
    """Return the index into *alive* hit by attack number *attack_index*.

    The first attack of a turn always lands on the front unit.  Follow-up
    attacks use the boss's targeting rule.  *alive* must be non-empty.
    """
    if attack_index == 0 or targeting is Targeting.FRONT:
        return 0

    if targeting is Targeting.RANDOM_FOLLOW_UPS:
        return rng.random_int(0, len(alive) - 1)

    if targeting is Targeting.LAST_FOLLOW_UP:
        return len(alive) - 1

    return 0
