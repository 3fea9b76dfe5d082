"""Team assembly -- battle-ready units from roster cards and bosses.

Builds the :class:`CombatUnit` and :class:`BossUnit` instances the battle
engine fights with, and splits a card selection into the active team and
the reserve queue according to the compiled slot limit.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Sequence

from cosmic_battle.sim.core.entities import BossUnit, CombatUnit
from cosmic_battle.sim.mechanics.stats import (
    calculate_attack,
    calculate_boss_attack,
    calculate_boss_hp,
    calculate_hp,
)
from cosmic_battle.sim.skills import project_card_skills

if TYPE_CHECKING:
    from cosmic_battle.catalog.cards import BossDefinition, RosterCard
    from cosmic_battle.sim.core.config import BattleConfig


def prepare_unit(card: RosterCard, config: BattleConfig) -> CombatUnit:
    """Instantiate *card* for battle with computed stats and skills."""
    hp = calculate_hp(card, config)
    return CombatUnit(
        card_id=card.id,
        name=card.name,
        realm=card.realm,
        attack=calculate_attack(card, config),
        max_hp=hp,
        current_hp=hp,
        skills=project_card_skills(card.realm, config),
    )


def prepare_boss(boss: BossDefinition) -> BossUnit:
    """Instantiate *boss* for battle with computed stats."""
    hp = calculate_boss_hp(boss)
    return BossUnit(
        name=boss.name,
        realm=boss.realm,
        attack=calculate_boss_attack(boss),
        max_hp=hp,
        current_hp=hp,
    )


def split_team(
    cards: Sequence[RosterCard],
    slot_limit: int,
) -> tuple[list[RosterCard], list[RosterCard]]:
    """Split *cards* into ``(team, reserve)``.

    The first *slot_limit* cards (at least one) fight; the rest overflow
    into the reserve in their original order.
    """
    limit = max(1, slot_limit)
    return list(cards[:limit]), list(cards[limit:])


def build_reserve(cards: Sequence[RosterCard], config: BattleConfig) -> list[CombatUnit]:
    """Return stat-computed reserve units, front of the queue first."""
    return [prepare_unit(c, config) for c in cards]


def suggest_log_interval(
    team: Sequence[RosterCard],
    boss: BossDefinition,
    config: BattleConfig,
) -> int:
    """Return how many rounds to skip between logged rounds.

    Long battles would produce an unreadable log, so the interval grows
    with the expected battle length (boss HP over total team attack).
    """
    total_attack = sum(calculate_attack(c, config) for c in team)
    if total_attack <= 0:
        return 1
    ratio = calculate_boss_hp(boss) / total_attack
    return max(1, math.floor(ratio / 100) * 5)
