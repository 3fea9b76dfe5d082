"""Pure metric computation over battle results.

All functions take a list of BattleResult and return structured metrics.
No side effects, no I/O.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from cosmic_battle.balance.models import SimulationSummary
from cosmic_battle.sim.telemetry import Outcome

if TYPE_CHECKING:
    from cosmic_battle.sim.telemetry import BattleResult


def summarize(results: list[BattleResult], boss_name: str) -> SimulationSummary:
    """Compute aggregate statistics for a batch against *boss_name*."""
    total = len(results)
    if total == 0:
        return SimulationSummary(
            boss_name=boss_name, total_fights=0, victories=0, defeats=0,
            win_rate=0.0, avg_boss_hp_remaining=0.0, avg_rounds=0.0,
        )

    wins = [r for r in results if r.outcome is Outcome.VICTORY]
    errors = sum(1 for r in results if r.outcome is Outcome.ERROR)

    avg_team_hp = None
    if wins:
        avg_team_hp = sum(r.team_hp_remaining for r in wins) / len(wins)

    return SimulationSummary(
        boss_name=boss_name,
        total_fights=total,
        victories=len(wins),
        defeats=total - len(wins) - errors,
        errors=errors,
        win_rate=len(wins) / total,
        avg_team_hp_remaining=avg_team_hp,
        avg_boss_hp_remaining=sum(r.boss_remaining_hp for r in results) / total,
        avg_rounds=sum(r.rounds for r in results) / total,
    )


def win_rate(results: list[BattleResult]) -> float:
    """Fraction of results that are victories."""
    if not results:
        return 0.0
    return sum(1 for r in results if r.is_victory) / len(results)
