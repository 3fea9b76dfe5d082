"""Text reports for simulation batches."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cosmic_battle.sim.formatting import format_number as fmt

if TYPE_CHECKING:
    from cosmic_battle.balance.models import SimulationSummary
    from cosmic_battle.sim.telemetry import BattleResult


def generate_fight_lines(index: int, result: BattleResult) -> list[str]:
    """Per-fight block: header, outcome and surviving units' HP."""
    lines = [f"Fight {index}", f"Result: {result.outcome.value}!"]
    for unit in result.final_team:
        if not unit.is_dead:
            lines.append(f"{unit.name}: {fmt(unit.current_hp)}/{fmt(unit.max_hp)} HP")
    return lines


def generate_text_report(summary: SimulationSummary) -> str:
    """Generate a human-readable summary of a simulation batch."""
    lines: list[str] = []

    lines.append("=== SIMULATION RESULTS ===")
    lines.append(f"Boss: {summary.boss_name}")
    lines.append(f"Total Fights: {summary.total_fights}")
    lines.append(f"Victories: {summary.victories}")
    lines.append(f"Defeats: {summary.defeats}")
    if summary.errors:
        lines.append(f"Errors: {summary.errors}")
    lines.append(f"Win Rate: {summary.win_rate:.1%}")

    if summary.avg_team_hp_remaining is not None:
        lines.append(f"Average Team HP Remaining: {fmt(summary.avg_team_hp_remaining)}")
    lines.append(f"Average Boss HP Remaining: {fmt(summary.avg_boss_hp_remaining)}")
    lines.append(f"Average Rounds: {summary.avg_rounds:.1f}")

    return "\n".join(lines)
