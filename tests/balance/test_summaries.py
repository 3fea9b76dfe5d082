"""Tests for batch summary generation and persistence."""

from __future__ import annotations

from cosmic_battle.balance.summaries import generate_summary, load_summary, save_summary
from cosmic_battle.catalog.cards import BossDefinition, RosterCard
from cosmic_battle.sim.core.config import BattleConfig


def _make_inputs() -> tuple[list[RosterCard], BossDefinition]:
    team = [RosterCard(id="702", name="Hydra", realm=7, power=1000, defense=100)]
    boss = BossDefinition(name="Kraken", realm=2, power=1, defense=0.01)
    return team, boss


class TestGenerateSummary:
    def test_runs_batch(self):
        team, boss = _make_inputs()
        summary = generate_summary(team, boss, BattleConfig(), num_runs=5)

        assert summary.boss_name == "Kraken"
        assert summary.total_fights == 5
        assert summary.victories == 5
        assert summary.win_rate == 1.0
        assert summary.generated_at is not None

    def test_save_and_load(self, tmp_path):
        team, boss = _make_inputs()
        summary = generate_summary(team, boss, BattleConfig(), num_runs=3)

        path = tmp_path / "nested" / "summary.json"
        save_summary(summary, path)

        assert load_summary(path) == summary
