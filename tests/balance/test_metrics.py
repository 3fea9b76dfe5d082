"""Tests for metric computation functions."""

from __future__ import annotations

import pytest

from cosmic_battle.balance.metrics import summarize, win_rate
from cosmic_battle.sim.core.entities import CombatUnit
from cosmic_battle.sim.telemetry import BattleError, BattleResult, Outcome


def _make_result(
    outcome: Outcome = Outcome.VICTORY,
    team_hp: list[int] | None = None,
    boss_hp: int = 0,
    rounds: int = 5,
) -> BattleResult:
    team = [
        CombatUnit(card_id=str(i), name=f"Unit {i}", realm=1, attack=1, max_hp=1000, current_hp=hp)
        for i, hp in enumerate(team_hp or [])
    ]
    return BattleResult(outcome=outcome, final_team=team, boss_remaining_hp=boss_hp, rounds=rounds)


# ---- summarize ----

class TestSummarize:
    def test_mixed_batch(self):
        results = [
            _make_result(team_hp=[100], boss_hp=0, rounds=4),
            _make_result(team_hp=[200, 100], boss_hp=-50, rounds=6),
            _make_result(Outcome.DEFEAT, boss_hp=1050, rounds=8),
            BattleResult.failed(BattleError.EMPTY_TEAM, boss_hp=2000),
        ]
        summary = summarize(results, "Kraken")

        assert summary.boss_name == "Kraken"
        assert summary.total_fights == 4
        assert summary.victories == 2
        assert summary.defeats == 1
        assert summary.errors == 1
        assert summary.win_rate == pytest.approx(0.5)
        assert summary.avg_team_hp_remaining == pytest.approx(200.0)
        assert summary.avg_boss_hp_remaining == pytest.approx(750.0)
        assert summary.avg_rounds == pytest.approx(4.5)

    def test_no_victories(self):
        summary = summarize([_make_result(Outcome.DEFEAT, boss_hp=10)], "Kraken")

        assert summary.victories == 0
        assert summary.avg_team_hp_remaining is None

    def test_empty_batch(self):
        summary = summarize([], "Kraken")

        assert summary.total_fights == 0
        assert summary.win_rate == 0.0
        assert summary.avg_team_hp_remaining is None


# ---- win_rate ----

class TestWinRate:
    def test_win_rate(self):
        results = [_make_result(), _make_result(Outcome.DEFEAT), _make_result(Outcome.DEFEAT)]
        assert win_rate(results) == pytest.approx(1 / 3)

    def test_empty(self):
        assert win_rate([]) == 0.0
