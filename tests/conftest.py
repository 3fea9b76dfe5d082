"""Shared fixtures for the battle simulator tests."""

from __future__ import annotations

from typing import Sequence

import pytest

from cosmic_battle.catalog.registry import CardCatalog
from cosmic_battle.sim.core.rng import BattleRNG


class ScriptedRNG(BattleRNG):
    """RNG whose probability draws all succeed (or all fail).

    Queued *outcomes* decide the first draws one by one before falling
    back to *succeed*.  ``random_int`` returns queued *picks* in order,
    then ``low``.  ``float_draws`` counts every probability draw consumed.
    """

    def __init__(
        self,
        succeed: bool = True,
        picks: Sequence[int] = (),
        outcomes: Sequence[bool] = (),
    ) -> None:
        super().__init__(0)
        self.succeed = succeed
        self._picks = list(picks)
        self._outcomes = list(outcomes)
        self.float_draws = 0

    def random_float(self) -> float:
        self.float_draws += 1
        hit = self._outcomes.pop(0) if self._outcomes else self.succeed
        return 0.0 if hit else 0.99

    def random_int(self, low: int, high: int) -> int:
        if self._picks:
            return self._picks.pop(0)
        return low


@pytest.fixture
def scripted_rng() -> type[ScriptedRNG]:
    """The ScriptedRNG class, so tests can build one per scenario."""
    return ScriptedRNG


@pytest.fixture
def always_rng() -> ScriptedRNG:
    return ScriptedRNG(succeed=True)


@pytest.fixture
def never_rng() -> ScriptedRNG:
    return ScriptedRNG(succeed=False)


@pytest.fixture
def catalog() -> CardCatalog:
    """A small in-memory catalog covering a few realms and bosses."""
    return CardCatalog.from_records(
        cards=[
            {"_section": "Rocks"},
            {"id": "101", "name": "Pebble", "realm": 1, "power": 2, "defense": 12},
            {"id": "202", "name": "Blue Whale", "realm": 2, "power": 7, "defense": 25},
            {"id": "502", "name": "Rosetta Stone", "realm": 5, "power": 6, "defense": 14},
            {"id": "702", "name": "Hydra", "realm": 7, "power": 16, "defense": 16},
            {"id": "1002", "name": "Excalibur", "realm": 10, "power": 20, "defense": 12},
        ],
        bosses=[
            {"name": "Darth Vader", "realm": 10, "power": 40, "defense": 0.5},
            {"name": "Kraken", "realm": 2, "power": 20, "defense": 0.25},
            {"name": "Your Ego", "realm": 11, "power": 1, "defense": 1},
        ],
    )
