"""Summary generation: run a batch, compute statistics, save/load JSON.

Orchestrates BatchRunner -> summarize -> SimulationSummary.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Sequence

from cosmic_battle.balance.metrics import summarize
from cosmic_battle.balance.models import SimulationSummary
from cosmic_battle.sim.runner import BatchRunner

if TYPE_CHECKING:
    from cosmic_battle.catalog.cards import BossDefinition, RosterCard
    from cosmic_battle.sim.core.config import BattleConfig
    from cosmic_battle.sim.core.entities import CombatUnit


def generate_summary(
    team: Sequence[RosterCard],
    boss: BossDefinition,
    config: BattleConfig,
    num_runs: int = 100,
    reserve: Sequence[CombatUnit] = (),
    base_seed: int = 42,
    parallel: bool = False,
) -> SimulationSummary:
    """Run a simulation batch and summarize it.

    Parameters
    ----------
    team:
        Roster cards in slot order.
    boss:
        The boss every battle is fought against.
    config:
        Compiled battle configuration (skills and global multipliers).
    num_runs:
        Number of battles to simulate.
    base_seed:
        Starting seed for reproducible batches.
    """
    runner = BatchRunner(config)
    results = runner.run_batch(
        team, boss, num_runs, reserve=reserve, base_seed=base_seed, parallel=parallel,
    )
    summary = summarize(results, boss.name)
    return summary.model_copy(
        update={"generated_at": datetime.now(timezone.utc).isoformat()}
    )


def save_summary(summary: SimulationSummary, path: Path) -> None:
    """Save summary to JSON file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(summary.model_dump(), indent=2))


def load_summary(path: Path) -> SimulationSummary:
    """Load summary from JSON file."""
    data = json.loads(path.read_text())
    return SimulationSummary.model_validate(data)
