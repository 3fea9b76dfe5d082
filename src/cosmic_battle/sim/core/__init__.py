"""Core simulation primitives for the boss battle simulator."""

from cosmic_battle.sim.core.config import BattleConfig, Mechanic
from cosmic_battle.sim.core.entities import BossUnit, CombatUnit, Entity
from cosmic_battle.sim.core.rng import BattleRNG

__all__ = [
    # rng
    "BattleRNG",
    # config
    "BattleConfig",
    "Mechanic",
    # entities
    "Entity",
    "CombatUnit",
    "BossUnit",
]
