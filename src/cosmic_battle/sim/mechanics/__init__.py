"""Stat formulas and targeting for the battle simulator.

Usage::

    from cosmic_battle.sim.mechanics import (
        calculate_attack, calculate_hp,
        calculate_boss_attack, calculate_boss_hp,
        resolve_target,
    )
"""

# -- stats -------------------------------------------------------------------
from .stats import (
    calculate_attack,
    calculate_boss_attack,
    calculate_boss_hp,
    calculate_hp,
)

# -- targeting ---------------------------------------------------------------
from .targeting import resolve_target

__all__ = [
    # stats
    "calculate_attack",
    "calculate_hp",
    "calculate_boss_attack",
    "calculate_boss_hp",
    # targeting
    "resolve_target",
]
