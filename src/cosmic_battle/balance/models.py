"""Pydantic v2 models for batch simulation statistics.

These models define the structured output of a simulation batch and are
serializable to/from JSON.
"""

from __future__ import annotations

from pydantic import BaseModel


class SimulationSummary(BaseModel):
    """Aggregate statistics over a batch of battles."""

    boss_name: str
    total_fights: int
    victories: int
    defeats: int
    errors: int = 0
    win_rate: float
    """victories / total_fights."""
    avg_team_hp_remaining: float | None = None
    """Mean surviving team HP over victories; None if there were none."""
    avg_boss_hp_remaining: float
    avg_rounds: float
    generated_at: str | None = None
    """ISO 8601 timestamp, set when the summary is saved."""
