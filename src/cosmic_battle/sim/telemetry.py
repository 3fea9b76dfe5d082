"""Battle result records.

A :class:`BattleResult` is everything a caller gets back from one battle:
the outcome, the human-readable log, a snapshot of the final team and the
boss's remaining HP.  It is a plain ``dataclass`` (not a Pydantic model)
to keep batch runs cheap.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from cosmic_battle.sim.core.entities import CombatUnit


class Outcome(str, Enum):
    VICTORY = "Victory"
    DEFEAT = "Defeat"
    ERROR = "Error"


class BattleError(str, Enum):
    """Precondition failures reported as an ``Outcome.ERROR`` result."""

    NO_BOSS_SELECTED = "No boss selected"
    EMPTY_TEAM = "Empty team"


@dataclass
class BattleResult:
    """Outcome of a single battle.

    Attributes
    ----------
    outcome:
        Victory if the boss reached 0 HP, Defeat if the team fell first,
        Error if the battle could not start.
    log:
        Ordered log lines.  Lines starting with an em-dash are round
        separators.
    final_team:
        Surviving units plus any reserve units that moved up.
    boss_remaining_hp:
        Boss HP at the end of the battle (may be negative after the
        killing blow).
    rounds:
        Number of rounds played.
    error:
        Which precondition failed, for ``Outcome.ERROR`` results.
    """

    outcome: Outcome
    log: list[str] = field(default_factory=list)
    final_team: list[CombatUnit] = field(default_factory=list)
    boss_remaining_hp: int = 0
    rounds: int = 0
    error: BattleError | None = None

    @property
    def is_victory(self) -> bool:
        return self.outcome is Outcome.VICTORY

    @property
    def team_hp_remaining(self) -> int:
        """Total current HP of the surviving units."""
        return sum(u.current_hp for u in self.final_team if not u.is_dead)

    @classmethod
    def failed(cls, error: BattleError, boss_hp: int = 0) -> BattleResult:
        return cls(
            outcome=Outcome.ERROR, log=[error.value], boss_remaining_hp=boss_hp, error=error,
        )
