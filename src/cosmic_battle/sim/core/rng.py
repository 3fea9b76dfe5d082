"""Seeded draws for the battle engine.

A battle consumes two kinds of randomness: probability rolls for skills
and boss rules, and index picks for random targets.  Both come from one
:class:`BattleRNG`, so a battle is fully replayable from its seed.
"""

from __future__ import annotations

import hashlib
import random
from typing import Sequence, TypeVar

T = TypeVar("T")


def _derive_seed(seed: int, label: str) -> int:
    """Stable 64-bit seed for the *label* stream under *seed*."""
    digest = hashlib.sha256(f"{seed}:{label}".encode()).digest()
    return int.from_bytes(digest[:8], "big")


class BattleRNG:
    """Mersenne Twister stream behind every roll and target pick in a battle.

    The engine calls :meth:`chance` for skill and boss rolls and
    :meth:`random_choice` for random targets; both bottom out in
    :meth:`random_float` and :meth:`random_int`.  Tests override those two
    to script outcomes.
    """

    def __init__(self, seed: int) -> None:
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def seed(self) -> int:
        return self._seed

    def random_int(self, low: int, high: int) -> int:
        """Target index pick, inclusive at both ends."""
        return self._rng.randint(low, high)

    def random_float(self) -> float:
        """Roll in ``[0, 1)``; a roll below a skill's probability succeeds."""
        return self._rng.random()

    def random_choice(self, seq: Sequence[T]) -> T:
        return seq[self.random_int(0, len(seq) - 1)]

    def chance(self, probability: float) -> bool:
        return self.random_float() < probability

    def fork(self, name: str) -> BattleRNG:
        """Independent stream for one battle of a batch.

        The child seed depends only on this seed and *name*, never on how
        many draws were already taken, so worker processes rebuild the
        same stream from the batch seed alone.
        """
        return BattleRNG(_derive_seed(self._seed, name))

    def __repr__(self) -> str:
        return f"BattleRNG(seed={self._seed})"
