"""Battle simulation runner -- ties the round loop, boss rules, and results together.

Provides two key classes:

- **BattleEngine**: Resolves a single team-vs-boss battle to completion.
- **BatchRunner**: Orchestrates many independent battles (optionally in parallel).

Every battle works on clones of its inputs, so the same roster can be
handed to any number of battles, sequential or concurrent.
"""

from __future__ import annotations

import logging
import math
import multiprocessing
from collections import deque
from typing import TYPE_CHECKING, Sequence

from cosmic_battle.sim.bosses import (
    BossBehavior,
    DamageMultiplier,
    Interception,
    get_behavior,
    reflected_damage,
    roll_attack_count,
    roll_damage_multiplier,
    roll_interception,
)
from cosmic_battle.sim.core.config import BattleConfig, Mechanic
from cosmic_battle.sim.core.rng import BattleRNG
from cosmic_battle.sim.formatting import format_number as fmt
from cosmic_battle.sim.mechanics.stats import calculate_boss_hp
from cosmic_battle.sim.mechanics.targeting import resolve_target
from cosmic_battle.sim.team import prepare_boss, prepare_unit
from cosmic_battle.sim.telemetry import BattleError, BattleResult, Outcome

if TYPE_CHECKING:
    from cosmic_battle.catalog.cards import BossDefinition, RosterCard
    from cosmic_battle.sim.core.entities import BossUnit, CombatUnit

logger = logging.getLogger(__name__)

MAX_EXTRA_ATTACKS = 5
MAX_BATCH_SIZE = 500

_DISMEMBER_DECAY = 0.99
_PROTECTION_FACTOR = 0.5


def _is_stalemate(units: list[CombatUnit], boss: BossUnit, behavior: BossBehavior) -> bool:
    """True when no living unit can hurt the boss and the boss cannot hurt anyone.

    Zero attack stays zero under every multiplier, so such a battle would
    otherwise loop forever.
    """
    if any(u.attack > 0 for u in units if not u.is_dead):
        return False
    if behavior.damage_multiplier is DamageMultiplier.PERCENT_MAX_HP:
        return False
    return math.floor(boss.attack * _DISMEMBER_DECAY ** boss.dismember_stacks) <= 0


# =====================================================================
# Battle log
# =====================================================================

class _BattleLog:
    """Collects log lines, honouring fast mode and the round interval.

    ``routine`` lines (round separators, team hits) only appear on rounds
    that are a multiple of the interval; ``event`` lines appear on every
    round; ``always`` lines appear even in fast mode.
    """

    def __init__(self, fast: bool, every: int) -> None:
        self.lines: list[str] = []
        self.fast = fast
        self.every = max(1, every)
        self.round = 1

    def always(self, line: str) -> None:
        self.lines.append(line)

    def event(self, line: str) -> None:
        if not self.fast:
            self.lines.append(line)

    def routine(self, line: str) -> None:
        if not self.fast and self.round % self.every == 0:
            self.lines.append(line)


# =====================================================================
# BattleEngine
# =====================================================================

class BattleEngine:
    """Resolves team-vs-boss battles round by round.

    Parameters
    ----------
    rng:
        Source of every probability draw and random target pick.  Inject a
        seeded (or scripted) RNG for reproducible battles.
    """

    def __init__(self, rng: BattleRNG | None = None) -> None:
        self.rng = rng if rng is not None else BattleRNG(0)

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def resolve(
        self,
        team: Sequence[RosterCard],
        boss: BossDefinition | None,
        fast_log: bool = False,
        config: BattleConfig | None = None,
        reserve: Sequence[CombatUnit] = (),
        log_every_n_rounds: int = 1,
    ) -> BattleResult:
        """Run a battle between roster cards and a catalog boss.

        Precondition failures (no boss, empty team) come back as an
        ``Outcome.ERROR`` result with a single log line; they are never
        raised, so a batch can move on to its next battle.
        """
        if boss is None:
            return BattleResult.failed(BattleError.NO_BOSS_SELECTED)
        if not team:
            return BattleResult.failed(BattleError.EMPTY_TEAM, calculate_boss_hp(boss))

        config = config if config is not None else BattleConfig()
        units = [prepare_unit(card, config) for card in team]
        return self.fight(
            units, prepare_boss(boss), config,
            fast_log=fast_log, reserve=reserve, log_every_n_rounds=log_every_n_rounds,
        )

    def fight(
        self,
        team: Sequence[CombatUnit],
        boss: BossUnit,
        config: BattleConfig,
        fast_log: bool = False,
        reserve: Sequence[CombatUnit] = (),
        log_every_n_rounds: int = 1,
    ) -> BattleResult:
        """Run the round loop over already-prepared units.

        The inputs are cloned first and never mutated.
        """
        if not team:
            return BattleResult.failed(BattleError.EMPTY_TEAM, boss.current_hp)

        units: list[CombatUnit] = [u.clone() for u in team]
        queue: deque[CombatUnit] = deque(u.clone() for u in reserve)
        boss = boss.clone()
        behavior = get_behavior(boss.name)
        log = _BattleLog(fast_log, log_every_n_rounds)

        log.always(
            f"Battle starts: Team ({len(units)}) vs {boss.name} (HP {fmt(boss.current_hp)})"
        )
        logger.debug("Battle vs %s: %d units, %d in reserve", boss.name, len(units), len(queue))

        rounds = 0
        while any(not u.is_dead for u in units) and not boss.is_dead:
            if _is_stalemate(units, boss, behavior):
                logger.warning("Battle vs %s stalled after %d rounds", boss.name, rounds)
                log.always("Stalemate: neither side can deal damage")
                break

            rounds += 1
            log.round = rounds
            log.routine(f"— Round {rounds} —")

            # Team phase
            self._team_phase(units, boss, behavior, config, log)
            if boss.is_dead:
                log.event(f"{boss.name} beaten!")
                break

            # Boss phase
            alive = [u for u in units if not u.is_dead]
            if alive:
                self._boss_phase(alive, boss, behavior, log)

            # End of round: drop the dead, reserve units move up at the back
            survivors = [u for u in units if not u.is_dead]
            dead_count = len(units) - len(survivors)
            units[:] = survivors
            for _ in range(dead_count):
                if not queue:
                    break
                units.append(queue.popleft())
                log.event(f"{units[-1].name} moves up!")

        outcome = Outcome.VICTORY if boss.is_dead else Outcome.DEFEAT
        log.always(f"Result: {outcome.value}")
        logger.debug("Battle vs %s ended: %s after %d rounds", boss.name, outcome.value, rounds)

        return BattleResult(
            outcome=outcome,
            log=log.lines,
            final_team=units,
            boss_remaining_hp=boss.current_hp,
            rounds=rounds,
        )

    # ------------------------------------------------------------------
    # Team phase
    # ------------------------------------------------------------------

    def _team_phase(
        self,
        team: list[CombatUnit],
        boss: BossUnit,
        behavior: BossBehavior,
        config: BattleConfig,
        log: _BattleLog,
    ) -> None:
        """Every living unit attacks once, in slot order."""
        rng = self.rng

        for slot, unit in enumerate(team):
            if unit.is_dead:
                continue

            if unit.stun_turns > 0:
                unit.stun_turns -= 1
                log.routine(f"{unit.name} is stunned and misses turn")
                continue

            damage = self._attack_damage(team, slot)

            # Critical hit and its riders
            critical = False
            if config.crit_chance and rng.chance(config.crit_chance):
                critical = True
                damage = math.floor(damage * (1 + config.crit_damage))

            if critical:
                weak_point = unit.skill(Mechanic.WEAK_POINT)
                if weak_point and rng.chance(weak_point):
                    damage += math.floor(boss.current_hp * weak_point)

                dismember = unit.skill(Mechanic.DISMEMBER)
                if dismember and rng.chance(dismember):
                    boss.dismember_stacks += 1
                    boss.attack = math.floor(boss.attack * (1 - dismember))

            # Evolution takes effect from the extra attacks onwards
            evolution = unit.skill(Mechanic.EVOLUTION)
            if evolution and rng.chance(evolution):
                unit.evolution_bonus += evolution
                log.routine(
                    f"{unit.name} evolves! Attack increased by {math.floor(evolution * 100)}%"
                )

            extra_attacks = 0
            extra_chance = unit.skill(Mechanic.EXTRA_ATTACK)
            if extra_chance and rng.chance(extra_chance):
                extra_attacks = 1
                while extra_attacks < MAX_EXTRA_ATTACKS and rng.chance(extra_chance):
                    extra_attacks += 1

            # Boss interception
            mitigated = False
            interception = roll_interception(behavior, slot, rng)
            if interception is Interception.MITIGATE:
                damage = math.floor(damage * behavior.interception_factor)
                mitigated = True
            elif interception is Interception.HEAL:
                boss.current_hp += damage
                log.event(f"{boss.name} heals for {fmt(damage)}")
            elif interception is Interception.DODGE:
                log.event(f"{unit.name} misses!")
                continue
            elif interception is Interception.REDIRECT:
                victim = rng.random_choice([u for u in team if not u.is_dead])
                victim.take_damage(damage)
                log.event(
                    f"{boss.name} confuses {unit.name}'s attack to {victim.name} for {fmt(damage)}"
                )
                if victim.current_hp <= 0:
                    victim.current_hp = 0
                continue
            elif interception is Interception.FIRST_ATTACKER_ONLY:
                continue

            boss.take_damage(damage)
            msg = f"{unit.name} hits for {fmt(damage)}"
            if critical:
                msg += " (CRIT!)"
            if mitigated:
                msg += " (mitigated)"
            msg += f" - {fmt(boss.current_hp)}/{fmt(boss.max_hp)}"
            log.routine(msg)

            # Extra attacks always land as plain damage
            for _ in range(extra_attacks):
                extra_damage = self._attack_damage(team, slot)
                boss.take_damage(extra_damage)
                log.routine(
                    f"{unit.name} hits again for {fmt(extra_damage)}"
                    f" - {fmt(boss.current_hp)}/{fmt(boss.max_hp)}"
                )

            if boss.is_dead:
                return

    @staticmethod
    def _attack_damage(team: list[CombatUnit], slot: int) -> int:
        """Base damage of the unit in *slot* after evolution and empowerment.

        Empowerment comes from the unit directly in front in the team list,
        whether or not that unit is still alive this round.
        """
        unit = team[slot]
        damage = unit.attack
        if unit.evolution_bonus > 0:
            damage = math.floor(damage * (1 + unit.evolution_bonus))
        if slot > 0:
            empowerment = team[slot - 1].skill(Mechanic.EMPOWERMENT)
            if empowerment:
                damage = math.floor(damage * (1 + empowerment))
        return damage

    # ------------------------------------------------------------------
    # Boss phase
    # ------------------------------------------------------------------

    def _boss_phase(
        self,
        alive: list[CombatUnit],
        boss: BossUnit,
        behavior: BossBehavior,
        log: _BattleLog,
    ) -> None:
        """The boss attacks the living units; *alive* is pruned as they die."""
        rng = self.rng
        num_attacks = roll_attack_count(behavior, rng)

        for attack_index in range(num_attacks):
            if not alive:
                break

            target_idx = resolve_target(alive, behavior.targeting, attack_index, rng)
            target = alive[target_idx]

            # Temporary dismember shrink, on top of the permanent one
            damage = boss.attack
            if boss.dismember_stacks > 0:
                damage = math.floor(damage * _DISMEMBER_DECAY ** boss.dismember_stacks)

            damage, empowered = roll_damage_multiplier(behavior, damage, target, rng)

            dodge = target.skill(Mechanic.DODGE)
            if dodge and rng.chance(dodge):
                log.event(f"{target.name} dodges the attack!")
                continue

            protected = False
            protection = target.skill(Mechanic.PROTECTION)
            if protection and rng.chance(protection) and target_idx > 0:
                guarded = alive[target_idx - 1]
                if not guarded.is_dead:
                    guarded.take_damage(math.floor(damage * _PROTECTION_FACTOR))
                    damage = 0
                    protected = True
                    log.event(
                        f"{target.name} protects {guarded.name}, reducing damage by 50%"
                    )
                    if guarded.current_hp <= 0:
                        guarded.current_hp = 0

            absorbed = False
            absorption = target.skill(Mechanic.DAMAGE_ABSORPTION)
            if not protected and absorption:
                damage = math.floor(damage * (1 - absorption))
                absorbed = True

            stunned = False
            stun = target.skill(Mechanic.STUN)
            if stun and rng.chance(stun):
                boss.stun_turns += 1
                stunned = True
                log.event(f"{target.name} stuns {boss.name}!")

            # A pending stun swallows this attack, including a stun just earned
            if boss.stun_turns > 0:
                boss.stun_turns -= 1
                log.event(f"{boss.name} is stunned and misses turn")
                self._remove_dead(alive, boss, behavior, log)
                continue

            if not protected:
                target.take_damage(damage)

            msg = f"{target.name} got hit for {fmt(damage)}"
            if empowered:
                msg += " (empowerment)"
            if absorbed:
                msg += " (absorbed)"
            if stunned:
                msg += " (stunned)"
            if protected:
                msg += " (protected)"
            else:
                msg += f" - {fmt(target.current_hp)}/{fmt(target.max_hp)}"
            log.event(msg)

            if behavior.reflect_fraction > 0:
                reflect = reflected_damage(behavior, damage)
                target.take_damage(reflect)
                log.event(f"{boss.name} reflects {fmt(reflect)} to {target.name}")

            self._remove_dead(alive, boss, behavior, log)

    @staticmethod
    def _remove_dead(
        alive: list[CombatUnit],
        boss: BossUnit,
        behavior: BossBehavior,
        log: _BattleLog,
    ) -> None:
        """Drop dead units from targeting and fire on-death boss buffs."""
        deaths = sum(1 for u in alive if u.is_dead)
        if not deaths:
            return
        alive[:] = [u for u in alive if not u.is_dead]
        if behavior.death_attack_mult == 1.0:
            return
        for _ in range(deaths):
            boss.attack = math.floor(boss.attack * behavior.death_attack_mult)
            log.event(f"{boss.name}'s attack increases!")


# =====================================================================
# BatchRunner
# =====================================================================

def _run_single_battle(
    team: Sequence[RosterCard],
    boss: BossDefinition,
    config: BattleConfig,
    reserve: Sequence[CombatUnit],
    seed: int,
) -> BattleResult:
    """Run one fast-log battle with its own forked RNG stream."""
    engine = BattleEngine(rng=BattleRNG(seed).fork("battle"))
    return engine.resolve(team, boss, fast_log=True, config=config, reserve=reserve)


def _worker_run_single(args: tuple) -> BattleResult:
    """Top-level worker function for multiprocessing (must be picklable)."""
    return _run_single_battle(*args)


class BatchRunner:
    """Runs many independent battles of one team against one boss."""

    def __init__(self, config: BattleConfig | None = None) -> None:
        self.config = config if config is not None else BattleConfig()

    def run_batch(
        self,
        team: Sequence[RosterCard],
        boss: BossDefinition,
        n_runs: int,
        reserve: Sequence[CombatUnit] = (),
        base_seed: int = 42,
        parallel: bool = False,
    ) -> list[BattleResult]:
        """Run *n_runs* battles with seeds ``base_seed .. base_seed + n - 1``.

        Batches larger than :data:`MAX_BATCH_SIZE` are clamped.
        """
        if n_runs > MAX_BATCH_SIZE:
            logger.warning(
                "Simulation count limited to %d (requested %d)", MAX_BATCH_SIZE, n_runs,
            )
            n_runs = MAX_BATCH_SIZE
        seeds = [base_seed + i for i in range(n_runs)]

        if parallel and n_runs > 1:
            return self._run_parallel(team, boss, reserve, seeds)
        return self._run_sequential(team, boss, reserve, seeds)

    def _run_sequential(
        self,
        team: Sequence[RosterCard],
        boss: BossDefinition,
        reserve: Sequence[CombatUnit],
        seeds: list[int],
    ) -> list[BattleResult]:
        return [
            _run_single_battle(team, boss, self.config, reserve, seed)
            for seed in seeds
        ]

    def _run_parallel(
        self,
        team: Sequence[RosterCard],
        boss: BossDefinition,
        reserve: Sequence[CombatUnit],
        seeds: list[int],
    ) -> list[BattleResult]:
        """Run battles in parallel using multiprocessing.

        Inputs are plain Pydantic models, so they pickle to the workers
        as-is and results come back in seed order.
        """
        work_items = [
            (list(team), boss, self.config, list(reserve), seed)
            for seed in seeds
        ]

        n_workers = min(len(seeds), multiprocessing.cpu_count() or 1)

        with multiprocessing.Pool(processes=n_workers) as pool:
            results = pool.map(_worker_run_single, work_items)

        return results
