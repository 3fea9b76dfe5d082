"""Simulate a team from an exported save against one boss.

Usage:
    uv run python scripts/simulate.py --save data/sample_save.json --boss "Darth Vader" \
        --team 702 1002 402 [--reserve 302 202] [--runs 100] [--output out/summary.json]

With ``--runs 1`` (the default) a single battle is fought and its log is
printed; otherwise a fast-log batch is run and summarized.
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

from cosmic_battle.balance.metrics import summarize
from cosmic_battle.balance.report import generate_fight_lines, generate_text_report
from cosmic_battle.balance.summaries import save_summary
from cosmic_battle.catalog.registry import CardCatalog, CatalogError
from cosmic_battle.save.parser import SaveParseError, import_save
from cosmic_battle.sim.bosses import get_special_rules
from cosmic_battle.sim.core.rng import BattleRNG
from cosmic_battle.sim.runner import BatchRunner, BattleEngine
from cosmic_battle.sim.team import build_reserve, split_team, suggest_log_interval


def main() -> None:
    parser = argparse.ArgumentParser(description="Simulate a boss battle")
    parser.add_argument("--catalog", type=str, default=None, help="Catalog JSON (default data/catalog.json)")
    parser.add_argument("--save", type=str, required=True, help="Exported save file")
    parser.add_argument("--boss", type=str, required=True, help="Boss name")
    parser.add_argument("--team", nargs="+", required=True, help="Card ids in slot order")
    parser.add_argument("--reserve", nargs="*", default=[], help="Reserve card ids, front first")
    parser.add_argument("--runs", type=int, default=1, help="Number of battles")
    parser.add_argument("--seed", type=int, default=42, help="Base seed")
    parser.add_argument("--parallel", action="store_true", help="Run the batch in worker processes")
    parser.add_argument("--show-fights", action="store_true", help="Print a block per fight")
    parser.add_argument("--output", type=str, default=None, help="Write the batch summary as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        catalog = CardCatalog.load(args.catalog)
        imported = import_save(Path(args.save).read_text(encoding="utf-8"), catalog)
    except (OSError, CatalogError, SaveParseError) as exc:
        sys.exit(f"error: {exc}")

    owned = {c.id: c for c in imported.roster}
    missing = [cid for cid in args.team + args.reserve if cid not in owned]
    if missing:
        sys.exit(f"error: cards not in save: {', '.join(missing)}")

    boss = catalog.get_boss(args.boss)
    if boss is None:
        sys.exit(f"error: unknown boss {args.boss!r}")

    config = imported.config
    team, overflow = split_team([owned[cid] for cid in args.team], config.slot_limit)
    reserve = build_reserve(overflow + [owned[cid] for cid in args.reserve], config)

    print(f"Boss: {boss.name}")
    for rule in get_special_rules(boss):
        print(f"  - {rule}")
    print(f"Team: {', '.join(c.name for c in team)}")
    if reserve:
        print(f"Reserve: {', '.join(u.name for u in reserve)}")
    print()

    if args.runs <= 1:
        engine = BattleEngine(rng=BattleRNG(args.seed))
        result = engine.resolve(
            team, boss, config=config, reserve=reserve,
            log_every_n_rounds=suggest_log_interval(team, boss, config),
        )
        print("\n".join(result.log))
        return

    print(f"Running {args.runs:,} simulations...")
    t0 = time.perf_counter()
    runner = BatchRunner(config)
    results = runner.run_batch(
        team, boss, args.runs, reserve=reserve, base_seed=args.seed, parallel=args.parallel,
    )
    elapsed = time.perf_counter() - t0
    print(f"Done in {elapsed:.1f}s")
    print()

    if args.show_fights:
        for i, result in enumerate(results, start=1):
            print("\n".join(generate_fight_lines(i, result)))
            print()

    summary = summarize(results, boss.name)
    print(generate_text_report(summary))

    if args.output:
        out_path = Path(args.output)
        save_summary(summary, out_path)
        print(f"\nSaved summary to {out_path}")


if __name__ == "__main__":
    main()
