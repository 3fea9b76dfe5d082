"""Compare one team's batch results across several bosses.

Usage:
    uv run python scripts/compare_teams.py --save data/sample_save.json \
        --team 702 1002 402 [--bosses "Darth Vader" Zeus Galactus] [--runs N]
"""

from __future__ import annotations

import argparse
import time
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from cosmic_battle.balance.metrics import summarize
from cosmic_battle.catalog.registry import CardCatalog
from cosmic_battle.save.parser import import_save
from cosmic_battle.sim.runner import BatchRunner
from cosmic_battle.sim.team import build_reserve, split_team


def run_comparison(
    save_path: str,
    team_ids: list[str],
    boss_names: list[str] | None,
    n_runs: int = 200,
    out_path: str = "boss_comparison.png",
) -> None:
    print("Loading catalog...")
    catalog = CardCatalog.load()
    imported = import_save(Path(save_path).read_text(encoding="utf-8"), catalog)
    owned = {c.id: c for c in imported.roster}
    config = imported.config

    team, overflow = split_team([owned[cid] for cid in team_ids], config.slot_limit)
    reserve = build_reserve(overflow, config)
    bosses = [catalog.get_boss(n) for n in boss_names] if boss_names else catalog.bosses
    bosses = [b for b in bosses if b is not None]

    runner = BatchRunner(config)
    results = {}
    for boss in bosses:
        print(f"\nRunning {n_runs} battles vs {boss.name}...")
        t0 = time.time()
        batch = runner.run_batch(team, boss, n_runs, reserve=reserve)
        elapsed = time.time() - t0

        summary = summarize(batch, boss.name)
        rounds = [r.rounds for r in batch]
        results[boss.name] = {
            "summary": summary,
            "rounds": rounds,
        }

        print(f"  Time: {elapsed:.1f}s ({elapsed/max(1, len(batch))*1000:.1f}ms/battle)")
        print(f"  Win rate: {summary.victories}/{summary.total_fights} ({summary.win_rate*100:.1f}%)")
        print(f"  Avg rounds: {np.mean(rounds):.1f} (median {np.median(rounds):.0f})")

    generate_charts(results, n_runs, out_path)


def generate_charts(results: dict, n_runs: int, out_path: str) -> None:
    fig, axes = plt.subplots(1, 2, figsize=(14, 6))
    fig.suptitle(f"Team vs Bosses - {n_runs} battles each", fontsize=16, fontweight="bold")

    labels = list(results.keys())
    colors = plt.cm.viridis(np.linspace(0.15, 0.85, len(labels)))

    # --- Chart 1: Win Rate ---
    ax = axes[0]
    win_rates = [results[l]["summary"].win_rate * 100 for l in labels]
    bars = ax.bar(labels, win_rates, color=colors, edgecolor="black", linewidth=0.5)
    for bar, rate in zip(bars, win_rates):
        ax.text(bar.get_x() + bar.get_width()/2, bar.get_height() + 0.5,
                f"{rate:.1f}%", ha="center", va="bottom", fontsize=9, fontweight="bold")
    ax.set_ylabel("Win Rate (%)")
    ax.set_title("Win Rate by Boss")
    ax.set_ylim(0, 110)
    ax.tick_params(axis="x", rotation=45)

    # --- Chart 2: Rounds Distribution ---
    ax = axes[1]
    ax.boxplot([results[l]["rounds"] for l in labels])
    ax.set_xticks(np.arange(1, len(labels) + 1), labels)
    ax.set_ylabel("Rounds")
    ax.set_title("Battle Length")
    ax.tick_params(axis="x", rotation=45)

    plt.tight_layout()
    plt.savefig(out_path, dpi=150, bbox_inches="tight")
    print(f"\nChart saved to {out_path}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--save", type=str, required=True, help="Exported save file")
    parser.add_argument("--team", nargs="+", required=True, help="Card ids in slot order")
    parser.add_argument("--bosses", nargs="*", default=None, help="Boss names (default: all)")
    parser.add_argument("--runs", type=int, default=200, help="Battles per boss")
    parser.add_argument("--output", type=str, default="boss_comparison.png", help="Chart path")
    args = parser.parse_args()
    run_comparison(args.save, args.team, args.bosses, args.runs, args.output)
