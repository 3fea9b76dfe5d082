"""Batch simulation statistics: summaries, metrics, and reports."""

from cosmic_battle.balance.metrics import summarize, win_rate
from cosmic_battle.balance.models import SimulationSummary
from cosmic_battle.balance.report import generate_fight_lines, generate_text_report
from cosmic_battle.balance.summaries import generate_summary, load_summary, save_summary

__all__ = [
    "SimulationSummary",
    "generate_fight_lines",
    "generate_summary",
    "generate_text_report",
    "load_summary",
    "save_summary",
    "summarize",
    "win_rate",
]
