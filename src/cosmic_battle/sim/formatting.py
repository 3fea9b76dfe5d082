"""Compact number formatting for battle log lines."""

from __future__ import annotations

_UNITS = ((1e12, "T"), (1e9, "B"), (1e6, "M"), (1e3, "K"))


def format_number(n: float) -> str:
    """Format *n* with a K/M/B/T suffix and two decimals, e.g. ``1.50M``.

    Values below one thousand (including negatives) keep their plain form;
    floats among them are rounded to two decimals.
    """
    for threshold, suffix in _UNITS:
        if n >= threshold:
            return f"{n / threshold:.2f}{suffix}"
    if isinstance(n, float):
        n = round(n, 2)
        if n.is_integer():
            n = int(n)
    return str(n)
