# src/leasehold/domain/money.py
from __future__ import annotations

import math


def round_currency(amount: float) -> int:
    """Round half-up to whole currency units (0.5 -> 1, not banker's rounding)."""
    return int(math.floor(amount + 0.5))


def format_money(amount: float | None) -> str:
    """
    Compact GBP formatting used for display:
      1_250_000 -> "£1.25M", 500_000 -> "£500K", 950 -> "£950"
    """
    if not amount or not math.isfinite(amount):
        return "£0"
    if amount >= 1_000_000:
        s = f"{amount / 1_000_000:.2f}"
        if s.endswith(".00"):
            s = s[:-3]
        return f"£{s}M"
    if amount >= 1_000:
        s = f"{amount / 1_000:,.1f}"
        if s.endswith(".0"):
            s = s[:-2]
        return f"£{s}K"
    return f"£{amount:,.0f}"
