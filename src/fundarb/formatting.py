"""Display formatting for rates, PnL, and returns."""

from __future__ import annotations


def format_funding_rate(rate_pct: float) -> str:
    """``0.0125`` -> ``+0.0125%``."""
    return f"+{rate_pct:.4f}%" if rate_pct >= 0 else f"{rate_pct:.4f}%"


def format_pnl(pnl_usd: float) -> str:
    """``12.345`` -> ``+$12.35``; negatives keep the sign after the dollar."""
    sign = "+" if pnl_usd >= 0 else ""
    return f"{sign}${pnl_usd:.2f}"


def format_return(return_pct: float) -> str:
    """``3.14159`` -> ``+3.14%``."""
    sign = "+" if return_pct >= 0 else ""
    return f"{sign}{return_pct:.2f}%"
