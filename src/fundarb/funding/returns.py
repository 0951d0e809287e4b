"""Projected returns of a funding rate arbitrage position over time.

Given the capital and leverage of both legs and a series of per-period
funding rates, builds the cumulative funding PnL curve:

    N_long  = long_margin * long_leverage
    N_short = short_margin * short_leverage
    pnl_i   = N_short * short_rate_i - N_long * long_rate_i

Notionals are held constant over the series. The entry fee is charged
once before the first settlement; the exit fee is left off the running
curve because the position is still open.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from datetime import datetime, timedelta

from fundarb.errors import InvalidOrderError
from fundarb.funding.rates import DEFAULT_INTERVAL_HOURS
from fundarb.models.funding import FundingRatePoint, FundingReturnPoint

DEFAULT_ENTRY_FEE_RATE = 0.0005

_RATE_VARIATION = 0.3


def _pct(value: float, capital: float) -> float:
    return (value / capital) * 100 if capital != 0 else 0.0


def project_funding_returns(
    long_margin: float,
    short_margin: float,
    long_leverage: float,
    short_leverage: float,
    rates: Sequence[FundingRatePoint],
    entry_fee_rate: float = DEFAULT_ENTRY_FEE_RATE,
) -> list[FundingReturnPoint]:
    """Build the cumulative funding return curve for a rate series.

    Args:
        long_margin: Capital posted on the long leg, >= 0.
        short_margin: Capital posted on the short leg, >= 0.
        long_leverage: Long leg leverage, >= 1.
        short_leverage: Short leg leverage, >= 1.
        rates: Funding settlements in chronological order.
        entry_fee_rate: Fee on total notional charged at entry, >= 0.

    Returns:
        One FundingReturnPoint per settlement. Percentages are 0 when the
        total capital is 0.

    Raises:
        InvalidOrderError: If a margin is negative, a leverage is below 1,
            or the fee rate is negative.
    """
    if long_margin < 0:
        raise InvalidOrderError("long_margin", long_margin, "must be >= 0")
    if short_margin < 0:
        raise InvalidOrderError("short_margin", short_margin, "must be >= 0")
    if long_leverage < 1:
        raise InvalidOrderError("long_leverage", long_leverage, "must be >= 1")
    if short_leverage < 1:
        raise InvalidOrderError("short_leverage", short_leverage, "must be >= 1")
    if entry_fee_rate < 0:
        raise InvalidOrderError("entry_fee_rate", entry_fee_rate, "must be >= 0")

    capital = long_margin + short_margin
    long_notional = long_margin * long_leverage
    short_notional = short_margin * short_leverage

    cumulative = -(long_notional + short_notional) * entry_fee_rate
    points: list[FundingReturnPoint] = []

    for rate in rates:
        interval_pnl = short_notional * rate.short_rate - long_notional * rate.long_rate
        cumulative += interval_pnl
        points.append(
            FundingReturnPoint(
                timestamp=rate.timestamp,
                long_rate=rate.long_rate,
                short_rate=rate.short_rate,
                net_rate_pct=_pct(interval_pnl, capital),
                long_notional=long_notional,
                short_notional=short_notional,
                interval_pnl=interval_pnl,
                cumulative_pnl=cumulative,
                equity=capital + cumulative,
                cumulative_return_pct=_pct(cumulative, capital),
                interval_return_pct=_pct(interval_pnl, capital),
            )
        )

    return points


def simulate_rate_history(
    long_rate: float,
    short_rate: float,
    end: datetime,
    duration_hours: float = 24.0,
    interval_hours: float = DEFAULT_INTERVAL_HOURS,
    rng: random.Random | None = None,
) -> list[FundingRatePoint]:
    """Generate a demo rate series around the given current rates.

    Each point varies both rates by up to +/-15% and floors them at 0.
    The last point falls on ``end``.

    Args:
        long_rate: Current long venue rate per period.
        short_rate: Current short venue rate per period.
        end: Timestamp of the most recent settlement.
        duration_hours: Length of the series.
        interval_hours: Spacing between settlements.
        rng: Random source. A fresh unseeded one is used when None.
    """
    if interval_hours <= 0:
        raise ValueError(f"interval_hours must be > 0, got {interval_hours}")
    rng = rng or random.Random()
    count = int(duration_hours // interval_hours)
    step = timedelta(hours=interval_hours)

    points: list[FundingRatePoint] = []
    for i in range(count):
        long_jitter = (rng.random() - 0.5) * _RATE_VARIATION * long_rate
        short_jitter = (rng.random() - 0.5) * _RATE_VARIATION * short_rate
        points.append(
            FundingRatePoint(
                timestamp=end - step * (count - i - 1),
                long_rate=max(0.0, long_rate + long_jitter),
                short_rate=max(0.0, short_rate + short_jitter),
            )
        )
    return points
