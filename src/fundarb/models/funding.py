"""Funding rate value types.

All rates are fractions per funding period (0.0001 = 0.01% per period)
unless the field name ends in ``_pct``.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class NormalizedFundingRate(BaseModel):
    """One venue's funding rate expressed over several horizons.

    Attributes:
        raw: Value as quoted by the feed.
        interval_hours: Native funding interval of the venue.
        one_hour: Rate per hour.
        eight_hour: Rate per eight hours.
        daily: Rate per day.
        yearly_pct: Annualized rate, in percent.
    """

    model_config = {"frozen": True}

    raw: float
    interval_hours: float
    one_hour: float
    eight_hour: float
    daily: float
    yearly_pct: float


class FundingRatePoint(BaseModel):
    """Funding rates of both legs at one settlement.

    Attributes:
        timestamp: Settlement time.
        long_rate: Rate paid by the long leg, per period.
        short_rate: Rate received by the short leg, per period.
    """

    model_config = {"frozen": True}

    timestamp: datetime
    long_rate: float
    short_rate: float


class FundingReturnPoint(BaseModel):
    """One point of a projected funding return curve.

    Attributes:
        timestamp: Settlement time.
        long_rate: Long leg rate at this settlement.
        short_rate: Short leg rate at this settlement.
        net_rate_pct: Interval funding PnL over starting capital, percent.
        long_notional: Long leg notional.
        short_notional: Short leg notional.
        interval_pnl: Funding PnL of this settlement.
        cumulative_pnl: Running PnL including the entry cost.
        equity: Starting capital + cumulative_pnl.
        cumulative_return_pct: cumulative_pnl over starting capital, percent.
        interval_return_pct: interval_pnl over starting capital, percent.
    """

    model_config = {"frozen": True}

    timestamp: datetime
    long_rate: float
    short_rate: float
    net_rate_pct: float
    long_notional: float
    short_notional: float
    interval_pnl: float
    cumulative_pnl: float
    equity: float
    cumulative_return_pct: float
    interval_return_pct: float
