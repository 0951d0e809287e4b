"""Arbitrage return calculator.

Pure computation over a position and an immutable market snapshot. No
state is read or written between calls, so a calculator instance can be
shared freely.

Sign conventions:
    - unrealized PnL: long = (current - entry) * qty,
      short = (entry - current) * qty.
    - directional bias: long notional - short notional (positive = net long).
    - funding spread: short rate - long rate (positive = net collected).
    - funding cashflows: a long leg pays ``notional * rate`` per period and
      a short leg receives it; positive values are money received.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime

from fundarb.core.orders import check_pairing, validate_leg
from fundarb.funding.rates import (
    DAYS_PER_YEAR,
    DEFAULT_PERIODS_PER_DAY,
    HOURS_PER_DAY,
    annualize,
    funding_spread,
)
from fundarb.logging import get_logger
from fundarb.models.market import MarketSnapshot
from fundarb.models.position import ArbitragePosition, Leg, PositionSide, as_utc
from fundarb.models.snapshot import LegReturn, ReturnSnapshot

logger = get_logger("core.calculator")


def safe_percent(numerator: float, denominator: float) -> float:
    """``numerator / denominator * 100``, or 0.0 when the denominator is 0."""
    if denominator == 0:
        return 0.0
    return (numerator / denominator) * 100


def leg_unrealized_pnl(leg: Leg, current_price: float) -> float:
    """Mark-to-market PnL of one leg at a given price."""
    if leg.side == PositionSide.LONG:
        return (current_price - leg.entry_price) * leg.quantity_base
    return (leg.entry_price - current_price) * leg.quantity_base


def leg_funding_per_period(leg: Leg, rate: float) -> float:
    """Signed funding cashflow of one leg for one settlement."""
    payment = leg.notional_usd * rate
    return -payment if leg.side == PositionSide.LONG else payment


class ReturnCalculator:
    """Computes return snapshots for paired long/short positions.

    Args:
        periods_per_day: Funding settlements per day for venues without an
            override (3 for eight-hour funding).
        exchange_periods_per_day: Per-venue overrides, keyed by exchange
            name (case-insensitive).
    """

    def __init__(
        self,
        periods_per_day: float = DEFAULT_PERIODS_PER_DAY,
        exchange_periods_per_day: Mapping[str, float] | None = None,
    ) -> None:
        if periods_per_day <= 0:
            raise ValueError(f"periods_per_day must be > 0, got {periods_per_day}")
        self.periods_per_day = periods_per_day
        self.exchange_periods_per_day = {
            name.lower(): value for name, value in (exchange_periods_per_day or {}).items()
        }
        for name, value in self.exchange_periods_per_day.items():
            if value <= 0:
                raise ValueError(f"periods_per_day for {name} must be > 0, got {value}")

    def periods_for(self, exchange: str) -> float:
        """Funding settlements per day on a venue."""
        return self.exchange_periods_per_day.get(exchange.lower(), self.periods_per_day)

    def _leg_return(
        self,
        leg: Leg,
        market: MarketSnapshot,
        as_of: datetime | None,
    ) -> LegReturn:
        current_price = market.price(leg.asset)
        if current_price is None:
            pnl = 0.0
            logger.debug("price_unavailable", asset=leg.asset, exchange=leg.exchange)
        else:
            pnl = leg_unrealized_pnl(leg, current_price)

        rate = market.funding_rate(leg.asset, leg.exchange)
        rate_missing = rate is None
        if rate is None:
            rate = leg.entry_funding_rate

        periods = self.periods_for(leg.exchange)
        daily = leg_funding_per_period(leg, rate) * periods

        accrued = 0.0
        if as_of is not None and leg.opened_at is not None:
            # Naive timestamps are read as UTC.
            held = as_utc(as_of) - as_utc(leg.opened_at)
            held_days = max(held.total_seconds(), 0.0) / 3600 / HOURS_PER_DAY
            accrued = daily * held_days

        return LegReturn(
            exchange=leg.exchange,
            asset=leg.asset,
            side=leg.side,
            current_price=current_price,
            price_unavailable=current_price is None,
            unrealized_pnl=pnl,
            funding_rate=rate,
            funding_rate_unavailable=rate_missing,
            periods_per_day=periods,
            daily_funding_usd=daily,
            accrued_funding_usd=accrued,
        )

    def compute(
        self,
        position: ArbitragePosition,
        market: MarketSnapshot,
        total_equity: float | None = None,
        as_of: datetime | None = None,
    ) -> ReturnSnapshot:
        """Compute the return snapshot of a position at current market data.

        Missing prices zero the affected leg's unrealized PnL and set
        ``price_unavailable``; missing funding rates fall back to the
        leg's entry rate and set ``funding_rate_unavailable``.

        Args:
            position: The long/short pair.
            market: Prices and funding rates to evaluate against.
            total_equity: Equity for the directional bias percentage.
                Defaults to the position's margin plus unrealized PnL.
            as_of: Valuation time for accrued funding. None skips accrual.

        Returns:
            ReturnSnapshot for the position.

        Raises:
            InvalidOrderError: If a leg holds non-finite or negative numbers.
            InconsistentLegError: If a leg sits in the wrong side's slot.
        """
        long_leg, short_leg = position.long_leg, position.short_leg
        validate_leg(long_leg)
        validate_leg(short_leg)
        check_pairing(long_leg, short_leg)

        long_ret = self._leg_return(long_leg, market, as_of)
        short_ret = self._leg_return(short_leg, market, as_of)

        net_unrealized = long_ret.unrealized_pnl + short_ret.unrealized_pnl
        net_notional = long_leg.notional_usd - short_leg.notional_usd
        spread = funding_spread(long_ret.funding_rate, short_ret.funding_rate)

        total_margin = position.total_margin
        equity = total_equity if total_equity is not None else total_margin + net_unrealized

        daily_funding = long_ret.daily_funding_usd + short_ret.daily_funding_usd
        accrued = long_ret.accrued_funding_usd + short_ret.accrued_funding_usd
        total_fees = position.total_fees

        # Annualize the spread at the slower of the two venues' schedules.
        spread_periods = min(long_ret.periods_per_day, short_ret.periods_per_day)

        return ReturnSnapshot(
            position_id=position.id,
            long=long_ret,
            short=short_ret,
            unrealized_pnl_long=long_ret.unrealized_pnl,
            unrealized_pnl_short=short_ret.unrealized_pnl,
            net_unrealized_pnl=net_unrealized,
            entry_spread=position.entry_spread,
            current_spread=spread,
            annualized_spread_pct=annualize(spread, spread_periods),
            directional_bias_usd=net_notional,
            directional_bias_percent=safe_percent(net_notional, equity),
            total_equity=equity,
            total_margin=total_margin,
            total_fees=total_fees,
            estimated_daily_funding_usd=daily_funding,
            estimated_apr_pct=safe_percent(daily_funding * DAYS_PER_YEAR, total_margin),
            accrued_funding_usd=accrued,
            net_pnl=net_unrealized + accrued - total_fees,
            price_unavailable=long_ret.price_unavailable or short_ret.price_unavailable,
        )


def compute_return(
    position: ArbitragePosition,
    market: MarketSnapshot,
    periods_per_day: float = DEFAULT_PERIODS_PER_DAY,
    total_equity: float | None = None,
    as_of: datetime | None = None,
) -> ReturnSnapshot:
    """Compute a return snapshot with a single funding schedule for both venues."""
    calculator = ReturnCalculator(periods_per_day=periods_per_day)
    return calculator.compute(position, market, total_equity=total_equity, as_of=as_of)
