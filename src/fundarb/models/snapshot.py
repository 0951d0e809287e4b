"""Return snapshot models produced by the arbitrage return calculator."""

from __future__ import annotations

from pydantic import BaseModel

from fundarb.models.position import PositionSide


class LegReturn(BaseModel):
    """Per-leg figures of a return snapshot.

    Attributes:
        exchange: Venue of the leg.
        asset: Normalized base asset.
        side: Long or short.
        current_price: Price used for PnL, None when unavailable.
        price_unavailable: True when no usable price was found; the leg's
            unrealized PnL is then 0.
        unrealized_pnl: Mark-to-market PnL on quantity_base.
        funding_rate: Per-period rate used for funding estimates.
        funding_rate_unavailable: True when the entry rate was used because
            no current rate was found.
        periods_per_day: Funding periods per day on this venue.
        daily_funding_usd: Signed funding cashflow per day (received > 0).
        accrued_funding_usd: Signed funding accrued since the leg opened.
    """

    model_config = {"frozen": True}

    exchange: str
    asset: str
    side: PositionSide
    current_price: float | None
    price_unavailable: bool
    unrealized_pnl: float
    funding_rate: float
    funding_rate_unavailable: bool
    periods_per_day: float
    daily_funding_usd: float
    accrued_funding_usd: float = 0.0


class ReturnSnapshot(BaseModel):
    """Derived, stateless view of an arbitrage position at current market data.

    Spreads are per-period rate differentials with the sign convention
    ``short rate - long rate``: positive means the position collects more
    funding on the short venue than it pays on the long venue.

    Attributes:
        position_id: Id of the source position, if any.
        long: Long leg figures.
        short: Short leg figures.
        unrealized_pnl_long: Long leg mark-to-market PnL.
        unrealized_pnl_short: Short leg mark-to-market PnL.
        net_unrealized_pnl: Sum of both legs' unrealized PnL.
        entry_spread: Funding spread captured at entry.
        current_spread: Funding spread at the current rates.
        annualized_spread_pct: current_spread annualized, in percent.
        directional_bias_usd: long notional - short notional.
        directional_bias_percent: directional_bias_usd / total_equity * 100,
            0 when total_equity is 0.
        total_equity: Equity the bias is measured against.
        total_margin: Margin committed across both legs.
        total_fees: Entry fees across both legs.
        estimated_daily_funding_usd: Net funding received per day.
        estimated_apr_pct: Daily funding annualized over total margin.
        accrued_funding_usd: Net funding accrued since entry.
        net_pnl: net_unrealized_pnl + accrued_funding_usd - total_fees.
        price_unavailable: True when either leg lacked a usable price.
    """

    model_config = {"frozen": True}

    position_id: str | None = None
    long: LegReturn
    short: LegReturn
    unrealized_pnl_long: float
    unrealized_pnl_short: float
    net_unrealized_pnl: float
    entry_spread: float
    current_spread: float
    annualized_spread_pct: float
    directional_bias_usd: float
    directional_bias_percent: float
    total_equity: float
    total_margin: float
    total_fees: float
    estimated_daily_funding_usd: float
    estimated_apr_pct: float
    accrued_funding_usd: float
    net_pnl: float
    price_unavailable: bool

    @property
    def spread_change(self) -> float:
        """How far the funding spread moved since entry."""
        return self.current_spread - self.entry_spread
