"""Account and portfolio summary models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from fundarb.models.position import Leg


class AccountState(BaseModel):
    """Cash balance plus every trade recorded against the account.

    Instances are never mutated; ledger operations return new states.

    Attributes:
        cash_usd: Uncommitted balance. May go negative, no margin checks.
        trades: Recorded legs in submission order.
    """

    model_config = {"frozen": True}

    cash_usd: float = 0.0
    trades: tuple[Leg, ...] = ()


class PortfolioSummary(BaseModel):
    """Account-level figures folded from open trades and current prices.

    Trades whose asset has no usable price are left out of every sum and
    listed in ``excluded_assets`` / ``excluded_trade_ids``.

    Attributes:
        cash_usd: Uncommitted balance.
        total_equity: cash_usd + total_margin + unrealized_pnl.
        total_margin: Margin locked in priced trades.
        total_notional: Notional of priced trades.
        total_fees: Entry fees of priced trades.
        unrealized_pnl: Mark-to-market PnL of priced trades.
        unrealized_pnl_percent: unrealized_pnl / total_equity * 100.
        directional_bias_usd: Net notional (long - short).
        directional_bias_percent: directional_bias_usd / total_equity * 100.
        trade_count: Trades included in the sums.
        excluded_assets: Sorted assets without a usable price.
        excluded_trade_ids: Ids of trades left out (unnamed trades omitted).
        currency: Reporting currency label.
    """

    model_config = {"frozen": True}

    cash_usd: float
    total_equity: float
    total_margin: float
    total_notional: float
    total_fees: float
    unrealized_pnl: float
    unrealized_pnl_percent: float
    directional_bias_usd: float
    directional_bias_percent: float
    trade_count: int
    excluded_assets: list[str] = Field(default_factory=list)
    excluded_trade_ids: list[str] = Field(default_factory=list)
    currency: str = "USDC"

    @property
    def price_unavailable(self) -> bool:
        """True when at least one trade was excluded for lack of a price."""
        return bool(self.excluded_assets)
