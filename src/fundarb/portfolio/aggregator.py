"""Portfolio aggregation over open trades and current prices."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from pydantic import BaseModel

from fundarb.core.calculator import leg_unrealized_pnl, safe_percent
from fundarb.core.orders import validate_leg
from fundarb.logging import get_logger
from fundarb.models.market import MarketSnapshot
from fundarb.models.portfolio import PortfolioSummary
from fundarb.models.position import ArbitragePosition, Leg
from fundarb.models.snapshot import ReturnSnapshot

logger = get_logger("portfolio.aggregator")


def summarize(
    trades: Iterable[Leg],
    cash_usd: float,
    price_by_asset: Mapping[str, float] | MarketSnapshot,
    currency: str = "USDC",
) -> PortfolioSummary:
    """Fold trades and current prices into account-level figures.

    A trade whose asset has no usable price is left out of every sum,
    not only PnL, and is reported in ``excluded_assets`` and
    ``excluded_trade_ids``.

    Args:
        trades: Open legs of the account.
        cash_usd: Uncommitted balance.
        price_by_asset: Asset -> current price, or a MarketSnapshot.
        currency: Reporting currency label.

    Returns:
        PortfolioSummary with zero-guarded percentages.

    Raises:
        InvalidOrderError: If a trade holds non-finite or negative numbers.
    """
    market = (
        price_by_asset
        if isinstance(price_by_asset, MarketSnapshot)
        else MarketSnapshot(prices=dict(price_by_asset))
    )

    total_notional = 0.0
    total_margin = 0.0
    total_fees = 0.0
    unrealized_pnl = 0.0
    net_notional = 0.0
    included = 0
    excluded_assets: set[str] = set()
    excluded_ids: list[str] = []

    for trade in trades:
        validate_leg(trade)
        current_price = market.price(trade.asset)
        if current_price is None:
            excluded_assets.add(trade.asset)
            if trade.id is not None:
                excluded_ids.append(trade.id)
            continue

        total_notional += trade.notional_usd
        total_margin += trade.margin_usd
        total_fees += trade.fee_usd
        net_notional += trade.signed_notional
        unrealized_pnl += leg_unrealized_pnl(trade, current_price)
        included += 1

    if excluded_assets:
        logger.warning(
            "trades_excluded_from_summary",
            assets=sorted(excluded_assets),
            trade_ids=excluded_ids,
        )

    total_equity = cash_usd + total_margin + unrealized_pnl

    return PortfolioSummary(
        cash_usd=cash_usd,
        total_equity=total_equity,
        total_margin=total_margin,
        total_notional=total_notional,
        total_fees=total_fees,
        unrealized_pnl=unrealized_pnl,
        unrealized_pnl_percent=safe_percent(unrealized_pnl, total_equity),
        directional_bias_usd=net_notional,
        directional_bias_percent=safe_percent(net_notional, total_equity),
        trade_count=included,
        excluded_assets=sorted(excluded_assets),
        excluded_trade_ids=excluded_ids,
        currency=currency,
    )


def position_legs(positions: Iterable[ArbitragePosition]) -> list[Leg]:
    """Flatten the open positions into their legs, long leg first."""
    legs: list[Leg] = []
    for position in positions:
        if position.is_open:
            legs.extend(position.legs)
    return legs


class PositionsOverview(BaseModel):
    """Totals across the return snapshots of open positions.

    Percentages are relative to total notional and are 0 when it is 0.
    """

    model_config = {"frozen": True}

    total_unrealized_pnl: float
    total_funding_pnl: float
    total_pnl: float
    total_notional: float
    unrealized_pnl_percent: float
    funding_pnl_percent: float
    total_pnl_percent: float
    open_position_count: int


def summarize_positions(
    positions: Iterable[ArbitragePosition],
    snapshots: Mapping[str, ReturnSnapshot],
) -> PositionsOverview:
    """Aggregate per-position snapshots, keyed by position id.

    Open positions without a snapshot still count as open but add
    nothing to the totals.
    """
    total_unrealized = 0.0
    total_funding = 0.0
    total_notional = 0.0
    open_count = 0

    for position in positions:
        if not position.is_open:
            continue
        open_count += 1
        snapshot = snapshots.get(position.id) if position.id is not None else None
        if snapshot is None:
            continue
        total_unrealized += snapshot.net_unrealized_pnl
        total_funding += snapshot.accrued_funding_usd
        total_notional += position.total_notional

    total_pnl = total_unrealized + total_funding
    return PositionsOverview(
        total_unrealized_pnl=total_unrealized,
        total_funding_pnl=total_funding,
        total_pnl=total_pnl,
        total_notional=total_notional,
        unrealized_pnl_percent=safe_percent(total_unrealized, total_notional),
        funding_pnl_percent=safe_percent(total_funding, total_notional),
        total_pnl_percent=safe_percent(total_pnl, total_notional),
        open_position_count=open_count,
    )
