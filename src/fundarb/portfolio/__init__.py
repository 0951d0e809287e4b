"""Portfolio aggregation, account ledger, and PnL history."""

from fundarb.portfolio.aggregator import (
    PositionsOverview,
    position_legs,
    summarize,
    summarize_positions,
)
from fundarb.portfolio.history import (
    Exposure,
    PnlDataPoint,
    PnlHistory,
    exposure_breakdown,
    make_data_point,
)
from fundarb.portfolio.ledger import (
    deposit,
    place_order,
    record_position,
    record_trade,
    reset,
    summarize_account,
)

__all__ = [
    "Exposure",
    "PnlDataPoint",
    "PnlHistory",
    "PositionsOverview",
    "deposit",
    "exposure_breakdown",
    "make_data_point",
    "place_order",
    "position_legs",
    "record_position",
    "record_trade",
    "reset",
    "summarize",
    "summarize_account",
    "summarize_positions",
]
