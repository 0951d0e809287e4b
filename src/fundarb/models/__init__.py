"""Data models (Pydantic).

Re-exports all core data models for convenient imports:

    from fundarb.models import Leg, ArbitragePosition, MarketSnapshot
"""

from fundarb.models.funding import (
    FundingRatePoint,
    FundingReturnPoint,
    NormalizedFundingRate,
)
from fundarb.models.market import MarketSnapshot
from fundarb.models.portfolio import AccountState, PortfolioSummary
from fundarb.models.position import (
    ArbitragePosition,
    Leg,
    PositionSide,
    PositionStatus,
    Trade,
)
from fundarb.models.snapshot import LegReturn, ReturnSnapshot

__all__ = [
    "AccountState",
    "ArbitragePosition",
    "FundingRatePoint",
    "FundingReturnPoint",
    "Leg",
    "LegReturn",
    "MarketSnapshot",
    "NormalizedFundingRate",
    "PortfolioSummary",
    "PositionSide",
    "PositionStatus",
    "ReturnSnapshot",
    "Trade",
]
