"""PnL history tracking and exposure breakdown.

Records periodic PnL data points for charting. Timestamps always come
from the caller, which keeps the history deterministic under test.
Naive timestamps are treated as UTC.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta

from pydantic import BaseModel, field_validator

from fundarb.logging import get_logger
from fundarb.models.position import ArbitragePosition, as_utc
from fundarb.portfolio.aggregator import PositionsOverview

logger = get_logger("portfolio.history")


class Exposure(BaseModel):
    """Gross and net notional exposure across open positions."""

    model_config = {"frozen": True}

    long_usd: float = 0.0
    short_usd: float = 0.0

    @property
    def net_usd(self) -> float:
        return self.long_usd - self.short_usd


class PnlDataPoint(BaseModel):
    """One recorded point of the PnL series."""

    model_config = {"frozen": True}

    timestamp: datetime
    unrealized_pnl: float
    funding_pnl: float
    net_pnl: float
    long_exposure: float
    short_exposure: float
    net_position: float
    position_count: int

    @field_validator("timestamp")
    @classmethod
    def _timestamp_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


def exposure_breakdown(positions: Iterable[ArbitragePosition]) -> Exposure:
    """Sum leg notional by side across open positions."""
    long_usd = 0.0
    short_usd = 0.0
    for position in positions:
        if not position.is_open:
            continue
        for leg in position.legs:
            if leg.is_long:
                long_usd += leg.notional_usd
            else:
                short_usd += leg.notional_usd
    return Exposure(long_usd=long_usd, short_usd=short_usd)


def make_data_point(
    timestamp: datetime,
    overview: PositionsOverview,
    exposure: Exposure,
) -> PnlDataPoint:
    """Build a data point from position totals and exposure."""
    return PnlDataPoint(
        timestamp=timestamp,
        unrealized_pnl=overview.total_unrealized_pnl,
        funding_pnl=overview.total_funding_pnl,
        net_pnl=overview.total_pnl,
        long_exposure=exposure.long_usd,
        short_exposure=exposure.short_usd,
        net_position=exposure.net_usd,
        position_count=overview.open_position_count,
    )


class PnlHistory:
    """Time-ordered PnL series with a minimum spacing and a maximum age.

    Attributes:
        max_age_hours: Points older than this are dropped by ``prune``.
        min_interval_seconds: Points closer than this to the previous one
            are not recorded.
    """

    def __init__(
        self,
        max_age_hours: float = 168.0,
        min_interval_seconds: float = 30.0,
    ) -> None:
        if max_age_hours <= 0:
            raise ValueError(f"max_age_hours must be > 0, got {max_age_hours}")
        if min_interval_seconds < 0:
            raise ValueError(
                f"min_interval_seconds must be >= 0, got {min_interval_seconds}"
            )
        self.max_age_hours = max_age_hours
        self.min_interval_seconds = min_interval_seconds
        self._points: list[PnlDataPoint] = []

    def __len__(self) -> int:
        return len(self._points)

    @property
    def points(self) -> list[PnlDataPoint]:
        return list(self._points)

    @property
    def latest(self) -> PnlDataPoint | None:
        return self._points[-1] if self._points else None

    def record(self, point: PnlDataPoint) -> bool:
        """Append a point unless it is too close to, or older than, the last one.

        Returns:
            True if the point was recorded.
        """
        last = self.latest
        if last is not None:
            elapsed = (point.timestamp - last.timestamp).total_seconds()
            if elapsed < self.min_interval_seconds or elapsed < 0:
                return False
        self._points.append(point)
        return True

    def prune(self, now: datetime) -> int:
        """Drop points older than ``max_age_hours`` before ``now``.

        Returns:
            Number of points removed.
        """
        cutoff = as_utc(now) - timedelta(hours=self.max_age_hours)
        kept = [p for p in self._points if p.timestamp >= cutoff]
        removed = len(self._points) - len(kept)
        self._points = kept
        if removed:
            logger.debug("pnl_history_pruned", removed=removed, remaining=len(kept))
        return removed

    def points_since(self, since: datetime) -> list[PnlDataPoint]:
        since = as_utc(since)
        return [p for p in self._points if p.timestamp >= since]

    def clear(self) -> None:
        self._points.clear()
