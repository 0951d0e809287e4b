"""Leg and arbitrage position data models."""

from __future__ import annotations

import enum
from datetime import UTC, datetime

from pydantic import BaseModel, field_validator


def as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to a naive timestamp; aware timestamps pass through."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class PositionSide(str, enum.Enum):
    """Side of a leg."""

    LONG = "long"
    SHORT = "short"


class PositionStatus(str, enum.Enum):
    """Lifecycle status of an arbitrage position."""

    OPEN = "open"
    CLOSED = "closed"


class Leg(BaseModel):
    """One side of an arbitrage position.

    Built through ``fundarb.core.orders.open_leg`` so that the derived
    fields stay consistent with the inputs.

    Attributes:
        id: Caller-assigned leg identifier.
        exchange: Venue identifier (e.g. "hyperliquid").
        symbol: Instrument symbol as submitted (e.g. "BTC:PERP-USDC").
        asset: Normalized base asset used for price lookups (e.g. "BTC").
        side: Long or short.
        quantity_base: Amount of the underlying, notional_usd / entry_price.
        leverage: Exposure multiplier applied to margin, >= 1.
        notional_usd: USD value at entry, independent of leverage.
        margin_usd: Collateral committed, notional_usd / leverage.
        entry_price: USD price of the base asset at open.
        entry_funding_rate: Funding rate per period captured at entry.
        fee_usd: Trading fee charged at entry.
        opened_at: Creation timestamp, if known.
    """

    model_config = {"frozen": True}

    id: str | None = None
    exchange: str = ""
    symbol: str
    asset: str
    side: PositionSide
    quantity_base: float
    leverage: float
    notional_usd: float
    margin_usd: float
    entry_price: float
    entry_funding_rate: float = 0.0
    fee_usd: float = 0.0
    opened_at: datetime | None = None

    @field_validator("opened_at")
    @classmethod
    def _opened_at_utc(cls, value: datetime | None) -> datetime | None:
        return as_utc(value)

    @property
    def is_long(self) -> bool:
        return self.side == PositionSide.LONG

    @property
    def signed_notional(self) -> float:
        """Notional with sign: positive for long, negative for short."""
        return self.notional_usd if self.is_long else -self.notional_usd


# Portfolio code calls single legs "trades".
Trade = Leg


class ArbitragePosition(BaseModel):
    """A paired long/short position on the same base asset.

    Attributes:
        id: Caller-assigned position identifier.
        asset: Shared base asset.
        long_leg: The long side.
        short_leg: The short side.
        entry_spread: short_leg.entry_funding_rate - long_leg.entry_funding_rate.
        status: Open or closed.
        opened_at: When the position was opened.
        closed_at: When both legs were unwound, None while open.
        notes: Free-form strategy notes.
    """

    model_config = {"frozen": True}

    id: str | None = None
    asset: str
    long_leg: Leg
    short_leg: Leg
    entry_spread: float = 0.0
    status: PositionStatus = PositionStatus.OPEN
    opened_at: datetime | None = None
    closed_at: datetime | None = None
    notes: str | None = None

    @field_validator("opened_at", "closed_at")
    @classmethod
    def _timestamps_utc(cls, value: datetime | None) -> datetime | None:
        return as_utc(value)

    @property
    def is_open(self) -> bool:
        return self.status == PositionStatus.OPEN

    @property
    def legs(self) -> tuple[Leg, Leg]:
        return (self.long_leg, self.short_leg)

    @property
    def total_notional(self) -> float:
        return self.long_leg.notional_usd + self.short_leg.notional_usd

    @property
    def total_margin(self) -> float:
        return self.long_leg.margin_usd + self.short_leg.margin_usd

    @property
    def total_fees(self) -> float:
        return self.long_leg.fee_usd + self.short_leg.fee_usd
