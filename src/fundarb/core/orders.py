"""Leg and paired-position construction.

Pure functions: no clock or id generation happens here. Callers pass
``opened_at`` and ids explicitly.
"""

from __future__ import annotations

import math
from datetime import datetime

from fundarb.errors import InconsistentLegError, InvalidOrderError
from fundarb.logging import get_logger
from fundarb.market.normalizer import normalize_symbol
from fundarb.models.position import (
    ArbitragePosition,
    Leg,
    PositionSide,
    PositionStatus,
    as_utc,
)

logger = get_logger("core.orders")

DEFAULT_FEE_RATE = 0.0001

_SIDE_ALIASES: dict[str, PositionSide] = {
    "long": PositionSide.LONG,
    "buy": PositionSide.LONG,
    "short": PositionSide.SHORT,
    "sell": PositionSide.SHORT,
}


def parse_side(side: PositionSide | str) -> PositionSide:
    """Map "long"/"buy" and "short"/"sell" (any case) to a PositionSide."""
    if isinstance(side, PositionSide):
        return side
    parsed = _SIDE_ALIASES.get(str(side).strip().lower())
    if parsed is None:
        raise InvalidOrderError("side", side, "must be one of long, short, buy, sell")
    return parsed


def _require_finite(field: str, value: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidOrderError(field, value, "must be a number") from None
    if not math.isfinite(number):
        raise InvalidOrderError(field, value, "must be finite")
    return number


def open_leg(
    symbol: str,
    side: PositionSide | str,
    notional_usd: float,
    leverage: float,
    entry_price: float,
    fee_rate: float = DEFAULT_FEE_RATE,
    exchange: str = "",
    entry_funding_rate: float = 0.0,
    opened_at: datetime | None = None,
    leg_id: str | None = None,
) -> Leg:
    """Build a leg from an order, deriving margin, quantity, and fee.

    Args:
        symbol: Instrument symbol in any supported notation.
        side: "long"/"buy" or "short"/"sell".
        notional_usd: USD exposure at entry, > 0.
        leverage: Exposure multiplier, >= 1.
        entry_price: Fill price of the base asset, > 0.
        fee_rate: Fee as a fraction of notional, >= 0 (default 1 bp).
        exchange: Venue identifier.
        entry_funding_rate: Venue funding rate per period at entry.
        opened_at: Creation timestamp.
        leg_id: Caller-assigned identifier.

    Returns:
        Leg with margin_usd = notional / leverage,
        quantity_base = notional / entry_price, fee_usd = notional * fee_rate.

    Raises:
        InvalidOrderError: Naming the first offending field.
    """
    parsed_side = parse_side(side)
    notional = _require_finite("notional_usd", notional_usd)
    lev = _require_finite("leverage", leverage)
    price = _require_finite("entry_price", entry_price)
    fee = _require_finite("fee_rate", fee_rate)
    funding = _require_finite("entry_funding_rate", entry_funding_rate)

    if notional <= 0:
        raise InvalidOrderError("notional_usd", notional_usd, "must be > 0")
    if lev < 1:
        raise InvalidOrderError("leverage", leverage, "must be >= 1")
    if price <= 0:
        raise InvalidOrderError("entry_price", entry_price, "must be > 0")
    if fee < 0:
        raise InvalidOrderError("fee_rate", fee_rate, "must be >= 0")

    asset = normalize_symbol(symbol)
    if not asset:
        raise InvalidOrderError("symbol", symbol, "must not be empty")

    leg = Leg(
        id=leg_id,
        exchange=exchange,
        symbol=symbol,
        asset=asset,
        side=parsed_side,
        quantity_base=notional / price,
        leverage=lev,
        notional_usd=notional,
        margin_usd=notional / lev,
        entry_price=price,
        entry_funding_rate=funding,
        fee_usd=notional * fee,
        opened_at=opened_at,
    )
    logger.debug(
        "leg_opened",
        asset=asset,
        side=parsed_side.value,
        exchange=exchange,
        notional_usd=notional,
        leverage=lev,
    )
    return leg


def validate_leg(leg: Leg) -> None:
    """Check a leg's numbers before any arithmetic is done with them.

    Legs built with ``open_leg`` always pass. Legs deserialized from
    elsewhere may not.

    Raises:
        InvalidOrderError: For non-finite values, negative quantity or
            notional, non-positive entry price, or leverage below 1.
    """
    for field in (
        "quantity_base",
        "leverage",
        "notional_usd",
        "margin_usd",
        "entry_price",
        "entry_funding_rate",
        "fee_usd",
    ):
        _require_finite(field, getattr(leg, field))

    if leg.quantity_base < 0:
        raise InvalidOrderError("quantity_base", leg.quantity_base, "must be >= 0")
    if leg.notional_usd < 0:
        raise InvalidOrderError("notional_usd", leg.notional_usd, "must be >= 0")
    if leg.margin_usd < 0:
        raise InvalidOrderError("margin_usd", leg.margin_usd, "must be >= 0")
    if leg.fee_usd < 0:
        raise InvalidOrderError("fee_usd", leg.fee_usd, "must be >= 0")
    if leg.leverage < 1:
        raise InvalidOrderError("leverage", leg.leverage, "must be >= 1")
    if leg.entry_price <= 0:
        raise InvalidOrderError("entry_price", leg.entry_price, "must be > 0")


def check_pairing(long_leg: Leg, short_leg: Leg) -> None:
    """Ensure the long slot holds a long leg and the short slot a short leg.

    Raises:
        InconsistentLegError: If either slot holds the wrong side.
    """
    if long_leg.side != PositionSide.LONG:
        raise InconsistentLegError(
            f"long leg on {long_leg.exchange or 'unknown venue'} is marked {long_leg.side.value}"
        )
    if short_leg.side != PositionSide.SHORT:
        raise InconsistentLegError(
            f"short leg on {short_leg.exchange or 'unknown venue'} is marked {short_leg.side.value}"
        )


def open_position(
    long_leg: Leg,
    short_leg: Leg,
    opened_at: datetime | None = None,
    position_id: str | None = None,
    notes: str | None = None,
) -> ArbitragePosition:
    """Pair a long and a short leg on the same base asset.

    Raises:
        InconsistentLegError: If the sides are swapped or the legs trade
            different base assets.
        InvalidOrderError: If either leg is malformed.
    """
    validate_leg(long_leg)
    validate_leg(short_leg)
    check_pairing(long_leg, short_leg)
    if long_leg.asset != short_leg.asset:
        raise InconsistentLegError(
            f"legs trade different assets: {long_leg.asset} vs {short_leg.asset}"
        )

    position = ArbitragePosition(
        id=position_id,
        asset=long_leg.asset,
        long_leg=long_leg,
        short_leg=short_leg,
        entry_spread=short_leg.entry_funding_rate - long_leg.entry_funding_rate,
        opened_at=opened_at if opened_at is not None else long_leg.opened_at,
        notes=notes,
    )
    logger.info(
        "position_opened",
        position_id=position_id,
        asset=position.asset,
        long_exchange=long_leg.exchange,
        short_exchange=short_leg.exchange,
        entry_spread=position.entry_spread,
    )
    return position


def close_position(position: ArbitragePosition, closed_at: datetime) -> ArbitragePosition:
    """Mark a position closed. Closing an already closed position is a no-op."""
    if not position.is_open:
        return position
    logger.info("position_closed", position_id=position.id, asset=position.asset)
    return position.model_copy(
        update={"status": PositionStatus.CLOSED, "closed_at": as_utc(closed_at)}
    )
