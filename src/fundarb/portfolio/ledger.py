"""Account ledger reducers.

Every operation takes an ``AccountState`` and returns a new one; nothing
is stored here. Persisting states between calls is the caller's job.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from datetime import datetime

from fundarb.core.orders import DEFAULT_FEE_RATE, open_leg, validate_leg
from fundarb.errors import InvalidDepositError
from fundarb.logging import get_logger
from fundarb.models.market import MarketSnapshot
from fundarb.models.portfolio import AccountState, PortfolioSummary
from fundarb.models.position import ArbitragePosition, Leg, PositionSide
from fundarb.portfolio.aggregator import summarize

logger = get_logger("portfolio.ledger")


def reset() -> AccountState:
    """Return an empty account: no cash, no trades."""
    logger.info("account_reset")
    return AccountState()


def deposit(state: AccountState, amount_usd: float) -> AccountState:
    """Credit cash to the account.

    Raises:
        InvalidDepositError: If amount_usd is not a positive finite number.
    """
    try:
        amount = float(amount_usd)
    except (TypeError, ValueError):
        amount = math.nan
    if not math.isfinite(amount) or amount <= 0:
        logger.warning("deposit_rejected", amount=amount_usd)
        raise InvalidDepositError(amount_usd)

    new_cash = state.cash_usd + amount
    logger.info("deposit_recorded", amount=amount, cash_usd=new_cash)
    return state.model_copy(update={"cash_usd": new_cash})


def record_trade(state: AccountState, leg: Leg) -> AccountState:
    """Append a leg and debit its margin and fee from cash.

    Cash may go negative; no margin sufficiency check is made.
    """
    validate_leg(leg)
    new_cash = state.cash_usd - leg.margin_usd - leg.fee_usd
    logger.info(
        "trade_recorded",
        trade_id=leg.id,
        asset=leg.asset,
        side=leg.side.value,
        notional_usd=leg.notional_usd,
        margin_usd=leg.margin_usd,
        fee_usd=leg.fee_usd,
        cash_usd=new_cash,
    )
    return state.model_copy(
        update={"cash_usd": new_cash, "trades": (*state.trades, leg)}
    )


def place_order(
    state: AccountState,
    symbol: str,
    side: PositionSide | str,
    notional_usd: float,
    leverage: float,
    entry_price: float,
    fee_rate: float = DEFAULT_FEE_RATE,
    exchange: str = "",
    entry_funding_rate: float = 0.0,
    opened_at: datetime | None = None,
    trade_id: str | None = None,
) -> tuple[AccountState, Leg]:
    """Build a leg from order inputs and record it.

    Returns:
        Tuple of (new account state, recorded leg).

    Raises:
        InvalidOrderError: If the order inputs are invalid.
    """
    leg = open_leg(
        symbol=symbol,
        side=side,
        notional_usd=notional_usd,
        leverage=leverage,
        entry_price=entry_price,
        fee_rate=fee_rate,
        exchange=exchange,
        entry_funding_rate=entry_funding_rate,
        opened_at=opened_at,
        leg_id=trade_id,
    )
    return record_trade(state, leg), leg


def record_position(state: AccountState, position: ArbitragePosition) -> AccountState:
    """Record both legs of a paired position, long leg first."""
    for leg in position.legs:
        state = record_trade(state, leg)
    return state


def summarize_account(
    state: AccountState,
    price_by_asset: Mapping[str, float] | MarketSnapshot,
    currency: str = "USDC",
) -> PortfolioSummary:
    """Portfolio summary of an account at current prices."""
    return summarize(state.trades, state.cash_usd, price_by_asset, currency=currency)
