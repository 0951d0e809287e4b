"""Unit tests for core data models."""

import math
from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from fundarb.models import (
    AccountState,
    ArbitragePosition,
    Leg,
    MarketSnapshot,
    PortfolioSummary,
    PositionSide,
    PositionStatus,
)


def _make_leg(side: PositionSide = PositionSide.LONG, exchange: str = "hyperliquid") -> Leg:
    return Leg(
        exchange=exchange,
        symbol="BTC:PERP-USDC",
        asset="BTC",
        side=side,
        quantity_base=0.02,
        leverage=10.0,
        notional_usd=1000.0,
        margin_usd=100.0,
        entry_price=50000.0,
        fee_usd=0.1,
    )


# ---------------------------------------------------------------------------
# Leg / ArbitragePosition
# ---------------------------------------------------------------------------


class TestLeg:
    """Tests for the Leg model."""

    def test_signed_notional_long(self) -> None:
        assert _make_leg(PositionSide.LONG).signed_notional == 1000.0

    def test_signed_notional_short(self) -> None:
        assert _make_leg(PositionSide.SHORT).signed_notional == -1000.0

    def test_is_long(self) -> None:
        assert _make_leg(PositionSide.LONG).is_long is True
        assert _make_leg(PositionSide.SHORT).is_long is False

    def test_frozen(self) -> None:
        leg = _make_leg()
        with pytest.raises(ValidationError):
            leg.notional_usd = 5.0  # type: ignore[misc]

    def test_side_from_string(self) -> None:
        leg = Leg.model_validate({**_make_leg().model_dump(), "side": "short"})
        assert leg.side == PositionSide.SHORT

    def test_naive_opened_at_read_as_utc(self) -> None:
        leg = Leg.model_validate(
            {**_make_leg().model_dump(), "opened_at": "2025-01-01T08:00:00"}
        )
        assert leg.opened_at == datetime(2025, 1, 1, 8, tzinfo=UTC)

    def test_aware_opened_at_kept(self) -> None:
        leg = Leg.model_validate(
            {**_make_leg().model_dump(), "opened_at": "2025-01-01T08:00:00+02:00"}
        )
        assert leg.opened_at == datetime(2025, 1, 1, 6, tzinfo=UTC)

    def test_json_roundtrip(self) -> None:
        leg = _make_leg()
        assert Leg.model_validate_json(leg.model_dump_json()) == leg


class TestArbitragePosition:
    """Tests for the ArbitragePosition model."""

    def _make_position(self) -> ArbitragePosition:
        return ArbitragePosition(
            asset="BTC",
            long_leg=_make_leg(PositionSide.LONG, "binance"),
            short_leg=_make_leg(PositionSide.SHORT, "hyperliquid"),
        )

    def test_defaults_open(self) -> None:
        position = self._make_position()
        assert position.status == PositionStatus.OPEN
        assert position.is_open
        assert position.closed_at is None

    def test_totals(self) -> None:
        position = self._make_position()
        assert position.total_notional == pytest.approx(2000.0)
        assert position.total_margin == pytest.approx(200.0)
        assert position.total_fees == pytest.approx(0.2)

    def test_legs_order(self) -> None:
        position = self._make_position()
        long_leg, short_leg = position.legs
        assert long_leg.side == PositionSide.LONG
        assert short_leg.side == PositionSide.SHORT


# ---------------------------------------------------------------------------
# MarketSnapshot
# ---------------------------------------------------------------------------


class TestMarketSnapshot:
    """Tests for market data lookups."""

    def test_price_lookup_normalizes_keys(self) -> None:
        market = MarketSnapshot(prices={"btc:PERP-USDT": 51000.0})
        assert market.prices == {"BTC": 51000.0}
        assert market.price("BTC-PERP-USDC") == 51000.0

    def test_missing_price(self) -> None:
        assert MarketSnapshot().price("BTC") is None

    def test_none_price(self) -> None:
        assert MarketSnapshot(prices={"BTC": None}).price("BTC") is None

    def test_zero_price_unavailable(self) -> None:
        assert MarketSnapshot(prices={"BTC": 0.0}).price("BTC") is None

    def test_negative_price_unavailable(self) -> None:
        assert MarketSnapshot(prices={"BTC": -1.0}).price("BTC") is None

    def test_nan_price_unavailable(self) -> None:
        assert MarketSnapshot(prices={"BTC": math.nan}).price("BTC") is None

    def test_funding_rate_lookup(self) -> None:
        market = MarketSnapshot(funding_rates={"btc": {"Hyperliquid": 0.0001}})
        assert market.funding_rate("BTC", "hyperliquid") == 0.0001
        assert market.funding_rate("BTC:PERP-USDC", "HYPERLIQUID") == 0.0001

    def test_funding_rate_missing_asset(self) -> None:
        assert MarketSnapshot().funding_rate("BTC", "binance") is None

    def test_funding_rate_missing_exchange(self) -> None:
        market = MarketSnapshot(funding_rates={"BTC": {"binance": 0.0001}})
        assert market.funding_rate("BTC", "okx") is None

    def test_negative_funding_rate_allowed(self) -> None:
        market = MarketSnapshot(funding_rates={"BTC": {"binance": -0.0002}})
        assert market.funding_rate("BTC", "binance") == -0.0002


# ---------------------------------------------------------------------------
# AccountState / PortfolioSummary
# ---------------------------------------------------------------------------


class TestAccountState:
    """Tests for the immutable account state."""

    def test_defaults(self) -> None:
        state = AccountState()
        assert state.cash_usd == 0.0
        assert state.trades == ()

    def test_trades_from_list(self) -> None:
        state = AccountState.model_validate(
            {"cash_usd": 10.0, "trades": [_make_leg().model_dump(mode="json")]}
        )
        assert len(state.trades) == 1
        assert state.trades[0].asset == "BTC"


class TestPortfolioSummary:
    """Tests for summary properties."""

    def _make_summary(self, excluded: list[str]) -> PortfolioSummary:
        return PortfolioSummary(
            cash_usd=0.0,
            total_equity=0.0,
            total_margin=0.0,
            total_notional=0.0,
            total_fees=0.0,
            unrealized_pnl=0.0,
            unrealized_pnl_percent=0.0,
            directional_bias_usd=0.0,
            directional_bias_percent=0.0,
            trade_count=0,
            excluded_assets=excluded,
        )

    def test_price_unavailable_flag(self) -> None:
        assert self._make_summary(["XYZ"]).price_unavailable is True

    def test_price_available_flag(self) -> None:
        assert self._make_summary([]).price_unavailable is False
