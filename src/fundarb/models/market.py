"""Immutable market data snapshot passed into every calculation."""

from __future__ import annotations

import math
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from fundarb.market.normalizer import normalize_symbol


class MarketSnapshot(BaseModel):
    """Prices and funding rates observed at one point in time.

    Asset keys are normalized on construction and exchange keys are
    lowercased, so lookups accept any supported symbol notation.

    Attributes:
        prices: Asset -> current USD price.
        funding_rates: Asset -> exchange -> funding rate per period.
        taken_at: When the data was observed, if known.
    """

    model_config = {"frozen": True}

    prices: dict[str, float | None] = Field(default_factory=dict)
    funding_rates: dict[str, dict[str, float]] = Field(default_factory=dict)
    taken_at: datetime | None = None

    @field_validator("prices")
    @classmethod
    def _normalize_price_keys(
        cls, value: dict[str, float | None]
    ) -> dict[str, float | None]:
        return {normalize_symbol(k): v for k, v in value.items()}

    @field_validator("funding_rates")
    @classmethod
    def _normalize_rate_keys(
        cls, value: dict[str, dict[str, float]]
    ) -> dict[str, dict[str, float]]:
        return {
            normalize_symbol(asset): {ex.lower(): rate for ex, rate in by_exchange.items()}
            for asset, by_exchange in value.items()
        }

    def price(self, asset: str) -> float | None:
        """Current price for an asset, or None when missing or unusable.

        Zero, negative, and non-finite prices count as unavailable.
        """
        value = self.prices.get(normalize_symbol(asset))
        if value is None or not math.isfinite(value) or value <= 0:
            return None
        return value

    def funding_rate(self, asset: str, exchange: str) -> float | None:
        """Current per-period funding rate for an asset on an exchange."""
        by_exchange = self.funding_rates.get(normalize_symbol(asset))
        if not by_exchange:
            return None
        value = by_exchange.get(exchange.lower())
        if value is None or not math.isfinite(value):
            return None
        return value
