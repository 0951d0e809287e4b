"""Unit tests for instrument symbol normalization."""

import pytest

from fundarb.market.normalizer import (
    extract_asset_name,
    format_pair_name,
    normalize_symbol,
    strip_market_suffix,
    strip_venue_prefix,
)


# ---------------------------------------------------------------------------
# normalize_symbol
# ---------------------------------------------------------------------------


class TestNormalizeSymbol:
    """Tests for the shared base-asset lookup key."""

    def test_plain_symbol(self) -> None:
        assert normalize_symbol("BTC") == "BTC"

    def test_lowercase_is_uppercased(self) -> None:
        assert normalize_symbol("eth") == "ETH"

    def test_colon_suffix(self) -> None:
        assert normalize_symbol("BTC:PERP-USDT") == "BTC"

    def test_colon_suffix_usd(self) -> None:
        assert normalize_symbol("BTC:PERP-USD") == "BTC"

    def test_dash_suffix(self) -> None:
        assert normalize_symbol("BTC-PERP-USDC") == "BTC"

    def test_dash_suffix_lowercase(self) -> None:
        assert normalize_symbol("sol-perp") == "SOL"

    def test_venue_prefix_keeps_prefix(self) -> None:
        # First separator wins: the venue prefix is returned, not GOLD.
        assert normalize_symbol("xyz:GOLD:PERP-USD") == "XYZ"

    def test_multi_segment_rwa(self) -> None:
        assert normalize_symbol("GOLD:PERP-USDC:PERP-USD") == "GOLD"

    def test_dash_before_colon(self) -> None:
        assert normalize_symbol("BTC-PERP:USD") == "BTC"

    def test_empty_string(self) -> None:
        assert normalize_symbol("") == ""

    def test_none(self) -> None:
        assert normalize_symbol(None) == ""

    @pytest.mark.parametrize(
        "raw",
        [
            "BTC",
            "btc",
            "BTC:PERP-USDT",
            "BTC-PERP-USDC",
            "xyz:GOLD:PERP-USD",
            "GOLD:PERP-USDC:PERP-USD",
            "BTC-PERP:USD",
            ":PERP",
            "-",
            "",
        ],
    )
    def test_idempotent(self, raw: str) -> None:
        once = normalize_symbol(raw)
        assert normalize_symbol(once) == once


# ---------------------------------------------------------------------------
# Venue prefix / market suffix
# ---------------------------------------------------------------------------


class TestStripVenuePrefix:
    """Tests for dropping deployer/venue prefixes."""

    def test_rwa_prefix(self) -> None:
        assert strip_venue_prefix("xyz:GOLD:PERP-USD") == "GOLD:PERP-USD"

    def test_standard_symbol_unchanged(self) -> None:
        assert strip_venue_prefix("BTC:PERP-USDT") == "BTC:PERP-USDT"

    def test_uppercase_leading_segment_unchanged(self) -> None:
        assert strip_venue_prefix("GOLD:PERP-USDC:PERP-USD") == "GOLD:PERP-USDC:PERP-USD"

    def test_plain_symbol_unchanged(self) -> None:
        assert strip_venue_prefix("ETH") == "ETH"

    def test_empty(self) -> None:
        assert strip_venue_prefix(None) == ""


class TestStripMarketSuffix:
    """Tests for removing the trailing perpetual market segment."""

    def test_display_pair(self) -> None:
        assert strip_market_suffix("xyz GOLD:PERP-USDC:PERP-USD") == "xyz GOLD:PERP-USDC"

    def test_cash_display_pair(self) -> None:
        assert strip_market_suffix("cash GOLD:PERP-USDC:PERP-USD") == "cash GOLD:PERP-USDC"

    def test_single_colon_suffix(self) -> None:
        assert strip_market_suffix("BTC:PERP-USDT") == "BTC"

    def test_no_colon_unchanged(self) -> None:
        assert strip_market_suffix("BTC-PERP-USDC") == "BTC-PERP-USDC"

    def test_non_perp_suffix_unchanged(self) -> None:
        assert strip_market_suffix("BTC:SPOT") == "BTC:SPOT"

    def test_empty(self) -> None:
        assert strip_market_suffix("") == ""


class TestExtractAssetName:
    """Tests for resolving the real asset code."""

    def test_rwa_symbol(self) -> None:
        assert extract_asset_name("xyz:GOLD:PERP-USDC") == "GOLD"

    def test_standard_symbol(self) -> None:
        assert extract_asset_name("BTC:PERP-USDT") == "BTC"

    def test_dash_symbol(self) -> None:
        assert extract_asset_name("SOL-PERP-USDC") == "SOL"

    def test_empty(self) -> None:
        assert extract_asset_name(None) == ""


class TestFormatPairName:
    """Tests for display formatting of pairs."""

    def test_default_when_missing(self) -> None:
        assert format_pair_name(None) == "BTC-PERP-USDC"

    def test_strips_duplicated_suffix(self) -> None:
        assert format_pair_name("xyz GOLD:PERP-USDC:PERP-USD") == "xyz GOLD:PERP-USDC"

    def test_other_formats_unchanged(self) -> None:
        assert format_pair_name("ETH-PERP-USDC") == "ETH-PERP-USDC"
