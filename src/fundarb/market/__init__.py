"""Market data helpers: symbol normalization."""

from fundarb.market.normalizer import (
    extract_asset_name,
    format_pair_name,
    normalize_symbol,
    strip_market_suffix,
    strip_venue_prefix,
)

__all__ = [
    "extract_asset_name",
    "format_pair_name",
    "normalize_symbol",
    "strip_market_suffix",
    "strip_venue_prefix",
]
