"""Instrument symbol normalization.

Venues and aggregators decorate the same asset in different ways:

    BTC                          plain base asset
    BTC:PERP-USDT                base + market-type suffix
    BTC-PERP-USDC                dash-separated suffix
    xyz:GOLD:PERP-USD            deployer/venue prefix + asset + suffix
    xyz GOLD:PERP-USDC:PERP-USD  display pair with a duplicated suffix

``normalize_symbol`` is the shared lookup key used for price maps. It keeps
the leading token before the first separator, which means venue-prefixed
symbols normalize to the prefix (``xyz:GOLD:PERP-USD`` -> ``XYZ``). Callers
that need the real asset code of such symbols use ``strip_venue_prefix`` or
``extract_asset_name`` instead.
"""

from __future__ import annotations

_SEPARATORS = (":", "-")
_MARKET_SUFFIX_MARKER = "PERP-USD"


def normalize_symbol(raw_symbol: str | None) -> str:
    """Extract the base asset lookup key from a raw instrument symbol.

    Args:
        raw_symbol: Instrument symbol in any supported notation.

    Returns:
        Uppercased token before the first ``:``, then before the first
        ``-`` of what remains. Empty string for empty or None input.
        Applying both separators keeps the result idempotent for symbols
        such as ``BTC-PERP:USD``.

    Examples:
        >>> normalize_symbol("BTC:PERP-USDT")
        'BTC'
        >>> normalize_symbol("eth-perp-usdc")
        'ETH'
        >>> normalize_symbol("xyz:GOLD:PERP-USD")
        'XYZ'
    """
    if not raw_symbol:
        return ""
    upper = raw_symbol.upper()
    for sep in _SEPARATORS:
        upper = upper.split(sep, 1)[0]
    return upper


def strip_venue_prefix(raw_symbol: str | None) -> str:
    """Drop a leading venue or deployer token from a colon-separated symbol.

    A venue prefix is a lowercase leading segment followed by at least two
    more colon-separated segments (``xyz:GOLD:PERP-USD``). Anything else is
    returned unchanged.

    Examples:
        >>> strip_venue_prefix("xyz:GOLD:PERP-USD")
        'GOLD:PERP-USD'
        >>> strip_venue_prefix("BTC:PERP-USDT")
        'BTC:PERP-USDT'
    """
    if not raw_symbol:
        return ""
    parts = raw_symbol.split(":")
    if len(parts) >= 3 and parts[0] and parts[0].islower():
        return ":".join(parts[1:])
    return raw_symbol


def strip_market_suffix(pair: str | None) -> str:
    """Remove a trailing ``:...PERP-USD...`` market-type segment.

    Only the last colon segment is considered, and only when it carries a
    perpetual-market marker.

    Examples:
        >>> strip_market_suffix("xyz GOLD:PERP-USDC:PERP-USD")
        'xyz GOLD:PERP-USDC'
        >>> strip_market_suffix("BTC-PERP-USDC")
        'BTC-PERP-USDC'
    """
    if not pair:
        return ""
    head, sep, tail = pair.rpartition(":")
    if sep and _MARKET_SUFFIX_MARKER in tail.upper():
        return head
    return pair


def extract_asset_name(raw_symbol: str | None) -> str:
    """Return the real asset code of a symbol, skipping any venue prefix.

    Examples:
        >>> extract_asset_name("xyz:GOLD:PERP-USDC")
        'GOLD'
        >>> extract_asset_name("SOL:PERP-USDC")
        'SOL'
    """
    return normalize_symbol(strip_venue_prefix(raw_symbol))


def format_pair_name(pair: str | None, default: str = "BTC-PERP-USDC") -> str:
    """Format a pair for display, dropping a duplicated market suffix."""
    if not pair:
        return default
    return strip_market_suffix(pair)
