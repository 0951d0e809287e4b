"""Funding rate unit conversions.

Rates are carried internally as fractions per funding period. These
helpers convert at the boundary: to and from annualized percentages,
between venues with different funding intervals, and from the
aggregator feed's quoted format.
"""

from __future__ import annotations

from fundarb.models.funding import NormalizedFundingRate

HOURS_PER_DAY = 24.0
DAYS_PER_YEAR = 365.0
DEFAULT_INTERVAL_HOURS = 8.0
DEFAULT_PERIODS_PER_DAY = HOURS_PER_DAY / DEFAULT_INTERVAL_HOURS

# Feed quotes are in units of 1/10000 of the eight-hour rate
# (a quote of 25 means 0.0025 per eight hours).
QUOTE_SCALE = 10_000.0


def periods_per_day(interval_hours: float) -> float:
    """Number of funding settlements per day for a funding interval.

    Raises:
        ValueError: If interval_hours is not positive.
    """
    if interval_hours <= 0:
        raise ValueError(f"interval_hours must be > 0, got {interval_hours}")
    return HOURS_PER_DAY / interval_hours


def annualize(rate: float, periods: float = DEFAULT_PERIODS_PER_DAY) -> float:
    """Convert a per-period rate to an annualized percentage.

    >>> round(annualize(0.0001), 4)
    10.95
    """
    if periods <= 0:
        raise ValueError(f"periods per day must be > 0, got {periods}")
    return rate * periods * DAYS_PER_YEAR * 100


def from_annualized(apr_pct: float, periods: float = DEFAULT_PERIODS_PER_DAY) -> float:
    """Convert an annualized percentage back to a per-period rate."""
    if periods <= 0:
        raise ValueError(f"periods per day must be > 0, got {periods}")
    return apr_pct / 100 / DAYS_PER_YEAR / periods


def rescale(rate: float, from_interval_hours: float, to_interval_hours: float) -> float:
    """Express a per-period rate over a different funding interval."""
    if from_interval_hours <= 0 or to_interval_hours <= 0:
        raise ValueError("funding intervals must be > 0")
    return rate * to_interval_hours / from_interval_hours


def funding_spread(rate_long: float, rate_short: float) -> float:
    """Funding spread of a long/short pair: ``rate_short - rate_long``.

    Positive when the short venue pays the position more than the long
    venue charges it.
    """
    return rate_short - rate_long


def normalize_quoted_rate(
    value: float,
    interval_hours: float = DEFAULT_INTERVAL_HOURS,
) -> NormalizedFundingRate:
    """Normalize a feed quote into one-hour, eight-hour, and daily rates.

    The feed always quotes the eight-hour equivalent, including for
    venues that settle hourly, so the native interval only matters for
    reporting.

    Args:
        value: Quoted value (1/10000 of the eight-hour rate).
        interval_hours: Native funding interval of the venue.

    Returns:
        NormalizedFundingRate with per-horizon fractions and yearly_pct.
    """
    eight_hour = value / QUOTE_SCALE
    one_hour = eight_hour / 8
    daily = one_hour * HOURS_PER_DAY
    return NormalizedFundingRate(
        raw=value,
        interval_hours=interval_hours,
        one_hour=one_hour,
        eight_hour=eight_hour,
        daily=daily,
        yearly_pct=daily * DAYS_PER_YEAR * 100,
    )
