"""Typed errors raised by order construction and return calculations.

Missing market data is not an error: it is reported through the
``price_unavailable`` flags on snapshots and summaries instead.
"""

from __future__ import annotations

from typing import Any


class FundArbError(Exception):
    """Base class for all fundarb errors."""


class InvalidOrderError(FundArbError):
    """Raised when a leg or order receives an invalid field value.

    Attributes:
        field: Name of the offending field (e.g. "notional_usd").
        value: The rejected value.
        reason: Human-readable constraint that was violated.
    """

    def __init__(self, field: str, value: Any, reason: str) -> None:
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field}: {reason} (got {value!r})")


class InconsistentLegError(FundArbError):
    """Raised when two legs violate the long/short pairing of a position."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Inconsistent legs: {reason}")


class InvalidDepositError(FundArbError):
    """Raised when a deposit amount is not a positive finite number."""

    def __init__(self, amount: Any) -> None:
        self.amount = amount
        super().__init__(f"Invalid deposit amount: {amount!r}")
