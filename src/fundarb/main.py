"""fundarb command-line entry point.

Evaluates account and position files against market data files:

    fundarb summary state.json prices.json
    fundarb returns position.json market.json
"""

from __future__ import annotations

import argparse
import json
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from fundarb.config import AppConfig, load_config
from fundarb.core.calculator import ReturnCalculator
from fundarb.errors import FundArbError
from fundarb.formatting import format_pnl, format_return
from fundarb.logging import get_logger, setup_logging
from fundarb.models.market import MarketSnapshot
from fundarb.models.portfolio import AccountState, PortfolioSummary
from fundarb.models.position import ArbitragePosition
from fundarb.models.snapshot import ReturnSnapshot
from fundarb.portfolio.ledger import summarize_account

EXIT_INPUT_ERROR = 2


def _read_json(path: str | Path) -> Any:
    with open(path) as f:
        return json.load(f)


def build_calculator(config: AppConfig) -> ReturnCalculator:
    """Build a return calculator from the configured funding schedules."""
    return ReturnCalculator(
        periods_per_day=config.funding.periods_per_day(),
        exchange_periods_per_day=config.funding.exchange_periods_per_day(),
    )


def render_summary_text(summary: PortfolioSummary) -> str:
    """Human-readable portfolio summary."""
    lines = [
        f"Total equity:     {summary.total_equity:,.2f} {summary.currency}",
        f"Cash:             {summary.cash_usd:,.2f}",
        f"Locked margin:    {summary.total_margin:,.2f}",
        f"Total volume:     {summary.total_notional:,.2f}",
        f"Fees paid:        {summary.total_fees:,.2f}",
        f"Unrealized PnL:   {format_pnl(summary.unrealized_pnl)} "
        f"({format_return(summary.unrealized_pnl_percent)})",
        f"Directional bias: {format_pnl(summary.directional_bias_usd)} "
        f"({format_return(summary.directional_bias_percent)})",
    ]
    if summary.excluded_assets:
        lines.append(f"No price for:     {', '.join(summary.excluded_assets)}")
    return "\n".join(lines)


def render_returns_text(snapshot: ReturnSnapshot) -> str:
    """Human-readable return snapshot."""
    lines = [
        f"Long  {snapshot.long.asset} on {snapshot.long.exchange or '-'}: "
        f"{format_pnl(snapshot.unrealized_pnl_long)}",
        f"Short {snapshot.short.asset} on {snapshot.short.exchange or '-'}: "
        f"{format_pnl(snapshot.unrealized_pnl_short)}",
        f"Net unrealized:   {format_pnl(snapshot.net_unrealized_pnl)}",
        f"Funding spread:   {format_return(snapshot.annualized_spread_pct)} APR",
        f"Daily funding:    {format_pnl(snapshot.estimated_daily_funding_usd)}",
        f"Estimated APR:    {format_return(snapshot.estimated_apr_pct)}",
        f"Directional bias: {format_pnl(snapshot.directional_bias_usd)} "
        f"({format_return(snapshot.directional_bias_percent)})",
    ]
    if snapshot.price_unavailable:
        lines.append("Warning: price unavailable for at least one leg")
    return "\n".join(lines)


def run_summary(args: argparse.Namespace, config: AppConfig) -> str:
    """Compute the portfolio summary for an account state file."""
    state = AccountState.model_validate(_read_json(args.state_file))
    market = MarketSnapshot.model_validate({"prices": _read_json(args.prices_file)})
    summary = summarize_account(state, market, currency=config.trading.currency)
    if args.format == "text":
        return render_summary_text(summary)
    return summary.model_dump_json(indent=2)


def run_returns(args: argparse.Namespace, config: AppConfig) -> str:
    """Compute the return snapshot for a position file."""
    position = ArbitragePosition.model_validate(_read_json(args.position_file))
    market = MarketSnapshot.model_validate(_read_json(args.market_file))
    as_of = datetime.now(UTC) if args.accrue else None
    snapshot = build_calculator(config).compute(
        position,
        market,
        total_equity=args.total_equity,
        as_of=as_of,
    )
    if args.format == "text":
        return render_returns_text(snapshot)
    return snapshot.model_dump_json(indent=2)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Argument list (defaults to sys.argv[1:]).

    Returns:
        Parsed arguments namespace.
    """
    parser = argparse.ArgumentParser(
        description="fundarb - funding rate arbitrage returns and portfolio summary",
    )
    parser.add_argument(
        "--config-dir",
        default="configs",
        help="Path to configuration directory (default: configs)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level override (default: from config)",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit logs as JSON lines",
    )
    parser.add_argument(
        "--format",
        choices=["json", "text"],
        default="json",
        help="Output format (default: json)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    summary = subparsers.add_parser("summary", help="Summarize an account at current prices")
    summary.add_argument("state_file", help="JSON account state: {cash_usd, trades}")
    summary.add_argument("prices_file", help="JSON map of asset -> price")

    returns = subparsers.add_parser("returns", help="Compute returns for a paired position")
    returns.add_argument("position_file", help="JSON arbitrage position")
    returns.add_argument("market_file", help="JSON market snapshot: {prices, funding_rates}")
    returns.add_argument(
        "--total-equity",
        type=float,
        default=None,
        help="Equity for the directional bias percentage (default: position equity)",
    )
    returns.add_argument(
        "--accrue",
        action="store_true",
        help="Accrue funding from each leg's open time until now",
    )

    return parser.parse_args(argv)


_COMMANDS = {
    "summary": run_summary,
    "returns": run_returns,
}


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    # Load configuration
    config = load_config(config_dir=args.config_dir)

    # Setup logging
    setup_logging(
        log_level=args.log_level or config.system.log_level,
        json_format=args.json_logs or config.system.json_logs,
    )
    logger = get_logger("main")

    try:
        output = _COMMANDS[args.command](args, config)
    except (FundArbError, ValidationError, OSError, json.JSONDecodeError) as e:
        logger.error("command_failed", command=args.command, error=str(e))
        print(f"error: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
