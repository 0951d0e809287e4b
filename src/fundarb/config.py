"""Configuration management with Pydantic Settings and YAML loading."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from fundarb.funding.rates import periods_per_day

# Venues that settle funding every hour instead of every eight hours.
_ONE_HOUR_EXCHANGES = ("extended", "hyperliquid", "lighter", "vest")


# --- Sub-config models ---


class SystemConfig(BaseModel):
    """Top-level system settings."""

    log_level: str = "INFO"
    json_logs: bool = False


class TradingConfig(BaseModel):
    """Order construction settings."""

    fee_rate: float = 0.0001
    currency: str = "USDC"


class FundingConfig(BaseModel):
    """Funding schedule and projection settings."""

    interval_hours: float = 8.0
    exchange_interval_hours: dict[str, float] = Field(
        default_factory=lambda: {name: 1.0 for name in _ONE_HOUR_EXCHANGES}
    )
    entry_fee_rate: float = 0.0005
    exit_fee_rate: float = 0.0005

    def interval_for(self, exchange: str) -> float:
        """Funding interval in hours for an exchange."""
        overrides = {k.lower(): v for k, v in self.exchange_interval_hours.items()}
        return overrides.get(exchange.lower(), self.interval_hours)

    def periods_per_day(self, exchange: str | None = None) -> float:
        """Funding settlements per day, for one exchange or the default."""
        if exchange is None:
            return periods_per_day(self.interval_hours)
        return periods_per_day(self.interval_for(exchange))

    def exchange_periods_per_day(self) -> dict[str, float]:
        """Per-exchange settlement counts for the configured overrides."""
        return {
            name.lower(): periods_per_day(hours)
            for name, hours in self.exchange_interval_hours.items()
        }


class HistoryConfig(BaseModel):
    """PnL history retention settings."""

    max_age_hours: float = 168.0
    min_interval_seconds: float = 30.0


# --- Main config ---


class AppConfig(BaseSettings):
    """Application configuration.

    Loads from YAML file, with environment variable overrides.
    """

    model_config = SettingsConfigDict(
        env_prefix="FUNDARB_",
        env_nested_delimiter="__",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: Any,
        env_settings: Any,
        dotenv_settings: Any,
        file_secret_settings: Any,
    ) -> tuple[Any, ...]:
        """Environment variables override YAML (init) values."""
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    system: SystemConfig = Field(default_factory=SystemConfig)
    trading: TradingConfig = Field(default_factory=TradingConfig)
    funding: FundingConfig = Field(default_factory=FundingConfig)
    history: HistoryConfig = Field(default_factory=HistoryConfig)


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file and return its contents as a dict."""
    with open(path) as f:
        data = yaml.safe_load(f)
    return data if isinstance(data, dict) else {}


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries. Override values take precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(
    config_dir: str | Path = "configs",
    config_file: str = "default.yaml",
    overrides: dict[str, Any] | None = None,
) -> AppConfig:
    """Load application configuration from YAML with env var overrides.

    Args:
        config_dir: Path to the configuration directory.
        config_file: Name of the main config YAML file. Missing files are
            ignored and defaults apply.
        overrides: Values merged on top of the YAML contents.

    Returns:
        Validated AppConfig instance.
    """
    raw: dict[str, Any] = {}
    config_path = Path(config_dir) / config_file
    if config_path.exists():
        raw = _load_yaml(config_path)

    if overrides:
        raw = _deep_merge(raw, overrides)

    # Pydantic Settings will automatically apply env var overrides
    return AppConfig(**raw)
