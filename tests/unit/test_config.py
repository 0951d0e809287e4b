"""Unit tests for configuration loading."""

from pathlib import Path

import pytest

from fundarb.config import AppConfig, FundingConfig, _deep_merge, load_config

_REPO_CONFIGS = Path(__file__).resolve().parents[2] / "configs"


class TestDefaults:
    """Tests for built-in defaults."""

    def test_app_defaults(self) -> None:
        config = AppConfig()
        assert config.system.log_level == "INFO"
        assert config.trading.fee_rate == 0.0001
        assert config.trading.currency == "USDC"
        assert config.funding.interval_hours == 8.0
        assert config.history.max_age_hours == 168.0

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        config = load_config(config_dir=tmp_path)
        assert config.funding.entry_fee_rate == 0.0005

    def test_repo_default_yaml(self) -> None:
        config = load_config(config_dir=_REPO_CONFIGS)
        assert config.funding.interval_for("hyperliquid") == 1.0


class TestFundingConfig:
    """Tests for per-exchange funding schedules."""

    def test_hourly_exchange(self) -> None:
        assert FundingConfig().periods_per_day("hyperliquid") == pytest.approx(24.0)

    def test_exchange_lookup_case_insensitive(self) -> None:
        assert FundingConfig().periods_per_day("Lighter") == pytest.approx(24.0)

    def test_default_interval(self) -> None:
        funding = FundingConfig()
        assert funding.periods_per_day() == pytest.approx(3.0)
        assert funding.periods_per_day("binance") == pytest.approx(3.0)

    def test_exchange_periods_map(self) -> None:
        funding = FundingConfig(exchange_interval_hours={"Vest": 1.0, "okx": 4.0})
        assert funding.exchange_periods_per_day() == {"vest": 24.0, "okx": 6.0}


class TestLoadConfig:
    """Tests for YAML loading and overrides."""

    def test_yaml_values(self, tmp_path: Path) -> None:
        (tmp_path / "default.yaml").write_text(
            "trading:\n  fee_rate: 0.0002\n  currency: USDT\nfunding:\n  interval_hours: 4\n"
        )
        config = load_config(config_dir=tmp_path)
        assert config.trading.fee_rate == 0.0002
        assert config.trading.currency == "USDT"
        assert config.funding.periods_per_day() == pytest.approx(6.0)

    def test_empty_yaml(self, tmp_path: Path) -> None:
        (tmp_path / "default.yaml").write_text("")
        assert load_config(config_dir=tmp_path).system.log_level == "INFO"

    def test_overrides_merge(self, tmp_path: Path) -> None:
        (tmp_path / "default.yaml").write_text("system:\n  log_level: DEBUG\n  json_logs: true\n")
        config = load_config(config_dir=tmp_path, overrides={"system": {"log_level": "WARNING"}})
        assert config.system.log_level == "WARNING"
        assert config.system.json_logs is True

    def test_env_overrides_yaml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "default.yaml").write_text("trading:\n  fee_rate: 0.0002\n")
        monkeypatch.setenv("FUNDARB_TRADING__FEE_RATE", "0.0003")
        config = load_config(config_dir=tmp_path)
        assert config.trading.fee_rate == 0.0003


class TestDeepMerge:
    def test_nested(self) -> None:
        merged = _deep_merge({"a": {"b": 1, "c": 2}}, {"a": {"c": 3}, "d": 4})
        assert merged == {"a": {"b": 1, "c": 3}, "d": 4}

    def test_base_not_mutated(self) -> None:
        base = {"a": {"b": 1}}
        _deep_merge(base, {"a": {"b": 2}})
        assert base == {"a": {"b": 1}}
