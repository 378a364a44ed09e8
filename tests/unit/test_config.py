"""Unit tests for configuration management."""

from pathlib import Path

import pytest

from ge_offer_app.config.defaults import AnalysisConfig, get_default_config
from ge_offer_app.config.loader import ConfigLoader
from ge_offer_app.config.validation import ConfigValidator
from ge_offer_app.errors import ConfigurationError

PROFILES_YAML = """
profiles:
  tight:
    pricing:
      volatility_factor_max: 1.2
      trend_influence_factor: 0.1
  short_horizon:
    forecast:
      horizon: 24
    fulfillment:
      horizons_hours: [1, 2]
  empty:
  blank_section:
    pricing:
  scalar:
    5
"""


@pytest.fixture
def profile_dir(tmp_path: Path) -> Path:
    (tmp_path / "profiles.yaml").write_text(PROFILES_YAML)
    return tmp_path


class TestDefaultConfig:
    """Test suite for default configuration."""

    def test_default_config_creation(self) -> None:
        """Test that default configuration can be created."""
        config = get_default_config()
        assert isinstance(config, AnalysisConfig)
        assert config.conditioning.tick_interval_seconds == 300
        assert config.conditioning.fair_price_window == 24
        assert config.conditioning.margin_window == 36
        assert config.forecast.alpha == 0.8
        assert config.forecast.beta == 0.05
        assert config.forecast.phi == 0.98
        assert config.forecast.horizon == 72
        assert config.pricing.historical_quote == "spread"
        assert config.fulfillment.horizons_hours == (1, 3, 6)
        assert config.tax.rate == 0.02
        assert config.tax.cap == 5_000_000

    def test_default_config_is_frozen(self) -> None:
        config = get_default_config()
        with pytest.raises(AttributeError):
            config.tax.rate = 0.01  # type: ignore[misc]


class TestConfigLoader:
    """Test suite for configuration loader."""

    def test_config_loader_creation(self) -> None:
        """Test that ConfigLoader points at the bundled profiles."""
        loader = ConfigLoader.create()
        assert isinstance(loader.config_dir, Path)
        assert (loader.config_dir / "profiles.yaml").exists()

    def test_bundled_profiles_build(self) -> None:
        """Test every bundled profile produces a valid configuration."""
        loader = ConfigLoader.create()

        deep_value = loader.build_config("deep_value")
        assert deep_value.pricing.historical_quote == "deep_value"
        assert deep_value.pricing.profit_target == 1.03

        conservative = loader.build_config("conservative")
        assert conservative.pricing.volatility_factor_min == 1.0
        assert conservative.forecast.phi == 0.95

        fast = loader.build_config("fast_forecast")
        assert fast.forecast.horizon == 36
        assert fast.fulfillment.horizons_hours == (1, 3)

    def test_merge_config_defaults_only(self, profile_dir: Path) -> None:
        """Test an unknown profile leaves the defaults untouched."""
        loader = ConfigLoader.create(profile_dir)
        config = loader.merge_config("UNKNOWN-PROFILE")

        assert config["pricing"]["volatility_factor_max"] == 1.5
        assert config["forecast"]["horizon"] == 72

    def test_merge_config_with_profile(self, profile_dir: Path) -> None:
        loader = ConfigLoader.create(profile_dir)
        config = loader.merge_config("tight")

        assert config["pricing"]["volatility_factor_max"] == 1.2
        assert config["pricing"]["trend_influence_factor"] == 0.1
        # Other defaults should remain
        assert config["pricing"]["volatility_factor_min"] == 0.75

    def test_overrides_beat_profile(self, profile_dir: Path) -> None:
        loader = ConfigLoader.create(profile_dir)
        config = loader.build_config("tight", {"pricing": {"trend_influence_factor": 0.5}})

        assert config.pricing.trend_influence_factor == 0.5
        assert config.pricing.volatility_factor_max == 1.2

    def test_horizons_become_tuple(self, profile_dir: Path) -> None:
        """Test YAML lists are materialized as immutable tuples."""
        config = ConfigLoader.create(profile_dir).build_config("short_horizon")

        assert config.forecast.horizon == 24
        assert config.fulfillment.horizons_hours == (1, 2)

    def test_empty_profile(self, profile_dir: Path) -> None:
        config = ConfigLoader.create(profile_dir).build_config("empty")
        assert config == get_default_config()

    def test_missing_profiles_file(self, tmp_path: Path) -> None:
        loader = ConfigLoader.create(tmp_path)

        assert loader.load_profile("tight") == {}
        assert loader.build_config("tight") == get_default_config()

    def test_invalid_override_rejected(self, profile_dir: Path) -> None:
        loader = ConfigLoader.create(profile_dir)

        with pytest.raises(ConfigurationError) as exc_info:
            loader.build_config(overrides={"forecast": {"alpha": 1.5}})

        assert exc_info.value.recoverable is False
        assert len(exc_info.value.errors) == 1
        assert exc_info.value.errors[0].startswith("alpha:")

    def test_unknown_parameter_rejected(self, profile_dir: Path) -> None:
        loader = ConfigLoader.create(profile_dir)

        with pytest.raises(ConfigurationError) as exc_info:
            loader.build_config(overrides={"pricing": {"lowbal_factor": 1.2}})

        assert exc_info.value.errors == ["lowbal_factor"]

    def test_unknown_section_rejected(self, profile_dir: Path) -> None:
        loader = ConfigLoader.create(profile_dir)

        with pytest.raises(ConfigurationError) as exc_info:
            loader.build_config(overrides={"breakout": {"min_rvol": 2.0}})

        assert exc_info.value.errors == ["breakout"]

    @pytest.mark.parametrize("section", [None, 5, "fast", ["volatility_factor_max"]])
    def test_non_mapping_section_rejected(self, profile_dir: Path, section) -> None:
        """Test a section that is not a mapping fails validation instead of crashing."""
        loader = ConfigLoader.create(profile_dir)

        with pytest.raises(ConfigurationError) as exc_info:
            loader.build_config(overrides={"pricing": section})

        assert len(exc_info.value.errors) == 1
        assert exc_info.value.errors[0].startswith("pricing:")

    def test_blank_profile_section_rejected(self, profile_dir: Path) -> None:
        """Test an empty section key in YAML (loaded as None) is reported."""
        loader = ConfigLoader.create(profile_dir)

        with pytest.raises(ConfigurationError) as exc_info:
            loader.build_config("blank_section")

        assert exc_info.value.errors[0].startswith("pricing:")

    def test_scalar_profile_rejected(self, profile_dir: Path) -> None:
        loader = ConfigLoader.create(profile_dir)

        with pytest.raises(ConfigurationError) as exc_info:
            loader.build_config("scalar")

        assert exc_info.value.errors == ["scalar"]


class TestConfigValidator:
    """Test suite for configuration validation."""

    def test_defaults_are_valid(self) -> None:
        loader = ConfigLoader.create()
        assert ConfigValidator.validate_config(loader.merge_config()) == []

    def test_invalid_smoothing_factors(self) -> None:
        errors = ConfigValidator.validate_forecast_params({"alpha": 0, "beta": 1.2, "phi": 0.98})

        assert [e.field for e in errors] == ["alpha", "beta"]

    def test_min_observations_floor(self) -> None:
        errors = ConfigValidator.validate_forecast_params({"min_observations": 1})

        assert len(errors) == 1
        assert errors[0].field == "min_observations"

    def test_volatility_bounds_ordered(self) -> None:
        errors = ConfigValidator.validate_pricing_params(
            {"volatility_factor_min": 2.0, "volatility_factor_max": 1.5}
        )

        assert len(errors) == 1
        assert errors[0].field == "volatility_factor_min"

    def test_unknown_quote_style(self) -> None:
        errors = ConfigValidator.validate_pricing_params({"historical_quote": "midpoint"})

        assert len(errors) == 1
        assert errors[0].field == "historical_quote"
        assert errors[0].value == "midpoint"

    def test_margin_percentile_range(self) -> None:
        errors = ConfigValidator.validate_conditioning_params({"margin_percentile": 150})
        assert errors[0].field == "margin_percentile"

    def test_boolean_is_not_an_integer(self) -> None:
        errors = ConfigValidator.validate_conditioning_params({"margin_window": True})
        assert errors[0].field == "margin_window"

    @pytest.mark.parametrize("horizons", [[], [3, 1], [1, 0], "1,3"])
    def test_invalid_horizons(self, horizons) -> None:
        errors = ConfigValidator.validate_fulfillment_params({"horizons_hours": horizons})
        assert [e.field for e in errors] == ["horizons_hours"]

    def test_non_mapping_section(self) -> None:
        errors = ConfigValidator.validate_config({"forecast": None, "tax": {"rate": 0.02}})

        assert len(errors) == 1
        assert errors[0].field == "forecast"
        assert errors[0].value is None

    def test_invalid_tax(self) -> None:
        errors = ConfigValidator.validate_tax_params({"rate": 1.0, "cap": -1})
        assert [e.field for e in errors] == ["rate", "cap"]
