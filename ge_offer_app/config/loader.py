"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from ..errors import ConfigurationError
from .defaults import (
    AnalysisConfig,
    ConditioningParams,
    ForecastParams,
    FulfillmentParams,
    PricingParams,
    TaxParams,
    get_default_config,
)
from .validation import ConfigValidator

SECTION_TYPES = {
    "conditioning": ConditioningParams,
    "forecast": ForecastParams,
    "pricing": PricingParams,
    "fulfillment": FulfillmentParams,
    "tax": TaxParams,
}


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: AnalysisConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_profile(self, profile: str) -> dict[str, Any]:
        """Load named parameter profile overrides (e.g. for backtesting)."""
        profiles_file = self.config_dir / "profiles.yaml"

        if not profiles_file.exists():
            return {}

        with open(profiles_file) as f:
            profiles_config = yaml.safe_load(f) or {}

        overrides = profiles_config.get("profiles", {}).get(profile, {}) or {}
        if not isinstance(overrides, dict):
            raise ConfigurationError(
                f"Profile '{profile}' must be a mapping of sections",
                errors=[profile],
            )
        return overrides  # type: ignore[no-any-return]

    def merge_config(
        self,
        profile: Optional[str] = None,
        overrides: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Explicit overrides (highest priority)
        2. Named profile overrides
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        if profile:
            config = self._deep_merge(config, self.load_profile(profile))

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def build_config(
        self,
        profile: Optional[str] = None,
        overrides: Optional[dict[str, Any]] = None
    ) -> AnalysisConfig:
        """
        Merge, validate and materialize an immutable AnalysisConfig.

        Raises:
            ConfigurationError: if any merged value is unknown or invalid
        """
        merged = self.merge_config(profile, overrides)

        errors = ConfigValidator.validate_config(merged)
        if errors:
            raise ConfigurationError(
                "Invalid analysis configuration",
                errors=[f"{err.field}: {err.message} (got: {err.value})" for err in errors],
            )

        sections = {}
        for section_name, section_type in SECTION_TYPES.items():
            values = merged.get(section_name, {})
            known = {f.name for f in fields(section_type)}
            unknown = sorted(set(values) - known)
            if unknown:
                raise ConfigurationError(
                    f"Unknown parameters in '{section_name}' section",
                    errors=unknown,
                )
            if "horizons_hours" in values:
                values = {**values, "horizons_hours": tuple(values["horizons_hours"])}
            sections[section_name] = section_type(**values)

        unknown_sections = sorted(set(merged) - set(SECTION_TYPES))
        if unknown_sections:
            raise ConfigurationError("Unknown configuration sections", errors=unknown_sections)

        return AnalysisConfig(**sections)

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name in obj.__dataclass_fields__:
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
