"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any

HISTORICAL_QUOTE_STYLES = ("spread", "deep_value")


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_conditioning_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate conditioning parameters."""
        errors = []

        for field in ("tick_interval_seconds", "max_history_seconds", "fair_price_window",
                      "margin_window", "min_spread_samples"):
            if field in params and not _is_positive_int(params[field]):
                errors.append(ValidationError(
                    field=field,
                    message="Must be a positive integer",
                    value=params[field]
                ))

        if "margin_percentile" in params:
            value = params["margin_percentile"]
            if not _is_number(value) or value < 0 or value > 100:
                errors.append(ValidationError(
                    field="margin_percentile",
                    message="Must be a number between 0 and 100",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_forecast_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate damped-trend smoothing parameters."""
        errors = []

        # Smoothing and damping factors live in (0, 1]
        for field in ("alpha", "beta", "phi"):
            if field in params:
                value = params[field]
                if not _is_number(value) or value <= 0 or value > 1:
                    errors.append(ValidationError(
                        field=field,
                        message="Must be a number in (0, 1]",
                        value=value
                    ))

        if "horizon" in params and not _is_positive_int(params["horizon"]):
            errors.append(ValidationError(
                field="horizon",
                message="Must be a positive integer",
                value=params["horizon"]
            ))

        if "min_observations" in params:
            value = params["min_observations"]
            if not isinstance(value, int) or isinstance(value, bool) or value < 2:
                errors.append(ValidationError(
                    field="min_observations",
                    message="Must be an integer of at least 2",
                    value=value
                ))

        if "z_score" in params:
            value = params["z_score"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="z_score",
                    message="Must be a positive number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_pricing_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate pricing strategy parameters."""
        errors = []

        for field in ("min_forecast_points", "liquidity_window", "smoothing_window",
                      "deep_value_window"):
            if field in params and not _is_positive_int(params[field]):
                errors.append(ValidationError(
                    field=field,
                    message="Must be a positive integer",
                    value=params[field]
                ))

        if "trend_lookahead_index" in params:
            value = params["trend_lookahead_index"]
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                errors.append(ValidationError(
                    field="trend_lookahead_index",
                    message="Must be a non-negative integer",
                    value=value
                ))

        for field in ("volatility_factor_min", "volatility_factor_max",
                      "lowball_factor", "profit_target"):
            if field in params:
                value = params[field]
                if not _is_number(value) or value <= 0:
                    errors.append(ValidationError(
                        field=field,
                        message="Must be a positive number",
                        value=value
                    ))

        low = params.get("volatility_factor_min")
        high = params.get("volatility_factor_max")
        if _is_number(low) and _is_number(high) and low > high:
            errors.append(ValidationError(
                field="volatility_factor_min",
                message="Must not exceed volatility_factor_max",
                value=low
            ))

        if "trend_influence_factor" in params:
            value = params["trend_influence_factor"]
            if not _is_number(value) or value < 0 or value > 1:
                errors.append(ValidationError(
                    field="trend_influence_factor",
                    message="Must be a number between 0 and 1",
                    value=value
                ))

        if "historical_quote" in params and params["historical_quote"] not in HISTORICAL_QUOTE_STYLES:
            errors.append(ValidationError(
                field="historical_quote",
                message=f"Must be one of {', '.join(HISTORICAL_QUOTE_STYLES)}",
                value=params["historical_quote"]
            ))

        return errors

    @staticmethod
    def validate_fulfillment_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate fulfillment estimation parameters."""
        errors = []

        if "horizons_hours" in params:
            value = params["horizons_hours"]
            if (not isinstance(value, (list, tuple)) or not value
                    or not all(_is_positive_int(h) for h in value)
                    or list(value) != sorted(value)):
                errors.append(ValidationError(
                    field="horizons_hours",
                    message="Must be a non-empty ascending sequence of positive integers",
                    value=value
                ))

        if "ticks_per_hour" in params and not _is_positive_int(params["ticks_per_hour"]):
            errors.append(ValidationError(
                field="ticks_per_hour",
                message="Must be a positive integer",
                value=params["ticks_per_hour"]
            ))

        if "interval_width_divisor" in params:
            value = params["interval_width_divisor"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="interval_width_divisor",
                    message="Must be a positive number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_tax_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate tax parameters."""
        errors = []

        if "rate" in params:
            value = params["rate"]
            if not _is_number(value) or value < 0 or value >= 1:
                errors.append(ValidationError(
                    field="rate",
                    message="Must be a number in [0, 1)",
                    value=value
                ))

        if "cap" in params:
            value = params["cap"]
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                errors.append(ValidationError(
                    field="cap",
                    message="Must be a non-negative integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []
        section_validators = {
            "conditioning": ConfigValidator.validate_conditioning_params,
            "forecast": ConfigValidator.validate_forecast_params,
            "pricing": ConfigValidator.validate_pricing_params,
            "fulfillment": ConfigValidator.validate_fulfillment_params,
            "tax": ConfigValidator.validate_tax_params,
        }

        for section, validate in section_validators.items():
            if section not in config:
                continue

            params = config[section]
            if not isinstance(params, dict):
                errors.append(ValidationError(
                    field=section,
                    message="Section must be a mapping of parameters",
                    value=params
                ))
                continue

            errors.extend(validate(params))

        return errors
