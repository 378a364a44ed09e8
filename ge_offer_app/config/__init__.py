"""Analysis configuration: defaults, loading and validation."""

from .defaults import (
    AnalysisConfig,
    ConditioningParams,
    ForecastParams,
    FulfillmentParams,
    PricingParams,
    TaxParams,
    get_default_config,
)

__all__ = [
    "AnalysisConfig",
    "ConditioningParams",
    "ForecastParams",
    "FulfillmentParams",
    "PricingParams",
    "TaxParams",
    "get_default_config",
]
