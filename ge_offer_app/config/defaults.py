"""Default configuration parameters for the offer analysis pipeline."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ConditioningParams:
    """Gap-filling and indicator derivation parameters."""
    tick_interval_seconds: int = 300                 # Fixed 5-minute grid
    max_history_seconds: int = 30 * 24 * 60 * 60    # Staleness bound (30 days)
    fair_price_window: int = 24                      # 2 hours of ticks
    margin_window: int = 36                          # 3 hours of ticks
    margin_percentile: float = 90.0
    min_spread_samples: int = 5


@dataclass(frozen=True)
class ForecastParams:
    """Damped-trend exponential smoothing parameters."""
    alpha: float = 0.8                # Level smoothing
    beta: float = 0.05                # Trend smoothing
    phi: float = 0.98                 # Trend damping
    horizon: int = 72                 # 6 hours of ticks
    z_score: float = 1.96             # 95% interval
    min_observations: int = 12


@dataclass(frozen=True)
class PricingParams:
    """Offer pricing strategy parameters."""
    min_forecast_points: int = 12            # Hybrid mode needs 1 hour of forecast
    liquidity_window: int = 36               # Trailing 3 hours of volume
    volatility_factor_min: float = 0.75
    volatility_factor_max: float = 1.5
    trend_lookahead_index: int = 11          # ~1 hour ahead
    trend_influence_factor: float = 0.25

    # Historical quote style: "spread" or "deep_value"
    historical_quote: str = "spread"

    # Deep-value quoting
    smoothing_window: int = 12               # EMA span of the mid price
    deep_value_window: int = 48              # 4 hours lookback for the deepest dip
    lowball_factor: float = 1.1
    profit_target: float = 1.015


@dataclass(frozen=True)
class FulfillmentParams:
    """Fill probability estimation parameters."""
    horizons_hours: tuple[int, ...] = (1, 3, 6)
    ticks_per_hour: int = 12
    interval_width_divisor: float = 3.92     # 2 * 1.96


@dataclass(frozen=True)
class TaxParams:
    """Grand Exchange tax applied to sale proceeds."""
    rate: float = 0.02
    cap: int = 5_000_000


@dataclass(frozen=True)
class AnalysisConfig:
    """Complete analysis configuration."""
    conditioning: ConditioningParams
    forecast: ForecastParams
    pricing: PricingParams
    fulfillment: FulfillmentParams
    tax: TaxParams


def get_default_config() -> AnalysisConfig:
    """Get the default configuration instance."""
    return AnalysisConfig(
        conditioning=ConditioningParams(),
        forecast=ForecastParams(),
        pricing=PricingParams(),
        fulfillment=FulfillmentParams(),
        tax=TaxParams(),
    )
