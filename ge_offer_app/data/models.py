"""
Canonical data models for market trade statistics.

This module defines immutable data structures for raw 5-minute trade buckets,
their conditioned (gap-filled, indicator-enriched) form, and forecast ticks
projected beyond the observed history.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RawTick:
    """One observed 5-minute bucket of trade statistics."""
    timestamp: int                      # Bucket start, epoch seconds
    avg_high_price: Optional[float]     # None: no instant-buy trades in bucket
    avg_low_price: Optional[float]      # None: no instant-sell trades in bucket
    high_price_volume: int = 0
    low_price_volume: int = 0


@dataclass(frozen=True)
class ConditionedTick:
    """Gap-filled tick with derived per-tick indicators."""
    timestamp: int
    avg_high_price: Optional[float]
    avg_low_price: Optional[float]
    high_price_volume: int = 0
    low_price_volume: int = 0

    # Derived indicators (None while history is insufficient)
    vwap: Optional[float] = None
    fair_price: Optional[float] = None
    max_realistic_margin: Optional[float] = None
    max_realistic_margin_after_tax: Optional[float] = None
    p90_low_spread: Optional[float] = None
    p90_high_spread: Optional[float] = None

    # True for grid points synthesized by forward fill
    is_synthetic: bool = False

    @property
    def has_spread_bands(self) -> bool:
        """Fair price and both p90 spreads are available."""
        return (self.fair_price is not None and
                self.p90_low_spread is not None and
                self.p90_high_spread is not None)


@dataclass(frozen=True)
class ForecastTick:
    """Projected statistics for a future, not-yet-observed 5-minute bucket."""
    timestamp: int

    # Fair price forecast with its confidence band
    forecast_price: Optional[float] = None
    forecast_high: Optional[float] = None
    forecast_low: Optional[float] = None

    # High price forecast
    forecast_high_mean: Optional[float] = None
    forecast_high_upper: Optional[float] = None
    forecast_high_lower: Optional[float] = None

    # Low price forecast
    forecast_low_mean: Optional[float] = None
    forecast_low_upper: Optional[float] = None
    forecast_low_lower: Optional[float] = None

    @property
    def has_price_bands(self) -> bool:
        """Both the high and the low price forecasts are complete."""
        return None not in (
            self.forecast_high_mean, self.forecast_high_upper, self.forecast_high_lower,
            self.forecast_low_mean, self.forecast_low_upper, self.forecast_low_lower,
        )
