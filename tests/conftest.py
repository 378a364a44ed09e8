"""Pytest configuration and shared fixtures."""

from dataclasses import replace
from typing import Callable, List, Optional

import pytest

from ge_offer_app.config.defaults import get_default_config
from ge_offer_app.data.models import ConditionedTick, ForecastTick, RawTick

BASE_TS = 1_700_000_000
STEP = 300


@pytest.fixture
def make_raw_ticks() -> Callable[..., List[RawTick]]:
    """Factory for evenly spaced raw ticks with constant prices and volumes."""
    def _make(count: int, high: Optional[float] = 110.0, low: Optional[float] = 90.0,
              high_volume: int = 100, low_volume: int = 100,
              start: int = BASE_TS, step: int = STEP) -> List[RawTick]:
        return [
            RawTick(
                timestamp=start + i * step,
                avg_high_price=high,
                avg_low_price=low,
                high_price_volume=high_volume,
                low_price_volume=low_volume,
            )
            for i in range(count)
        ]
    return _make


@pytest.fixture
def make_banded_history() -> Callable[..., List[ConditionedTick]]:
    """Factory for conditioned ticks that already carry fair price and p90 spreads."""
    def _make(count: int = 60, fair: float = 100.0, low_spread: float = 10.0,
              high_spread: float = 10.0, high_volume: int = 100,
              low_volume: int = 100) -> List[ConditionedTick]:
        return [
            ConditionedTick(
                timestamp=BASE_TS + i * STEP,
                avg_high_price=fair + high_spread,
                avg_low_price=fair - low_spread,
                high_price_volume=high_volume,
                low_price_volume=low_volume,
                vwap=fair,
                fair_price=fair,
                max_realistic_margin=low_spread + high_spread,
                p90_low_spread=low_spread,
                p90_high_spread=high_spread,
            )
            for i in range(count)
        ]
    return _make


@pytest.fixture
def make_forecast() -> Callable[..., List[ForecastTick]]:
    """Factory for forecast ticks with constant means and band half-widths."""
    def _make(count: int = 72, price: float = 100.0, price_band: float = 10.0,
              high_mean: float = 110.0, low_mean: float = 90.0,
              side_band: float = 10.0, start: int = BASE_TS + 60 * STEP) -> List[ForecastTick]:
        return [
            ForecastTick(
                timestamp=start + (i + 1) * STEP,
                forecast_price=price,
                forecast_high=price + price_band,
                forecast_low=price - price_band,
                forecast_high_mean=high_mean,
                forecast_high_upper=high_mean + side_band,
                forecast_high_lower=high_mean - side_band,
                forecast_low_mean=low_mean,
                forecast_low_upper=low_mean + side_band,
                forecast_low_lower=low_mean - side_band,
            )
            for i in range(count)
        ]
    return _make


@pytest.fixture
def default_config():
    """Default analysis configuration."""
    return get_default_config()


@pytest.fixture
def deep_value_config():
    """Configuration quoting historical offers in deep-value style."""
    config = get_default_config()
    return replace(config, pricing=replace(config.pricing, historical_quote="deep_value"))
