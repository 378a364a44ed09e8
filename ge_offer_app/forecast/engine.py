"""
Forecast engine for conditioned price history.

Projects the fair-price, high-price and low-price series independently with
damped-trend smoothing and assembles them into ForecastTicks that continue
the history's 5-minute grid.
"""

import math
from collections.abc import Sequence
from typing import Optional

import structlog

from ..config.defaults import AnalysisConfig, get_default_config
from ..data.models import ConditionedTick, ForecastTick
from ..errors import ForecastCalculationError, InsufficientDataError
from .smoothing import SmoothingResult, damped_trend_smoothing

logger = structlog.get_logger(__name__)

SERIES_FIELDS = {
    "fair": "fair_price",
    "high": "avg_high_price",
    "low": "avg_low_price",
}


def extract_series(history: Sequence[ConditionedTick], field: str) -> list[float]:
    """Positive numeric values of one tick field, in order."""
    series = []
    for tick in history:
        value = getattr(tick, field)
        if isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0:
            series.append(float(value))
    return series


class ForecastEngine:
    """Stateless damped-trend forecaster over conditioned history."""

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config or get_default_config()
        self.params = self.config.forecast

    def forecast(self, history: Sequence[ConditionedTick]) -> list[ForecastTick]:
        """
        Forecast the next horizon ticks.

        Args:
            history: Conditioned ticks in chronological order

        Returns:
            ForecastTicks, or an empty list when any series has fewer than
            min_observations valid values or the fit breaks down
        """
        if not history:
            return []

        series = {name: extract_series(history, field) for name, field in SERIES_FIELDS.items()}

        short = {name: len(values) for name, values in series.items()
                 if len(values) < self.params.min_observations}
        if short:
            logger.debug(
                "Not enough data for a full forecast",
                required_count=self.params.min_observations,
                available_counts=short
            )
            return []

        try:
            fits = {name: self._fit(name, values) for name, values in series.items()}
        except (InsufficientDataError, ForecastCalculationError) as e:
            logger.warning("Forecast generation failed", error=str(e))
            return []

        step = self.config.conditioning.tick_interval_seconds
        last_timestamp = history[-1].timestamp
        fair, high, low = fits["fair"], fits["high"], fits["low"]

        return [
            ForecastTick(
                timestamp=last_timestamp + (i + 1) * step,
                forecast_price=fair.mean[i],
                forecast_high=fair.upper[i],
                forecast_low=fair.lower[i],
                forecast_high_mean=high.mean[i],
                forecast_high_upper=high.upper[i],
                forecast_high_lower=high.lower[i],
                forecast_low_mean=low.mean[i],
                forecast_low_upper=low.upper[i],
                forecast_low_lower=low.lower[i],
            )
            for i in range(self.params.horizon)
        ]

    def _fit(self, name: str, values: list[float]) -> SmoothingResult:
        result = damped_trend_smoothing(
            values,
            alpha=self.params.alpha,
            beta=self.params.beta,
            phi=self.params.phi,
            horizon=self.params.horizon,
            z_score=self.params.z_score,
        )

        if not all(math.isfinite(v) for v in (*result.mean, *result.upper, *result.lower)):
            raise ForecastCalculationError(
                f"Non-finite {name} forecast",
                series_name=name,
                calculation_input={"observations": len(values)}
            )

        return result


def generate_forecast(history: Sequence[ConditionedTick],
                      config: Optional[AnalysisConfig] = None) -> list[ForecastTick]:
    """Convenience wrapper around ForecastEngine.forecast."""
    return ForecastEngine(config).forecast(history)
