"""Damped-trend exponential smoothing (Holt's linear method with damping)"""

import math
import statistics
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from ..errors import InsufficientDataError


@dataclass(frozen=True)
class SmoothingResult:
    """Projected mean and confidence band, one entry per forecast step"""
    mean: list[float]
    upper: list[float]
    lower: list[float]
    residual_std: float

    def band_widths(self) -> list[float]:
        """Width of the confidence band at each step"""
        return [u - l for u, l in zip(self.upper, self.lower)]


def damped_sum(phi: float, steps: int) -> float:
    """Geometric sum phi + phi^2 + ... + phi^steps"""
    return sum(phi ** j for j in range(1, steps + 1))


def damped_trend_smoothing(series: Sequence[float], alpha: float, beta: float, phi: float,
                           horizon: int, z_score: float = 1.96,
                           floor: Optional[float] = 0.0) -> SmoothingResult:
    """
    Fit a damped-trend model and project it horizon steps ahead

    level_t = alpha * y_t + (1 - alpha) * (level_{t-1} + phi * trend_{t-1})
    trend_t = beta * (level_t - level_{t-1}) + (1 - beta) * phi * trend_{t-1}
    mean_k  = level + trend * (phi + phi^2 + ... + phi^k)
    band_k  = z * std(residuals) * sqrt(k)

    The first observation seeds the level and counts as a zero residual.

    Args:
        series: Observed values in chronological order (at least 2)
        alpha: Level smoothing factor
        beta: Trend smoothing factor
        phi: Trend damping factor
        horizon: Number of steps to project
        z_score: Band half-width in residual standard deviations
        floor: Lower bound applied to mean and band (None disables)

    Returns:
        SmoothingResult with horizon entries per sequence

    Raises:
        InsufficientDataError: fewer than 2 observations
    """
    if len(series) < 2:
        raise InsufficientDataError(
            "Damped-trend smoothing needs at least 2 observations",
            required_count=2,
            available_count=len(series)
        )

    level = series[0]
    trend = series[1] - series[0]
    residuals = [0.0]

    for value in series[1:]:
        one_step_forecast = level + phi * trend
        residuals.append(value - one_step_forecast)

        last_level = level
        level = alpha * value + (1 - alpha) * one_step_forecast
        trend = beta * (level - last_level) + (1 - beta) * phi * trend

    residual_std = statistics.stdev(residuals)

    mean: list[float] = []
    upper: list[float] = []
    lower: list[float] = []

    for k in range(1, horizon + 1):
        forecast_value = level + trend * damped_sum(phi, k)
        half_width = z_score * residual_std * math.sqrt(k)

        values = (forecast_value, forecast_value + half_width, forecast_value - half_width)
        if floor is not None:
            values = tuple(max(floor, v) for v in values)

        mean.append(values[0])
        upper.append(values[1])
        lower.append(values[2])

    return SmoothingResult(mean=mean, upper=upper, lower=lower, residual_std=residual_std)
