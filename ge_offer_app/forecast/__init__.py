"""Damped-trend forecasting of fair, high and low price series"""

from .engine import ForecastEngine, generate_forecast
from .smoothing import SmoothingResult, damped_trend_smoothing

__all__ = [
    "ForecastEngine",
    "generate_forecast",
    "SmoothingResult",
    "damped_trend_smoothing",
]
