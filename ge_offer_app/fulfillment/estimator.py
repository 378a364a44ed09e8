"""
Fill probability estimation for buy and sell offers.

Each forecast tick models the future high and low prices as normal
distributions recovered from their 95% bands. A buy offer fills when the high
price (sellers' asks) comes down to it; a sell offer fills when the low price
(buyers' bids) comes up to it. Ticks are treated as independent trials.
"""

import math
from collections.abc import Sequence
from typing import Optional

from ..config.defaults import AnalysisConfig, get_default_config
from ..data.models import ForecastTick
from ..models.analysis import FulfillmentAnalysis, FulfillmentPoint

# Abramowitz & Stegun 7.1.26
_A1 = 0.254829592
_A2 = -0.284496736
_A3 = 1.421413741
_A4 = -1.453152027
_A5 = 1.061405429
_P = 0.3275911


def erf(x: float) -> float:
    """Error function, rational approximation with |error| < 1.5e-7."""
    sign = 1.0 if x >= 0 else -1.0
    x = abs(x)

    t = 1.0 / (1.0 + _P * x)
    y = 1.0 - (((((_A5 * t + _A4) * t) + _A3) * t + _A2) * t + _A1) * t * math.exp(-x * x)

    return sign * y


def normal_cdf(x: float, mean: float, std_dev: float) -> float:
    """
    P(X <= x) for X ~ Normal(mean, std_dev).

    A non-positive std_dev degenerates to a step at the mean.
    """
    if std_dev <= 0:
        return 0.0 if x < mean else 1.0
    return 0.5 * (1.0 + erf((x - mean) / (std_dev * math.sqrt(2.0))))


def _clamp_probability(p: float) -> float:
    return min(1.0, max(0.0, p))


def _horizon_probabilities(buy_offer: float, sell_offer: float,
                           ticks: Sequence[ForecastTick],
                           width_divisor: float) -> tuple[float, float]:
    """Fill probabilities of both offers over a run of forecast ticks."""
    buy_miss = 1.0
    sell_miss = 1.0

    for tick in ticks:
        if not tick.has_price_bands:
            continue

        high_std = (tick.forecast_high_upper - tick.forecast_high_lower) / width_divisor
        buy_fill = _clamp_probability(normal_cdf(buy_offer, tick.forecast_high_mean, high_std))
        buy_miss *= 1.0 - buy_fill

        low_std = (tick.forecast_low_upper - tick.forecast_low_lower) / width_divisor
        sell_fill = _clamp_probability(1.0 - normal_cdf(sell_offer, tick.forecast_low_mean, low_std))
        sell_miss *= 1.0 - sell_fill

    return _clamp_probability(1.0 - buy_miss), _clamp_probability(1.0 - sell_miss)


def estimate_fulfillment(buy_offer: float, sell_offer: float,
                         forecast: Sequence[ForecastTick],
                         config: Optional[AnalysisConfig] = None) -> Optional[FulfillmentAnalysis]:
    """
    Estimate buy/sell fill probabilities over each configured horizon.

    Args:
        buy_offer: Buy order price
        sell_offer: Sell order price
        forecast: Forecast ticks starting right after the last observation
        config: Analysis configuration

    Returns:
        FulfillmentAnalysis, or None for an empty forecast
    """
    if not forecast:
        return None

    params = (config or get_default_config()).fulfillment
    buy_points = []
    sell_points = []

    for hours in params.horizons_hours:
        window = forecast[:hours * params.ticks_per_hour]

        if window:
            buy_p, sell_p = _horizon_probabilities(buy_offer, sell_offer, window,
                                                   params.interval_width_divisor)
        else:
            buy_p, sell_p = 0.0, 0.0

        buy_points.append(FulfillmentPoint(horizon_hours=hours, probability=buy_p))
        sell_points.append(FulfillmentPoint(horizon_hours=hours, probability=sell_p))

    return FulfillmentAnalysis(buy=tuple(buy_points), sell=tuple(sell_points))
