"""Strategy selection and the pricing entry point"""

from collections.abc import Sequence
from typing import Optional, Union

from ..config.defaults import AnalysisConfig, get_default_config
from ..data.models import ConditionedTick, ForecastTick
from ..logging.config import get_pricing_logger, log_mode_selection
from ..models.analysis import OfferAnalysis
from .base import PricingStrategy
from .historical import HistoricalStrategy
from .hybrid import HybridForecastStrategy

pricing_logger = get_pricing_logger(__name__)

Tick = Union[ConditionedTick, ForecastTick]


def partition_series(series: Sequence[Tick]) -> tuple[list[ConditionedTick], list[ForecastTick]]:
    """Split a merged series into historical and forecast ticks."""
    history = [t for t in series if isinstance(t, ConditionedTick)]
    forecast = [t for t in series if isinstance(t, ForecastTick)]
    return history, forecast


def _forecast_is_complete(forecast: Sequence[ForecastTick], lookahead_index: int) -> bool:
    final = forecast[-1]
    trend_tick = forecast[min(lookahead_index, len(forecast) - 1)]
    return (final.forecast_high is not None and final.forecast_low is not None and
            trend_tick.forecast_price is not None)


def select_strategy(history: Sequence[ConditionedTick],
                    forecast: Sequence[ForecastTick],
                    config: Optional[AnalysisConfig] = None) -> PricingStrategy:
    """
    Choose the pricing strategy.

    Hybrid when the forecast covers at least min_forecast_points ticks and the
    latest historical tick carries fair price and both p90 spreads; Historical
    otherwise.
    """
    config = config or get_default_config()
    params = config.pricing
    last = history[-1]

    if len(forecast) < params.min_forecast_points:
        reason = "forecast too short"
    elif not last.has_spread_bands:
        reason = "latest tick lacks spread bands"
    elif not _forecast_is_complete(forecast, params.trend_lookahead_index):
        reason = "forecast band incomplete"
    else:
        strategy = HybridForecastStrategy(config)
        log_mode_selection(pricing_logger, strategy.method.value, "forecast available",
                           {"forecast_points": len(forecast)})
        return strategy

    strategy = HistoricalStrategy(config)
    log_mode_selection(pricing_logger, strategy.method.value, reason,
                       {"forecast_points": len(forecast),
                        "historical_quote": params.historical_quote})
    return strategy


def price_offers(series: Sequence[Tick],
                 config: Optional[AnalysisConfig] = None) -> Optional[OfferAnalysis]:
    """
    Recommend a buy/sell offer pair for a conditioned (and possibly forecast)
    series.

    Args:
        series: Historical ConditionedTicks, optionally followed by ForecastTicks
        config: Analysis configuration

    Returns:
        OfferAnalysis, or None when there is no historical data at all
    """
    history, forecast = partition_series(series)

    if not history:
        pricing_logger.debug("No historical data to price", series_count=len(series))
        return None

    strategy = select_strategy(history, forecast, config)
    return strategy.price(history, forecast)
