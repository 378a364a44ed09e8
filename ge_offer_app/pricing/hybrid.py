"""Hybrid pricing: historical spreads adjusted by the price forecast"""

from collections.abc import Sequence
from typing import Optional

from ..data.models import ConditionedTick, ForecastTick
from ..fulfillment.estimator import estimate_fulfillment
from ..models.analysis import AnalysisMethod, FulfillmentAnalysis
from .base import OfferQuote, PricingStrategy, round_price


class HybridForecastStrategy(PricingStrategy):
    """
    Quote around the latest fair price with forecast-driven adjustments.

    Spreads are scaled by how wide the forecast band ends up relative to the
    historical margin (clamped), and both offers shift by a fraction of the
    forecast's ~1 hour price move.
    """

    method = AnalysisMethod.HYBRID_FORECAST

    def volatility_factor(self, last: ConditionedTick, forecast: Sequence[ForecastTick]) -> float:
        """Final forecast band width over historical margin, clamped."""
        final = forecast[-1]
        interval_width = final.forecast_high - final.forecast_low
        historical_margin = last.p90_low_spread + last.p90_high_spread

        if historical_margin <= 0:
            factor = 1.0
        else:
            factor = interval_width / historical_margin

        return min(self.params.volatility_factor_max,
                   max(self.params.volatility_factor_min, factor))

    def trend_adjustment(self, last: ConditionedTick, forecast: Sequence[ForecastTick]) -> float:
        """Damped share of the forecast move from the current fair price."""
        index = min(self.params.trend_lookahead_index, len(forecast) - 1)
        trend_delta = forecast[index].forecast_price - last.fair_price
        return trend_delta * self.params.trend_influence_factor

    def quote(self, history: Sequence[ConditionedTick],
              forecast: Sequence[ForecastTick]) -> OfferQuote:
        last = history[-1]
        factor = self.volatility_factor(last, forecast)
        adjustment = self.trend_adjustment(last, forecast)

        self.logger.debug(
            "Hybrid quote adjustments",
            fair_price=last.fair_price,
            volatility_factor=factor,
            trend_adjustment=adjustment
        )

        return OfferQuote(
            buy=round_price(last.fair_price - last.p90_low_spread * factor + adjustment),
            sell=round_price(last.fair_price + last.p90_high_spread * factor + adjustment),
        )

    def fulfillment(self, quote: OfferQuote,
                    forecast: Sequence[ForecastTick]) -> Optional[FulfillmentAnalysis]:
        if quote.buy is None or quote.sell is None:
            return None
        return estimate_fulfillment(quote.buy, quote.sell, forecast, self.config)
