"""Historical pricing: quotes derived from observed spreads only"""

import math
from collections.abc import Sequence
from typing import Optional

from ..data.models import ConditionedTick, ForecastTick
from ..metrics.rolling import calculate_ema, calculate_rolling_max
from ..models.analysis import AnalysisMethod
from .base import OfferQuote, PricingStrategy, round_price


def latest_banded_tick(history: Sequence[ConditionedTick]) -> Optional[ConditionedTick]:
    """Most recent tick with fair price and both p90 spreads."""
    for tick in reversed(history):
        if tick.has_spread_bands:
            return tick
    return None


class HistoricalStrategy(PricingStrategy):
    """
    Quote from conditioned history alone.

    Two quote styles:
    - "spread": buy at fair - p90 low spread, sell at fair + p90 high spread
    - "deep_value": lowball below the deepest recent dip under an EMA fair
      price and sell at a fixed markup over the buy
    """

    method = AnalysisMethod.HISTORICAL

    def quote(self, history: Sequence[ConditionedTick],
              forecast: Sequence[ForecastTick] = ()) -> OfferQuote:
        if self.params.historical_quote == "deep_value":
            return self._deep_value_quote(history)
        return self._spread_quote(history)

    def _spread_quote(self, history: Sequence[ConditionedTick]) -> OfferQuote:
        tick = latest_banded_tick(history)
        if tick is None:
            self.logger.debug("No tick with spread bands in history", history_count=len(history))
            return OfferQuote(buy=None, sell=None)

        return OfferQuote(
            buy=round_price(tick.fair_price - tick.p90_low_spread),
            sell=round_price(tick.fair_price + tick.p90_high_spread),
        )

    def _deep_value_quote(self, history: Sequence[ConditionedTick]) -> OfferQuote:
        window = self.params.deep_value_window
        if len(history) < window:
            self.logger.debug(
                "Not enough history for deep-value quote",
                required_count=window,
                available_count=len(history)
            )
            return OfferQuote(buy=None, sell=None)

        mids = [
            (t.avg_high_price + t.avg_low_price) / 2
            if t.avg_high_price is not None and t.avg_low_price is not None else None
            for t in history
        ]
        fair_prices = calculate_ema(mids, self.params.smoothing_window)
        dips = [
            fair - tick.avg_low_price
            if fair is not None and tick.avg_low_price is not None else None
            for fair, tick in zip(fair_prices, history)
        ]
        deep_margins = calculate_rolling_max(dips, window)

        fair = fair_prices[-1]
        deep_margin = deep_margins[-1]
        if fair is None or deep_margin is None:
            return OfferQuote(buy=None, sell=None)

        buy = math.floor(fair - deep_margin * self.params.lowball_factor)
        sell = math.floor(buy * self.params.profit_target)
        return OfferQuote(buy=buy, sell=sell)
