"""
Pricing strategy interface and the steps shared by every variant.

A strategy proposes a raw buy/sell quote; the shared pipeline then applies
liquidity gating, evaluates after-tax profitability and (optionally) attaches
fill probabilities:

    quote → liquidity gates → profitability → OfferAnalysis
"""

import math
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from ..config.defaults import AnalysisConfig, TaxParams, get_default_config
from ..data.models import ConditionedTick, ForecastTick
from ..logging.config import get_pricing_logger, log_gate_decision
from ..metrics.tax import calculate_ge_tax
from ..models.analysis import AnalysisMethod, FulfillmentAnalysis, OfferAnalysis

pricing_logger = get_pricing_logger(__name__)

UNPROFITABLE_MARGIN = "0.00%"


@dataclass(frozen=True)
class OfferQuote:
    """Candidate buy/sell prices before profitability evaluation."""
    buy: Optional[int]
    sell: Optional[int]


def round_price(value: float) -> int:
    """Round half up to a whole coin."""
    return math.floor(value + 0.5)


def trailing_volume(history: Sequence[ConditionedTick], window: int) -> tuple[int, int]:
    """Summed (high, low) side volume over the trailing window."""
    recent = history[-window:]
    return (sum(t.high_price_volume for t in recent),
            sum(t.low_price_volume for t in recent))


def evaluate_profitability(buy: Optional[int], sell: Optional[int],
                           tax: TaxParams = TaxParams()) -> tuple[Optional[int], Optional[str]]:
    """
    After-tax profit and margin of a buy/sell pair.

    profit = sell - buy - tax(sell), margin = 100 * profit / buy

    Returns:
        (profit, margin string); (None, None) when a price is missing or the
        buy price is not positive; (0, "0.00%") when the pair loses money
    """
    if buy is None or sell is None or buy <= 0:
        return None, None

    profit = sell - buy - calculate_ge_tax(sell, tax)
    if profit <= 0:
        return 0, UNPROFITABLE_MARGIN

    return profit, f"{100 * profit / buy:.2f}%"


class PricingStrategy(ABC):
    """Base class for offer pricing strategies."""

    method: AnalysisMethod

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config or get_default_config()
        self.params = self.config.pricing
        self.logger = pricing_logger.bind(analysis_method=self.method.value)

    @abstractmethod
    def quote(self, history: Sequence[ConditionedTick],
              forecast: Sequence[ForecastTick]) -> OfferQuote:
        """Propose raw buy/sell prices."""

    def fulfillment(self, quote: OfferQuote,
                    forecast: Sequence[ForecastTick]) -> Optional[FulfillmentAnalysis]:
        """Fill probabilities for the gated quote; none by default."""
        return None

    def price(self, history: Sequence[ConditionedTick],
              forecast: Sequence[ForecastTick] = ()) -> OfferAnalysis:
        """
        Run the full pricing pipeline.

        Args:
            history: Conditioned historical ticks (non-empty)
            forecast: Forecast ticks following the history

        Returns:
            Immutable OfferAnalysis
        """
        quote = self.apply_liquidity_gates(self.quote(history, forecast), history)
        profit, margin = evaluate_profitability(quote.buy, quote.sell, self.config.tax)

        if profit == 0:
            self.logger.info(
                "Suggested offer pair is not profitable after tax",
                recommended_buy=quote.buy,
                recommended_sell=quote.sell
            )

        return OfferAnalysis(
            recommended_buy=quote.buy,
            recommended_sell=quote.sell,
            potential_profit=profit,
            potential_margin=margin,
            analysis_method=self.method,
            fulfillment_analysis=self.fulfillment(quote, forecast),
        )

    def apply_liquidity_gates(self, quote: OfferQuote,
                              history: Sequence[ConditionedTick]) -> OfferQuote:
        """
        Suppress offers with no recent opposite-side activity.

        A sell needs recent instant-buy (high side) volume; a buy needs recent
        instant-sell (low side) volume.
        """
        window = self.params.liquidity_window
        high_volume, low_volume = trailing_volume(history, window)
        context = {"window": window, "high_volume": high_volume, "low_volume": low_volume}

        buy = quote.buy
        if buy is not None:
            passed = low_volume > 0
            log_gate_decision(self.logger, "buy_liquidity", passed,
                              f"trailing low-side volume {low_volume}", context)
            if not passed:
                buy = None

        sell = quote.sell
        if sell is not None:
            passed = high_volume > 0
            log_gate_decision(self.logger, "sell_liquidity", passed,
                              f"trailing high-side volume {high_volume}", context)
            if not passed:
                sell = None

        return OfferQuote(buy=buy, sell=sell)
