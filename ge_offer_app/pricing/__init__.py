"""Offer pricing strategies (Historical, Hybrid Forecast)"""

from .base import OfferQuote, PricingStrategy, evaluate_profitability, round_price
from .historical import HistoricalStrategy
from .hybrid import HybridForecastStrategy
from .selector import partition_series, price_offers, select_strategy

__all__ = [
    "OfferQuote",
    "PricingStrategy",
    "HistoricalStrategy",
    "HybridForecastStrategy",
    "evaluate_profitability",
    "round_price",
    "partition_series",
    "price_offers",
    "select_strategy",
]
