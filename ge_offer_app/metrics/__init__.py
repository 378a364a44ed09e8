"""Indicator primitives shared by the conditioning and pricing stages"""

from .rolling import calculate_ema, calculate_rolling_max, calculate_sma, percentile
from .tax import calculate_ge_tax
from .vwap import calculate_vwap

__all__ = [
    "calculate_ema",
    "calculate_rolling_max",
    "calculate_sma",
    "percentile",
    "calculate_ge_tax",
    "calculate_vwap",
]
