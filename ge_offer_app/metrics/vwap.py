"""VWAP (Volume-Weighted Average Price) for a single trade bucket"""

from typing import Optional


def calculate_vwap(avg_high_price: Optional[float], high_volume: int,
                   avg_low_price: Optional[float], low_volume: int) -> Optional[float]:
    """
    Calculate the volume-weighted mid price of one bucket

    VWAP = (high * high_vol + low * low_vol) / (high_vol + low_vol)

    Only sides with an observed price contribute weight.

    Args:
        avg_high_price: Average instant-buy price, None if not traded
        high_volume: Instant-buy volume
        avg_low_price: Average instant-sell price, None if not traded
        low_volume: Instant-sell volume

    Returns:
        VWAP or None if no weighted volume exists
    """
    weighted_sum = 0.0
    effective_volume = 0

    if avg_high_price is not None:
        weighted_sum += avg_high_price * high_volume
        effective_volume += high_volume
    if avg_low_price is not None:
        weighted_sum += avg_low_price * low_volume
        effective_volume += low_volume

    if effective_volume <= 0:
        return None

    return weighted_sum / effective_volume
