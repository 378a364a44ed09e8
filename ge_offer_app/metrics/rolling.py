"""Rolling-window statistics over series that may contain gaps (None)"""

import math
from collections.abc import Sequence
from typing import Optional


def percentile(values: Sequence[float], pct: float) -> Optional[float]:
    """
    Nearest-rank percentile on ascending-sorted values

    index = floor(pct / 100 * (n - 1))

    Args:
        values: Sample values (any order)
        pct: Percentile in [0, 100]

    Returns:
        Selected sample or None for an empty sample
    """
    if not values:
        return None

    ordered = sorted(values)
    index = math.floor((pct / 100.0) * (len(ordered) - 1))
    return ordered[index]


def calculate_sma(values: Sequence[Optional[float]], window: int) -> list[Optional[float]]:
    """
    Simple moving average over a trailing window

    The first window - 1 positions are None. Gaps inside a window are ignored;
    a window with no valid value yields None.
    """
    result: list[Optional[float]] = []

    for i in range(len(values)):
        if i < window - 1:
            result.append(None)
            continue

        valid = [v for v in values[i - window + 1:i + 1] if v is not None]
        result.append(sum(valid) / len(valid) if valid else None)

    return result


def calculate_ema(values: Sequence[Optional[float]], span: int) -> list[Optional[float]]:
    """
    Exponential moving average in weighted-sum ("adjusted") form

    EMA_t = sum((1 - a)^i * x_{t-i}) / sum((1 - a)^i), a = 2 / (span + 1)

    Numerator and denominator are carried recursively. Gaps yield None and do
    not decay the weights, so the first valid value is returned unchanged.
    """
    alpha = 2.0 / (span + 1)
    decay = 1.0 - alpha
    numerator = 0.0
    denominator = 0.0
    result: list[Optional[float]] = []

    for value in values:
        if value is None:
            result.append(None)
            continue

        numerator = value + decay * numerator
        denominator = 1.0 + decay * denominator
        result.append(numerator / denominator)

    return result


def calculate_rolling_max(values: Sequence[Optional[float]], window: int) -> list[Optional[float]]:
    """
    Rolling maximum over a trailing window

    Partial windows at the start are allowed; gaps are ignored and a window
    with no valid value yields None.
    """
    result: list[Optional[float]] = []

    for i in range(len(values)):
        start = max(0, i - window + 1)
        valid = [v for v in values[start:i + 1] if v is not None]
        result.append(max(valid) if valid else None)

    return result
