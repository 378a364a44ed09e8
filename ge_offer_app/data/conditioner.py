"""
Price history conditioning pipeline.

Turns sparse, irregularly timestamped raw ticks into a dense 5-minute series
with forward-filled prices and derived indicators:

    raw ticks → window limit → regularized grid (forward fill + VWAP)
              → fair price (SMA of VWAP) → p90 margin bands

Every stage emits None for values it lacks history for; conditioning never
raises for legitimately sparse data.
"""

from collections.abc import Sequence
from dataclasses import replace
from typing import Optional

import structlog

from ..config.defaults import AnalysisConfig, get_default_config
from ..metrics.rolling import calculate_sma, percentile
from ..metrics.tax import calculate_ge_tax
from ..metrics.vwap import calculate_vwap
from ..utils.time import format_tick_time, is_on_grid, tick_grid
from .models import ConditionedTick, RawTick

logger = structlog.get_logger(__name__)


def limit_time_window(ticks: Sequence[RawTick], max_history_seconds: int) -> list[RawTick]:
    """Drop ticks older than max_history_seconds before the latest tick."""
    if not ticks:
        return []

    threshold = ticks[-1].timestamp - max_history_seconds
    return [tick for tick in ticks if tick.timestamp >= threshold]


def regularize(ticks: Sequence[RawTick], step: int) -> list[ConditionedTick]:
    """
    Fold raw ticks onto a dense grid, forward-filling prices.

    Grid points without an observation carry the last known prices with zero
    volume. Observed ticks with a missing side inherit that side's last known
    price. VWAP is taken from the observed prices before filling.

    Args:
        ticks: Raw ticks in chronological order
        step: Grid spacing in seconds

    Returns:
        One ConditionedTick per grid point from first to last tick
    """
    if not ticks:
        return []

    observed = {tick.timestamp: tick for tick in ticks}
    last_high: Optional[float] = None
    last_low: Optional[float] = None
    series: list[ConditionedTick] = []

    for ts in tick_grid(ticks[0].timestamp, ticks[-1].timestamp, step):
        tick = observed.get(ts)

        if tick is None:
            series.append(ConditionedTick(
                timestamp=ts,
                avg_high_price=last_high,
                avg_low_price=last_low,
                high_price_volume=0,
                low_price_volume=0,
                is_synthetic=True,
            ))
            continue

        vwap = calculate_vwap(tick.avg_high_price, tick.high_price_volume,
                              tick.avg_low_price, tick.low_price_volume)
        if tick.avg_high_price is not None:
            last_high = tick.avg_high_price
        if tick.avg_low_price is not None:
            last_low = tick.avg_low_price

        series.append(ConditionedTick(
            timestamp=ts,
            avg_high_price=last_high,
            avg_low_price=last_low,
            high_price_volume=tick.high_price_volume,
            low_price_volume=tick.low_price_volume,
            vwap=vwap,
        ))

    return series


class DataConditioner:
    """
    Stateless conditioner producing gap-filled, indicator-enriched history.
    """

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config or get_default_config()
        self.params = self.config.conditioning

    def condition(self, ticks: Sequence[RawTick]) -> list[ConditionedTick]:
        """
        Condition raw ticks into a dense series with derived indicators.

        Args:
            ticks: Raw ticks in chronological order

        Returns:
            Conditioned ticks (empty if fewer than 2 ticks remain after
            window limiting)
        """
        retained = limit_time_window(ticks, self.params.max_history_seconds)

        if len(retained) < 2:
            logger.debug(
                "Not enough recent ticks to condition",
                raw_count=len(ticks),
                retained_count=len(retained)
            )
            return []

        step = self.params.tick_interval_seconds
        series = regularize(retained, step)
        series = self._apply_fair_price(series)
        series = self._apply_margin_bands(series)

        anchor = retained[0].timestamp
        synthetic = sum(1 for tick in series if tick.is_synthetic)
        logger.debug(
            "Conditioned price history",
            raw_count=len(ticks),
            retained_count=len(retained),
            grid_count=len(series),
            synthetic_count=synthetic,
            off_grid_dropped=sum(1 for t in retained if not is_on_grid(t.timestamp, anchor, step)),
            start=format_tick_time(series[0].timestamp),
            end=format_tick_time(series[-1].timestamp)
        )

        return series

    def _apply_fair_price(self, series: list[ConditionedTick]) -> list[ConditionedTick]:
        """Fair price = SMA of VWAP over the trailing fair-price window."""
        fair_prices = calculate_sma([tick.vwap for tick in series], self.params.fair_price_window)
        return [replace(tick, fair_price=fair) for tick, fair in zip(series, fair_prices)]

    def _apply_margin_bands(self, series: list[ConditionedTick]) -> list[ConditionedTick]:
        """Rolling p90 spreads of low/high prices around fair price."""
        window = self.params.margin_window
        result = []

        for i, tick in enumerate(series):
            if i < window - 1:
                result.append(tick)
                continue

            result.append(self._margin_bands_for(tick, series[i - window + 1:i + 1]))

        return result

    def _margin_bands_for(self, tick: ConditionedTick,
                          window: Sequence[ConditionedTick]) -> ConditionedTick:
        low_diffs = [abs(p.fair_price - p.avg_low_price) for p in window
                     if p.fair_price is not None and p.avg_low_price is not None]
        high_diffs = [abs(p.avg_high_price - p.fair_price) for p in window
                      if p.fair_price is not None and p.avg_high_price is not None]

        min_samples = self.params.min_spread_samples
        if len(low_diffs) < min_samples or len(high_diffs) < min_samples:
            return tick

        p90_low = percentile(low_diffs, self.params.margin_percentile)
        p90_high = percentile(high_diffs, self.params.margin_percentile)
        max_margin = p90_low + p90_high

        after_tax = None
        if tick.fair_price is not None:
            estimated_sell = tick.fair_price + p90_high
            net = max_margin - calculate_ge_tax(estimated_sell, self.config.tax)
            after_tax = net if net > 0 else None

        return replace(
            tick,
            p90_low_spread=p90_low,
            p90_high_spread=p90_high,
            max_realistic_margin=max_margin,
            max_realistic_margin_after_tax=after_tax,
        )


def condition_ticks(ticks: Sequence[RawTick],
                    config: Optional[AnalysisConfig] = None) -> list[ConditionedTick]:
    """Convenience wrapper around DataConditioner.condition."""
    return DataConditioner(config).condition(ticks)
