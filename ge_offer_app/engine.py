"""
Main offer analysis coordinator.

Orchestrates the analysis pipeline for one item, from raw price history to an
offer suggestion:

    Raw ticks → Conditioning → Forecast → Pricing (→ Fulfillment) → OfferAnalysis
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

import structlog

from .config.defaults import AnalysisConfig, get_default_config
from .config.loader import ConfigLoader
from .data.conditioner import DataConditioner
from .data.models import ConditionedTick, ForecastTick, RawTick
from .data.parsers import parse_timeseries_payload
from .errors import DataQualityError
from .forecast.engine import ForecastEngine
from .models.analysis import OfferAnalysis
from .pricing.selector import price_offers

logger = structlog.get_logger(__name__)


def _history_point(tick: ConditionedTick) -> dict[str, Any]:
    return {
        "timestamp": tick.timestamp,
        "avgHighPrice": tick.avg_high_price,
        "avgLowPrice": tick.avg_low_price,
        "highPriceVolume": tick.high_price_volume,
        "lowPriceVolume": tick.low_price_volume,
        "fairPrice": tick.fair_price,
        "maxRealisticMargin": tick.max_realistic_margin,
        "maxRealisticMarginAfterTax": tick.max_realistic_margin_after_tax,
        "p90LowSpread": tick.p90_low_spread,
        "p90HighSpread": tick.p90_high_spread,
    }


def _forecast_point(tick: ForecastTick) -> dict[str, Any]:
    return {
        "timestamp": tick.timestamp,
        "forecastPrice": tick.forecast_price,
        "forecastHigh": tick.forecast_high,
        "forecastLow": tick.forecast_low,
        "forecastHigh_mean": tick.forecast_high_mean,
        "forecastHigh_upper": tick.forecast_high_upper,
        "forecastHigh_lower": tick.forecast_high_lower,
        "forecastLow_mean": tick.forecast_low_mean,
        "forecastLow_upper": tick.forecast_low_upper,
        "forecastLow_lower": tick.forecast_low_lower,
    }


@dataclass(frozen=True)
class AnalysisReport:
    """Everything one pipeline run produced for an item."""
    history: list[ConditionedTick] = field(default_factory=list)
    forecast: list[ForecastTick] = field(default_factory=list)
    offer: Optional[OfferAnalysis] = None

    def chart_series(self) -> list[dict[str, Any]]:
        """
        Merge history and forecast into chart points.

        The suggested offers are marked on the last historical point.
        """
        points = [_history_point(tick) for tick in self.history]

        if points and self.offer is not None:
            points[-1]["buyOffer"] = self.offer.recommended_buy
            points[-1]["sellOffer"] = self.offer.recommended_sell

        points.extend(_forecast_point(tick) for tick in self.forecast)
        return points


class OfferAnalysisEngine:
    """
    Coordinator for single-item offer analysis.

    Every stage is a pure function of its input and the engine's immutable
    configuration, so one engine can analyze any number of items.
    """

    def __init__(self, config: Optional[AnalysisConfig] = None) -> None:
        """Initialize the offer analysis engine."""
        self.config = config or get_default_config()
        self.logger = logger

        self.conditioner = DataConditioner(self.config)
        self.forecaster = ForecastEngine(self.config)

    @classmethod
    def from_profile(
        cls,
        profile: Optional[str] = None,
        overrides: Optional[dict[str, Any]] = None,
        config_dir: Optional[Union[str, Path]] = None
    ) -> "OfferAnalysisEngine":
        """Build an engine from a named parameter profile plus overrides."""
        loader = ConfigLoader.create(Path(config_dir) if config_dir else None)
        return cls(loader.build_config(profile, overrides))

    def run(self, raw_ticks: Sequence[RawTick], item_id: Optional[int] = None) -> AnalysisReport:
        """
        Run the full pipeline.

        Args:
            raw_ticks: Raw ticks in chronological order
            item_id: Optional item identifier for log context

        Returns:
            AnalysisReport with conditioned history, forecast and offer
        """
        log = self.logger.bind(item_id=item_id) if item_id is not None else self.logger

        history = self.conditioner.condition(raw_ticks)
        if not history:
            log.info("Insufficient price history for analysis", raw_count=len(raw_ticks))
            return AnalysisReport()

        forecast = self.forecaster.forecast(history)
        offer = price_offers([*history, *forecast], self.config)

        log.info(
            "Offer analysis complete",
            history_count=len(history),
            forecast_count=len(forecast),
            analysis_method=offer.analysis_method.value if offer else None,
            recommended_buy=offer.recommended_buy if offer else None,
            recommended_sell=offer.recommended_sell if offer else None,
            potential_profit=offer.potential_profit if offer else None
        )

        return AnalysisReport(history=history, forecast=forecast, offer=offer)

    def analyze(self, raw_ticks: Sequence[RawTick],
                item_id: Optional[int] = None) -> Optional[OfferAnalysis]:
        """Offer analysis for raw ticks; None when the history cannot advise."""
        return self.run(raw_ticks, item_id).offer

    def analyze_payload(
        self,
        payload: Union[str, bytes, Mapping[str, Any]],
        item_id: Optional[int] = None
    ) -> Optional[OfferAnalysis]:
        """
        Offer analysis for a timeseries API payload.

        Payloads that fail to decode or validate are logged and yield None.
        """
        try:
            raw_ticks = parse_timeseries_payload(payload)
        except DataQualityError as e:
            self.logger.warning(
                "Data quality issue in timeseries payload",
                item_id=item_id,
                error=str(e),
                error_type=type(e).__name__
            )
            return None

        return self.analyze(raw_ticks, item_id)
