"""Data models for offer analysis results"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

import orjson


class AnalysisMethod(Enum):
    """How the recommended prices were derived."""
    HISTORICAL = "Historical"
    HYBRID_FORECAST = "Hybrid Forecast"


@dataclass(frozen=True)
class FulfillmentPoint:
    """Probability that an order fills within a time horizon."""
    horizon_hours: int
    probability: float


@dataclass(frozen=True)
class FulfillmentAnalysis:
    """Fill probabilities for the buy and sell offers, one point per horizon."""
    buy: tuple[FulfillmentPoint, ...]
    sell: tuple[FulfillmentPoint, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "buy": [{"timeHorizonHours": p.horizon_hours, "probability": p.probability}
                    for p in self.buy],
            "sell": [{"timeHorizonHours": p.horizon_hours, "probability": p.probability}
                     for p in self.sell],
        }


@dataclass(frozen=True)
class OfferAnalysis:
    """Recommended buy/sell offer pair with after-tax profitability."""
    recommended_buy: Optional[int]
    recommended_sell: Optional[int]
    potential_profit: Optional[int]
    potential_margin: Optional[str]      # e.g. "20.00%"
    analysis_method: AnalysisMethod
    fulfillment_analysis: Optional[FulfillmentAnalysis] = None

    @property
    def is_actionable(self) -> bool:
        """Both offers exist and the pair is profitable after tax."""
        return (self.recommended_buy is not None and
                self.recommended_sell is not None and
                self.potential_profit is not None and
                self.potential_profit > 0)

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the field names the presentation layer expects."""
        return {
            "recommendedBuy": self.recommended_buy,
            "recommendedSell": self.recommended_sell,
            "potentialProfit": self.potential_profit,
            "potentialMargin": self.potential_margin,
            "analysisMethod": self.analysis_method.value,
            "fulfilmentAnalysis": (self.fulfillment_analysis.to_dict()
                                   if self.fulfillment_analysis else None),
        }

    def to_json(self) -> bytes:
        return orjson.dumps(self.to_dict())
