"""
Analysis result models.

Immutable value objects returned to the caller: the offer suggestion, its
profitability and the estimated fill probabilities.
"""

from .analysis import AnalysisMethod, FulfillmentAnalysis, FulfillmentPoint, OfferAnalysis

__all__ = ["AnalysisMethod", "FulfillmentAnalysis", "FulfillmentPoint", "OfferAnalysis"]
