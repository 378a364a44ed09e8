"""
GE Offer App - Grand Exchange Offer Analysis Engine

Conditions 5-minute price history for a tradeable item, forecasts it with
damped-trend smoothing, and recommends a buy/sell offer pair with after-tax
profit and fill probabilities.
"""

__version__ = "0.1.0"
__author__ = "GE Offer Team"
