"""
Price history ingestion and conditioning.

Decodes timeseries payloads into raw ticks and turns them into a dense,
forward-filled series enriched with VWAP, fair price and margin bands.
"""
