#!/usr/bin/env python3
"""
Basic Usage Example - GE Offer Analysis Engine

This script demonstrates the basic usage of the offer analysis engine with a
simulated price history. It shows how to:
- Build a timeseries payload
- Analyze it with the default configuration and a named profile
- Read the suggested offers, profitability and fill probabilities

Run: python examples/basic_usage.py
"""

import math
import random
from typing import Any, Dict, List

import orjson

from ge_offer_app.engine import OfferAnalysisEngine
from ge_offer_app.logging import configure_logging

TICK_SECONDS = 300


def create_timeseries(start: int, count: int, base_price: float,
                      seed: int = 7) -> Dict[str, List[Dict[str, Any]]]:
    """Create a 5-minute timeseries response with occasional empty buckets."""
    rng = random.Random(seed)
    entries = []

    for i in range(count):
        if rng.random() < 0.1:
            continue  # no trades in this bucket

        mid = base_price * (1 + 0.02 * math.sin(2 * math.pi * i / 72)) + rng.gauss(0, base_price * 0.003)
        spread = base_price * 0.04
        entries.append({
            "timestamp": start + i * TICK_SECONDS,
            "avgHighPrice": round(mid + spread / 2),
            "avgLowPrice": round(mid - spread / 2),
            "highPriceVolume": rng.randint(5, 60),
            "lowPriceVolume": rng.randint(5, 60),
        })

    return {"data": entries}


def print_offer(title: str, offer) -> None:
    print(f"\n{title}")
    print("-" * len(title))

    if offer is None:
        print("  Not enough price history to advise")
        return

    print(f"  Method:     {offer.analysis_method.value}")
    print(f"  Buy at:     {offer.recommended_buy}")
    print(f"  Sell at:    {offer.recommended_sell}")
    print(f"  Profit:     {offer.potential_profit} ({offer.potential_margin})")
    print(f"  Actionable: {offer.is_actionable}")

    if offer.fulfillment_analysis:
        for buy, sell in zip(offer.fulfillment_analysis.buy, offer.fulfillment_analysis.sell):
            print(f"  {buy.horizon_hours}h fill: buy {buy.probability:.1%}, sell {sell.probability:.1%}")


def main():
    """Run the basic usage example."""
    configure_logging(level="WARNING")

    print("GE Offer Analysis - Basic Usage")
    print("=" * 40)

    payload = create_timeseries(start=1_700_000_000, count=365, base_price=2_500)

    engine = OfferAnalysisEngine()
    print_offer("Default configuration", engine.analyze_payload(orjson.dumps(payload), item_id=4151))

    conservative = OfferAnalysisEngine.from_profile("conservative")
    print_offer("Conservative profile", conservative.analyze_payload(payload, item_id=4151))

    short = {"data": payload["data"][:20]}
    print_offer("Short history", engine.analyze_payload(short, item_id=4151))

    report = engine.run([])
    print_offer("Empty history", report.offer)

    offer = engine.analyze_payload(payload, item_id=4151)
    if offer is not None:
        print("\nJSON output:")
        print(orjson.dumps(offer.to_dict(), option=orjson.OPT_INDENT_2).decode())


if __name__ == "__main__":
    main()
