"""
Timeseries payload parsers.

Converts the price API's 5-minute timeseries response into RawTick records
with type conversion and validation. Shape of the payload:

    {"data": [{"timestamp": 1700000000, "avgHighPrice": 105, "avgLowPrice": 98,
               "highPriceVolume": 12, "lowPriceVolume": 30}, ...]}
"""

import math
from collections.abc import Mapping
from typing import Any, Optional, Union

import orjson

from ..errors import MalformedDataError, MissingDataError, TemporalDataError
from .models import RawTick


def parse_json_payload(raw_data: Union[str, bytes]) -> Any:
    """
    Decode a JSON payload.

    Raises:
        MalformedDataError: if the payload is not valid JSON
    """
    try:
        return orjson.loads(raw_data)
    except orjson.JSONDecodeError as e:
        raise MalformedDataError(
            f"Invalid JSON payload: {e}",
            raw_data=str(raw_data)[:100],
            expected_format="json"
        )


def parse_price(value: Any, field: str) -> Optional[float]:
    """Parse an optional average price; None means no trades in the bucket."""
    if value is None:
        return None

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedDataError(f"Invalid {field} type: {type(value).__name__}",
                                 raw_data=str(value))

    price = float(value)
    if math.isnan(price) or math.isinf(price):
        raise MalformedDataError(f"Invalid {field} value: {value}", raw_data=str(value))
    if price <= 0:
        raise MalformedDataError(f"Non-positive {field}: {value}", raw_data=str(value))

    return price


def parse_volume(value: Any, field: str) -> int:
    """Parse a trade volume; a missing volume counts as no trades."""
    if value is None:
        return 0

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedDataError(f"Invalid {field} type: {type(value).__name__}",
                                 raw_data=str(value))
    if isinstance(value, float) and not value.is_integer():
        raise MalformedDataError(f"Fractional {field}: {value}", raw_data=str(value))
    if value < 0:
        raise MalformedDataError(f"Negative {field}: {value}", raw_data=str(value))

    return int(value)


def parse_tick(entry: Mapping[str, Any]) -> RawTick:
    """Parse one timeseries entry into a RawTick."""
    if not isinstance(entry, Mapping):
        raise MalformedDataError(
            f"Timeseries entry must be an object, got {type(entry).__name__}",
            raw_data=str(entry)[:100]
        )

    timestamp = entry.get("timestamp")
    if timestamp is None:
        raise MissingDataError("Timeseries entry missing timestamp", data_type="timestamp")
    if isinstance(timestamp, bool) or not isinstance(timestamp, int):
        raise MalformedDataError(f"Invalid timestamp: {timestamp!r}", raw_data=str(timestamp),
                                 expected_format="epoch seconds")

    return RawTick(
        timestamp=timestamp,
        avg_high_price=parse_price(entry.get("avgHighPrice"), "avgHighPrice"),
        avg_low_price=parse_price(entry.get("avgLowPrice"), "avgLowPrice"),
        high_price_volume=parse_volume(entry.get("highPriceVolume"), "highPriceVolume"),
        low_price_volume=parse_volume(entry.get("lowPriceVolume"), "lowPriceVolume"),
    )


def parse_timeseries_payload(payload: Union[str, bytes, Mapping[str, Any]]) -> list[RawTick]:
    """
    Parse a timeseries response into chronologically ordered RawTicks.

    Args:
        payload: Raw JSON (str/bytes) or an already decoded response mapping

    Returns:
        RawTick list with strictly increasing timestamps

    Raises:
        MalformedDataError: wrong types or invalid values
        MissingDataError: no "data" array in the response
        TemporalDataError: timestamps not strictly increasing
    """
    if isinstance(payload, (str, bytes)):
        payload = parse_json_payload(payload)

    if not isinstance(payload, Mapping):
        raise MalformedDataError("Timeseries response must be an object",
                                 expected_format="{\"data\": [...]}")

    entries = payload.get("data")
    if entries is None:
        raise MissingDataError("Timeseries response missing 'data' array", data_type="data")
    if not isinstance(entries, list):
        raise MalformedDataError("Timeseries 'data' must be an array",
                                 raw_data=str(entries)[:100])

    ticks = [parse_tick(entry) for entry in entries]

    for previous, current in zip(ticks, ticks[1:]):
        if current.timestamp <= previous.timestamp:
            raise TemporalDataError(
                "Timeseries timestamps must be strictly increasing",
                timestamp=current.timestamp,
                previous_timestamp=previous.timestamp
            )

    return ticks
