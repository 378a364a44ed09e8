"""Tests for timeseries payload parsing"""

import pytest
from ge_offer_app.data.models import RawTick
from ge_offer_app.data.parsers import parse_json_payload, parse_timeseries_payload
from ge_offer_app.errors import MalformedDataError, MissingDataError, TemporalDataError


class TestParseTimeseriesPayload:
    """Test timeseries response parsing"""

    def test_bytes_payload(self):
        """Test a JSON payload is decoded into RawTicks"""
        payload = (b'{"data": ['
                   b'{"timestamp": 1700000000, "avgHighPrice": 105, "avgLowPrice": 98,'
                   b' "highPriceVolume": 12, "lowPriceVolume": 30},'
                   b'{"timestamp": 1700000300, "avgHighPrice": null, "avgLowPrice": 97.5,'
                   b' "highPriceVolume": 0, "lowPriceVolume": 4}]}')

        ticks = parse_timeseries_payload(payload)

        assert ticks == [
            RawTick(1700000000, 105.0, 98.0, 12, 30),
            RawTick(1700000300, None, 97.5, 0, 4),
        ]

    def test_decoded_mapping(self):
        """Test an already decoded response is accepted"""
        ticks = parse_timeseries_payload({"data": [{"timestamp": 1, "avgHighPrice": 10}]})

        assert ticks == [RawTick(1, 10.0, None, 0, 0)]

    def test_empty_data(self):
        """Test an empty series parses to no ticks"""
        assert parse_timeseries_payload('{"data": []}') == []

    def test_invalid_json(self):
        """Test undecodable payloads are malformed"""
        with pytest.raises(MalformedDataError):
            parse_json_payload(b"{not json")

    def test_missing_data_key(self):
        """Test responses without a data array"""
        with pytest.raises(MissingDataError):
            parse_timeseries_payload({"error": "rate limited"})

    def test_data_not_a_list(self):
        """Test a non-array data field"""
        with pytest.raises(MalformedDataError):
            parse_timeseries_payload({"data": {"timestamp": 1}})

    def test_missing_timestamp(self):
        """Test entries without timestamps"""
        with pytest.raises(MissingDataError):
            parse_timeseries_payload({"data": [{"avgHighPrice": 10}]})

    @pytest.mark.parametrize("entry", [
        {"timestamp": 1, "avgHighPrice": "10"},
        {"timestamp": 1, "avgHighPrice": 0},
        {"timestamp": 1, "avgLowPrice": -5},
        {"timestamp": 1, "highPriceVolume": -1},
        {"timestamp": 1, "lowPriceVolume": 2.5},
        {"timestamp": "1"},
        {"timestamp": 1, "avgHighPrice": True},
    ])
    def test_invalid_values(self, entry):
        """Test invalid field types and values are rejected"""
        with pytest.raises(MalformedDataError):
            parse_timeseries_payload({"data": [entry]})

    def test_non_increasing_timestamps(self):
        """Test out-of-order or duplicate timestamps"""
        with pytest.raises(TemporalDataError) as exc_info:
            parse_timeseries_payload({"data": [{"timestamp": 600}, {"timestamp": 300}]})

        assert exc_info.value.timestamp == 300
        assert exc_info.value.previous_timestamp == 600

        with pytest.raises(TemporalDataError):
            parse_timeseries_payload({"data": [{"timestamp": 300}, {"timestamp": 300}]})
