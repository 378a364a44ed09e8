"""
Error handling tests for the offer analysis pipeline.

Tests cover the error classification, malformed and insufficient data, and
graceful degradation of the forecast stage.
"""

import math
from unittest.mock import patch

import pytest

from ge_offer_app.data.conditioner import condition_ticks
from ge_offer_app.errors import (
    ConfigurationError,
    DataQualityError,
    ForecastCalculationError,
    InsufficientDataError,
    MalformedDataError,
    MissingDataError,
    SystemFailureError,
    TemporalDataError,
)
from ge_offer_app.forecast.engine import ForecastEngine
from ge_offer_app.forecast.smoothing import SmoothingResult


class TestErrorClassification:
    """Test error classification system."""

    def test_data_quality_error_hierarchy(self):
        """Test that data quality errors have proper hierarchy."""
        base_error = DataQualityError("base error")
        assert base_error.recoverable is True
        assert base_error.context == {}

        temporal_error = TemporalDataError("out of order", timestamp=300, previous_timestamp=600)
        assert isinstance(temporal_error, DataQualityError)
        assert temporal_error.timestamp == 300
        assert temporal_error.previous_timestamp == 600

        missing_error = MissingDataError("missing data", data_type="timestamp")
        assert isinstance(missing_error, DataQualityError)
        assert missing_error.data_type == "timestamp"

        malformed_error = MalformedDataError("bad price", raw_data="abc", expected_format="number")
        assert malformed_error.raw_data == "abc"
        assert malformed_error.expected_format == "number"

        insufficient_error = InsufficientDataError("too short", required_count=2, available_count=1)
        assert insufficient_error.recoverable is True
        assert insufficient_error.required_count == 2

    def test_system_failure_error_hierarchy(self):
        """Test that system failure errors have proper hierarchy."""
        forecast_error = ForecastCalculationError("nan", series_name="fair",
                                                  calculation_input={"observations": 3})
        assert isinstance(forecast_error, SystemFailureError)
        assert forecast_error.recoverable is False
        assert forecast_error.series_name == "fair"

        config_error = ConfigurationError("invalid", errors=["alpha: bad"])
        assert config_error.recoverable is False
        assert config_error.errors == ["alpha: bad"]
        assert ConfigurationError("invalid").errors == []

    def test_context_is_kept(self):
        error = MissingDataError("missing", data_type="data", context={"item_id": 4151})
        assert error.context == {"item_id": 4151}
        assert str(error) == "missing"


class TestForecastDegradation:
    """Test the forecast stage degrades to an empty forecast."""

    def test_non_finite_fit_yields_empty_forecast(self, make_raw_ticks):
        history = condition_ticks(make_raw_ticks(60))
        broken = SmoothingResult(mean=[math.nan] * 72, upper=[math.nan] * 72,
                                 lower=[math.nan] * 72, residual_std=math.nan)

        with patch("ge_offer_app.forecast.engine.damped_trend_smoothing", return_value=broken):
            assert ForecastEngine().forecast(history) == []

    def test_insufficient_data_yields_empty_forecast(self, make_raw_ticks):
        history = condition_ticks(make_raw_ticks(60))
        error = InsufficientDataError("too short", required_count=2, available_count=1)

        with patch("ge_offer_app.forecast.engine.damped_trend_smoothing", side_effect=error):
            assert ForecastEngine().forecast(history) == []

    def test_fit_raises_calculation_error(self):
        broken = SmoothingResult(mean=[math.inf], upper=[math.inf], lower=[0.0],
                                 residual_std=math.inf)
        engine = ForecastEngine()

        with patch("ge_offer_app.forecast.engine.damped_trend_smoothing", return_value=broken):
            with pytest.raises(ForecastCalculationError) as exc_info:
                engine._fit("high", [110.0] * 12)

        assert exc_info.value.series_name == "high"
        assert exc_info.value.calculation_input == {"observations": 12}
