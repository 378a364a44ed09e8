"""Tests for tick-grid time utilities."""

from datetime import datetime, timezone

import pytest

from ge_offer_app.utils.time import format_tick_time, is_on_grid, tick_grid, to_utc_datetime


class TestTickGrid:
    """Test grid generation."""

    def test_inclusive_range(self):
        assert list(tick_grid(0, 900, 300)) == [0, 300, 600, 900]

    def test_end_off_grid(self):
        assert list(tick_grid(0, 1000, 300)) == [0, 300, 600, 900]

    def test_single_point(self):
        assert list(tick_grid(600, 600, 300)) == [600]

    @pytest.mark.parametrize("step", [0, -300])
    def test_invalid_step(self, step):
        with pytest.raises(ValueError):
            tick_grid(0, 900, step)


class TestIsOnGrid:
    """Test grid membership."""

    def test_on_grid(self):
        assert is_on_grid(1_700_000_600, 1_700_000_000, 300)
        assert is_on_grid(1_700_000_000, 1_700_000_000, 300)

    def test_off_grid(self):
        assert not is_on_grid(1_700_000_150, 1_700_000_000, 300)

    def test_before_anchor(self):
        assert not is_on_grid(1_699_999_700, 1_700_000_000, 300)


class TestFormatting:
    """Test timestamp conversion."""

    def test_to_utc_datetime(self):
        assert to_utc_datetime(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)

    def test_format_tick_time(self):
        assert format_tick_time(1_700_000_000) == "2023-11-14T22:13:20+00:00"
