"""Tests for sample rates and resampling."""

import pytest

from flight_replay.aircraft_info import AircraftInfo
from flight_replay.channel import attitude_channel, position_channel
from flight_replay.resampling import (
    DEFAULT_RESAMPLING_PERIOD,
    ResamplingPeriod,
    SampleRate,
    resample,
    to_interval_ms,
)
from flight_replay.sample import AttitudeData, PositionData


@pytest.fixture
def dense_position_channel():
    """Position channel with samples every 100 ms from 0 to 1000 ms."""
    channel = position_channel(AircraftInfo())
    for t in range(0, 1001, 100):
        channel.upsert_last(PositionData(timestamp=t, latitude=t / 100.0))
    return channel


class TestSampleRate:
    """Tests for sample rate conversions."""

    @pytest.mark.parametrize("value,expected", [
        (1.0, SampleRate.HZ_1),
        (3.0, SampleRate.HZ_5),
        (60.0, SampleRate.HZ_60),
        (61.0, SampleRate.AUTO),
        (999.0, SampleRate.AUTO),
    ])
    def test_from_value(self, value, expected):
        """Test that values map onto the smallest sample rate >= value."""
        assert SampleRate.from_value(value) == expected

    def test_interval(self):
        """Test timer intervals."""
        assert SampleRate.HZ_10.to_interval_ms() == 100
        assert SampleRate.HZ_1.to_interval_ms() == 1000
        assert SampleRate.AUTO.to_interval_ms() == 16
        assert to_interval_ms(50.0) == 20

    def test_default_period(self):
        """Test the default resampling period."""
        assert DEFAULT_RESAMPLING_PERIOD == ResamplingPeriod.ONE_HZ
        assert ResamplingPeriod(500) == ResamplingPeriod.TWO_HZ


class TestResample:
    """Tests for resampling channels."""

    def test_original(self, dense_position_channel):
        """Test that the original period keeps the recorded samples."""
        samples = resample(dense_position_channel, ResamplingPeriod.ORIGINAL.value)
        assert samples == list(dense_position_channel.series)

    def test_fixed_period(self, dense_position_channel):
        """Test resampling at a fixed period."""
        samples = resample(dense_position_channel, 500)
        assert [s.timestamp for s in samples] == [0, 500, 1000]
        assert [s.latitude for s in samples] == pytest.approx([0.0, 5.0, 10.0])

    def test_last_sample_included(self, dense_position_channel):
        """Test that the last timestamp is included when not hit by the period."""
        samples = resample(dense_position_channel, 300)
        assert [s.timestamp for s in samples] == [0, 300, 600, 900, 1000]
        assert samples[-1].latitude == pytest.approx(10.0)

    def test_range(self, dense_position_channel):
        """Test resampling of a time range."""
        samples = resample(dense_position_channel, 200, start_ms=100, end_ms=500)
        assert [s.timestamp for s in samples] == [100, 300, 500]
        original = resample(dense_position_channel, 0, start_ms=250, end_ms=500)
        assert [s.timestamp for s in original] == [300, 400, 500]

    def test_empty_range(self, dense_position_channel):
        """Test that a start after the end yields no samples."""
        assert resample(dense_position_channel, 1000, start_ms=1500, end_ms=1000) == []
        assert resample(dense_position_channel, 0, start_ms=600, end_ms=500) == []

    def test_time_offset_ignored(self, dense_position_channel):
        """Test that resampling uses the recorded timeline."""
        dense_position_channel.aircraft_info.time_offset = 5000
        samples = resample(dense_position_channel, 500)
        assert [s.timestamp for s in samples] == [0, 500, 1000]
        assert samples[1].latitude == pytest.approx(5.0)

    def test_gaps_are_skipped(self):
        """Test that timestamps outside the export window are skipped."""
        channel = position_channel(AircraftInfo())
        channel.upsert_last(PositionData(timestamp=0))
        channel.upsert_last(PositionData(timestamp=10000))
        samples = resample(channel, 1000)
        assert [s.timestamp for s in samples] == [0, 1000, 2000, 10000]

    def test_sparse_attitude(self):
        """Test that sparse attitude data is resampled across gaps."""
        channel = attitude_channel(AircraftInfo())
        channel.upsert_last(AttitudeData(timestamp=0, pitch=0.0))
        channel.upsert_last(AttitudeData(timestamp=10000, pitch=10.0))
        samples = resample(channel, 1000)
        assert len(samples) == 11
        assert samples[5].pitch == pytest.approx(5.0)

    def test_empty_channel(self):
        """Test that an empty channel yields no samples."""
        assert resample(position_channel(AircraftInfo()), 1000) == []

    def test_negative_period(self, dense_position_channel):
        """Test that a negative period is rejected."""
        with pytest.raises(ValueError):
            resample(dense_position_channel, -100)
