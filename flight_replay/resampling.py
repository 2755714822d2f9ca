"""Recording sample rates and resampling of channels for export.

Export plugins write either the originally recorded samples, or samples
resampled at a fixed period. Resampling queries the channel with
AccessMode.EXPORT, i.e. relative to the start of the recording and without
the aircraft time offset.
"""

from enum import Enum
from typing import List, Optional

from .channel import Channel
from .sample import AccessMode, Sample

# "Auto" sample rate: event based sampling, as fast as data arrives
AUTO_SAMPLE_RATE_VALUE: float = 999.0
DEFAULT_AUTO_SAMPLE_RATE: float = 60.0


class ResamplingPeriod(Enum):
    """Resampling period in milliseconds (0: keep the original samples)."""
    ORIGINAL = 0
    TEN_HZ = 100
    FIVE_HZ = 200
    TWO_HZ = 500
    ONE_HZ = 1000
    A_FIFTH_HZ = 5000
    A_TENTH_HZ = 10000


DEFAULT_RESAMPLING_PERIOD = ResamplingPeriod.ONE_HZ


class SampleRate(Enum):
    """Recording sample rate in Hz."""
    AUTO = AUTO_SAMPLE_RATE_VALUE
    HZ_1 = 1.0
    HZ_2 = 2.0
    HZ_5 = 5.0
    HZ_10 = 10.0
    HZ_15 = 15.0
    HZ_20 = 20.0
    HZ_24 = 24.0
    HZ_25 = 25.0
    HZ_30 = 30.0
    HZ_45 = 45.0
    HZ_50 = 50.0
    HZ_60 = 60.0

    def to_value(self) -> float:
        return self.value

    @classmethod
    def from_value(cls, sample_rate: float) -> "SampleRate":
        """Get the smallest sample rate >= sample_rate.

        Args:
            sample_rate: Sample rate in Hz

        Returns:
            Matching sample rate; AUTO for rates above 60 Hz
        """
        for rate in cls:
            if rate is not cls.AUTO and sample_rate <= rate.value:
                return rate
        return cls.AUTO

    def to_interval_ms(self) -> int:
        """Get the timer interval [ms] for this sample rate."""
        return to_interval_ms(self.value)


def to_interval_ms(sample_rate_value: float) -> int:
    """Convert a sample rate [Hz] into a timer interval [ms].

    The AUTO value maps onto DEFAULT_AUTO_SAMPLE_RATE.
    """
    if sample_rate_value == AUTO_SAMPLE_RATE_VALUE:
        return int(1000.0 / DEFAULT_AUTO_SAMPLE_RATE)
    return int(1000.0 / sample_rate_value)


def resample(
    channel: Channel,
    period_ms: int = DEFAULT_RESAMPLING_PERIOD.value,
    start_ms: Optional[int] = None,
    end_ms: Optional[int] = None,
) -> List[Sample]:
    """Resample a channel at a fixed period.

    Rows for which the channel yields no value (outside the channel's
    export window) are skipped. The last sample is always included, so
    that the resampled data covers the entire recording.

    Args:
        channel: Channel to resample
        period_ms: Resampling period [ms]; 0 (ResamplingPeriod.ORIGINAL)
            returns the recorded samples unchanged
        start_ms: First timestamp (default: first sample)
        end_ms: Last timestamp (default: last sample)

    Returns:
        List of samples in chronological order

    Raises:
        ValueError: If period_ms is negative
    """
    if period_ms < 0:
        raise ValueError(f"Resampling period must not be negative: {period_ms} ms")
    if channel.count() == 0:
        return []

    first = channel.get_first().timestamp if start_ms is None else start_ms
    last = channel.get_last().timestamp if end_ms is None else end_ms
    if first > last:
        return []

    if period_ms == ResamplingPeriod.ORIGINAL.value:
        return [sample for sample in channel.series if first <= sample.timestamp <= last]

    samples: List[Sample] = []
    timestamp = first
    while timestamp <= last:
        sample = channel.interpolate(timestamp, AccessMode.EXPORT)
        if not sample.is_null():
            samples.append(sample)
        timestamp += period_ms

    # Always include the very last sample point
    if timestamp - period_ms < last:
        sample = channel.interpolate(last, AccessMode.EXPORT)
        if not sample.is_null():
            samples.append(sample)
    return samples
