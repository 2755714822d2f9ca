"""Pytest configuration and fixtures."""

import pytest
import sys
from pathlib import Path
from typing import List, Tuple

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from flight_replay.aircraft_info import AircraftInfo
from flight_replay.sample import PositionData, Sample


@pytest.fixture
def four_samples() -> List[Sample]:
    """Samples at t = 0, 10, 20 and 30 ms."""
    return [Sample(timestamp=t) for t in (0, 10, 20, 30)]


@pytest.fixture
def dense_samples() -> List[Sample]:
    """Samples every 100 ms from 0 to 100000 ms (1001 samples)."""
    return [Sample(timestamp=t) for t in range(0, 100001, 100)]


@pytest.fixture
def aircraft_info() -> AircraftInfo:
    return AircraftInfo(tail_number="HB-SKY")


@pytest.fixture
def linear_positions() -> List[PositionData]:
    """Positions every second, with values growing linearly over time."""
    return [
        PositionData(
            timestamp=i * 1000,
            latitude=10.0 * i,
            longitude=5.0 * i,
            altitude=1000.0 + 100.0 * i,
            indicated_altitude=900.0 + 100.0 * i,
            pitch=1.0 * i,
            bank=2.0 * i,
            heading=10.0 * i,
            velocity_body_z=50.0 + i,
        )
        for i in range(6)
    ]


class LogCollector:
    """Collects (message, level) tuples passed to a log callback."""

    def __init__(self):
        self.messages: List[Tuple[str, str]] = []

    def __call__(self, message: str, level: str) -> None:
        self.messages.append((message, level))

    def levels(self) -> List[str]:
        return [level for _, level in self.messages]


@pytest.fixture
def log_collector() -> LogCollector:
    return LogCollector()


def assert_same_values(actual: Sample, expected: Sample) -> None:
    """Helper function to compare all interpolated fields of two samples.

    Floating point fields are compared approximately; the timestamp is not
    compared.
    """
    assert type(actual) is type(expected)
    for name, _ in type(expected).interpolated_fields():
        expected_value = getattr(expected, name)
        actual_value = getattr(actual, name)
        if isinstance(expected_value, float):
            assert actual_value == pytest.approx(expected_value, abs=1e-9), name
        else:
            assert actual_value == expected_value, name
