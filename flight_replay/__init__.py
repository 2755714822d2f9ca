"""Flight Replay - time-indexed sample store and interpolation engine.

Stores the recorded channels of an aircraft (position, attitude, engine,
flight controls, handles, lights) and interpolates their values at arbitrary
timestamps for replay, seeking and export.
"""

from .aircraft import Aircraft
from .aircraft_info import AircraftInfo
from .channel import Channel
from .config import DEFAULT_CONFIG, load_config, save_config
from .sample import (
    INVALID_TIME,
    AccessMode,
    AircraftHandleData,
    AttitudeData,
    EngineData,
    Interpolation,
    LightData,
    PositionData,
    PrimaryFlightControlData,
    Sample,
    SecondaryFlightControlData,
)
from .resampling import ResamplingPeriod, SampleRate, resample
from .sample_series import SampleSeries
from .sky_search import (
    DEFAULT_INTERPOLATION_WINDOW,
    INFINITE_INTERPOLATION_WINDOW,
    INVALID_INDEX,
)


def _get_version() -> str:
    """Get version from package metadata or pyproject.toml.

    Tries to read from installed package metadata first (standard way),
    then falls back to reading pyproject.toml directly for development.
    """
    from importlib.metadata import version, PackageNotFoundError
    try:
        return version("flight-replay-core")
    except PackageNotFoundError:
        pass

    # Fallback: read from pyproject.toml for development
    from pathlib import Path
    import re

    pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
    if pyproject_path.exists():
        try:
            content = pyproject_path.read_text(encoding="utf-8")
            # Simple regex to extract version (works without TOML parser)
            match = re.search(r'version\s*=\s*"([^"]+)"', content)
            if match:
                return match.group(1)
        except OSError:
            pass

    return "0.0.0"  # Fallback if nothing found


__version__ = _get_version()

__all__ = [
    "Aircraft",
    "AircraftInfo",
    "Channel",
    "SampleSeries",
    "Sample",
    "AccessMode",
    "Interpolation",
    "PositionData",
    "AttitudeData",
    "EngineData",
    "PrimaryFlightControlData",
    "SecondaryFlightControlData",
    "AircraftHandleData",
    "LightData",
    "INVALID_TIME",
    "INVALID_INDEX",
    "DEFAULT_INTERPOLATION_WINDOW",
    "INFINITE_INTERPOLATION_WINDOW",
    "DEFAULT_CONFIG",
    "load_config",
    "save_config",
    "ResamplingPeriod",
    "SampleRate",
    "resample",
]
