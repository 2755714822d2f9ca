"""Configuration management module for flight replay.

This module handles loading and saving the interpolation settings from/to a
JSON file. Invalid or missing values fall back to the defaults.
"""
import json
import pathlib
from typing import Any, Callable, Dict, Optional, Union

import portalocker

from .resampling import DEFAULT_RESAMPLING_PERIOD, ResamplingPeriod
from .sky_search import BINARY_INTERVAL_SEARCH_THRESHOLD, DEFAULT_INTERPOLATION_WINDOW

# Get the project root directory (parent of flight_replay package)
_package_dir = pathlib.Path(__file__).parent.resolve()
_project_root = _package_dir.parent.resolve()

# Check if we're in development (pyproject.toml exists) or installed package
if (_project_root / "pyproject.toml").exists():
    # Development mode - use project root
    file_path = _project_root / "config.json"
else:
    # Installed package - use user home directory
    file_path = pathlib.Path.home() / ".flight-replay" / "config.json"

LOCK_TIMEOUT: float = 5.0  # seconds

DEFAULT_CONFIG: Dict[str, Any] = {
    "interpolation_window_ms": DEFAULT_INTERPOLATION_WINDOW,
    "binary_search_threshold_ms": BINARY_INTERVAL_SEARCH_THRESHOLD,
    "hermite_tension": 0.0,
    "resampling_period_ms": DEFAULT_RESAMPLING_PERIOD.value,
}

PathLike = Union[str, pathlib.Path]


def _log(log_callback: Optional[Callable[[str, str], None]], message: str, level: str = "WARNING") -> None:
    if log_callback:
        try:
            log_callback(message, level)
        except Exception:
            pass  # Don't fail if logging callback has issues


def validate_config(
    data: Dict[str, Any],
    log_callback: Optional[Callable[[str, str], None]] = None,
) -> Dict[str, Any]:
    """Merge data over the defaults, replacing invalid values by their default.

    Args:
        data: Configuration values (unknown keys are kept as-is)
        log_callback: Optional callback function(message: str, level: str) for logging

    Returns:
        New configuration dictionary containing all keys of DEFAULT_CONFIG
    """
    config = dict(DEFAULT_CONFIG)
    config.update(data)

    for key in ("interpolation_window_ms", "binary_search_threshold_ms"):
        value = config[key]
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            _log(log_callback, f"Invalid {key}: {value!r}, using default: {DEFAULT_CONFIG[key]}")
            config[key] = DEFAULT_CONFIG[key]

    tension = config["hermite_tension"]
    if isinstance(tension, bool) or not isinstance(tension, (int, float)) or not -1.0 <= tension <= 1.0:
        _log(log_callback, f"Invalid hermite_tension: {tension!r}, using default: {DEFAULT_CONFIG['hermite_tension']}")
        config["hermite_tension"] = DEFAULT_CONFIG["hermite_tension"]
    else:
        config["hermite_tension"] = float(tension)

    period = config["resampling_period_ms"]
    try:
        ResamplingPeriod(period)
    except ValueError:
        _log(log_callback, f"Invalid resampling_period_ms: {period!r}, using default: {DEFAULT_CONFIG['resampling_period_ms']}")
        config["resampling_period_ms"] = DEFAULT_CONFIG["resampling_period_ms"]

    return config


def load_config(
    path: Optional[PathLike] = None,
    log_callback: Optional[Callable[[str, str], None]] = None,
) -> Dict[str, Any]:
    """Load the configuration from a JSON file.

    If the file doesn't exist, is empty or invalid, the defaults are written
    to it (where possible) and returned.

    Args:
        path: Configuration file (default: module level file_path)
        log_callback: Optional callback function(message: str, level: str) for logging

    Returns:
        Validated configuration dictionary
    """
    config_path = pathlib.Path(path) if path is not None else file_path
    try:
        with open(config_path, "r") as file:
            data = json.load(file)
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
        if not data:
            raise ValueError("Configuration is empty")
    except (FileNotFoundError, json.JSONDecodeError, ValueError, IOError, OSError) as e:
        # Config file doesn't exist or is invalid, create default
        _log(log_callback, f"Cannot read config file {config_path}: {e}. Using defaults.", "INFO")
        try:
            save_config(DEFAULT_CONFIG, config_path)
        except (IOError, OSError, portalocker.LockException) as write_error:
            # If we can't write the config file, continue with defaults
            _log(log_callback, f"Failed to write default config file: {write_error}")
        return dict(DEFAULT_CONFIG)

    return validate_config(data, log_callback)


def save_config(data: Dict[str, Any], path: Optional[PathLike] = None) -> None:
    """Write the configuration to a JSON file.

    The file is written while holding an exclusive lock.

    Args:
        data: Configuration dictionary
        path: Configuration file (default: module level file_path)

    Raises:
        OSError: If the file cannot be written
        portalocker.LockException: If the lock cannot be acquired in time
    """
    config_path = pathlib.Path(path) if path is not None else file_path
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with portalocker.Lock(str(config_path), mode="w", timeout=LOCK_TIMEOUT) as file:
        json.dump(data, file, indent=4)
