"""Aircraft: all recorded channels of one aircraft.

The aircraft owns one channel per data category and the AircraftInfo shared
by them. The aircraft time offset shifts all LINEAR and SEEK queries, e.g. to
synchronise several aircraft of a formation flight.
"""

from typing import Any, Callable, Dict, List, Optional

from .aircraft_info import AircraftInfo
from .channel import (
    Channel,
    aircraft_handle_channel,
    attitude_channel,
    engine_channel,
    light_channel,
    position_channel,
    primary_flight_control_channel,
    secondary_flight_control_channel,
)
from .sample import INVALID_TIME


class Aircraft:
    """Container for the recorded channels of a single aircraft.

    Not thread-safe; see Channel.

    Attributes:
        info: Aircraft metadata shared by all channels
        position, attitude, engine, primary_flight_control,
        secondary_flight_control, aircraft_handle, light: The channels
    """

    def __init__(
        self,
        info: Optional[AircraftInfo] = None,
        config: Optional[Dict[str, Any]] = None,
        log_callback: Optional[Callable[[str, str], None]] = None,
    ):
        """Initialize an aircraft without recorded data.

        Args:
            info: Aircraft metadata (a default one is created if None)
            config: Optional configuration dictionary (see config.load_config)
            log_callback: Optional callback function(message: str, level: str) for logging
        """
        self.info = info if info is not None else AircraftInfo()
        self._log_callback = log_callback
        self._duration: int = INVALID_TIME

        channel_args = {
            "log_callback": log_callback,
            "on_data_changed": self.invalidate_duration,
        }
        self.position = position_channel(self.info, **channel_args)
        self.attitude = attitude_channel(self.info, **channel_args)
        self.engine = engine_channel(self.info, **channel_args)
        self.primary_flight_control = primary_flight_control_channel(self.info, **channel_args)
        self.secondary_flight_control = secondary_flight_control_channel(self.info, **channel_args)
        self.aircraft_handle = aircraft_handle_channel(self.info, **channel_args)
        self.light = light_channel(self.info, **channel_args)

        if config is not None:
            self.apply_config(config)

    def _log(self, message: str, level: str = "INFO") -> None:
        if self._log_callback:
            try:
                self._log_callback(message, level)
            except Exception:
                pass  # Don't fail if logging callback has issues

    def channels(self) -> List[Channel]:
        """Get all channels, position first."""
        return [
            self.position,
            self.attitude,
            self.engine,
            self.primary_flight_control,
            self.secondary_flight_control,
            self.aircraft_handle,
            self.light,
        ]

    def apply_config(self, config: Dict[str, Any]) -> None:
        """Apply interpolation settings to all channels.

        The attitude channel keeps its infinite export window.

        Args:
            config: Configuration dictionary with the keys of config.DEFAULT_CONFIG
        """
        window = config.get("interpolation_window_ms")
        tension = config.get("hermite_tension")
        threshold = config.get("binary_search_threshold_ms")
        for channel in self.channels():
            channel.configure(
                linear_window=window,
                export_window=window if channel is not self.attitude else None,
                tension=tension,
                threshold=threshold,
            )

    def get_time_offset(self) -> int:
        return self.info.time_offset

    def set_time_offset(self, time_offset: int) -> None:
        """Set the time offset [ms] and invalidate the duration."""
        if time_offset != self.info.time_offset:
            self._log(
                f"Time offset of '{self.info.tail_number}' changed from "
                f"{self.info.time_offset} ms to {time_offset} ms",
                "INFO",
            )
        self.info.time_offset = time_offset
        self.invalidate_duration()

    def add_time_offset(self, delta_offset: int) -> None:
        self.set_time_offset(self.info.time_offset + delta_offset)

    def get_duration_ms(self) -> int:
        """Get the duration of the recording [ms], taking the time offset into account.

        The more the aircraft is "ahead" of its samples (positive offset),
        the shorter the duration. The value is cached until invalidated.

        Returns:
            Maximum over all channels of last timestamp minus time offset, at least 0
        """
        if self._duration == INVALID_TIME:
            time_offset = self.info.time_offset
            duration = 0
            for channel in self.channels():
                if channel.count() > 0:
                    duration = max(channel.get_last().timestamp - time_offset, duration)
            self._duration = duration
        return self._duration

    def invalidate_duration(self) -> None:
        """Invalidate the cached duration, e.g. after recording more samples."""
        self._duration = INVALID_TIME

    def has_recording(self) -> bool:
        return self.position.count() > 0

    def clear(self) -> None:
        """Discard all recorded data and metadata."""
        self.info.clear()
        for channel in self.channels():
            channel.clear()
        self.invalidate_duration()

    def get_statistics(self) -> Dict[str, Any]:
        """Get statistics for all channels.

        Returns:
            Dictionary with the duration and per channel statistics
        """
        return {
            'tail_number': self.info.tail_number,
            'time_offset': self.info.time_offset,
            'duration': self.get_duration_ms(),
            'total_samples': sum(channel.count() for channel in self.channels()),
            'channels': {channel.name: channel.series.get_statistics() for channel in self.channels()},
        }
