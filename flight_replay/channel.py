"""Channel facade: interpolated access to the samples of one recorded channel.

A Channel wraps a SampleSeries and answers "what was the value at time t?"
for the three access modes:

- LINEAR: replay; aircraft time offset applied, finite interpolation window
- SEEK: scrubbing; time offset applied, infinite window (never blank)
- EXPORT: resampling; no time offset, window chosen per channel

Every field of the sample type is interpolated according to its declared
Interpolation kind, so one algorithm serves all channels. Results are
immutable samples; the last result is cached and returned again for repeated
queries of the same instant and access mode.

A channel must only be queried from one thread at a time: the search cursor
is updated in place on every query. Guard the channel with a lock if several
threads need to query it.
"""

from typing import Any, Callable, Dict, Generic, List, Optional, Tuple, Type, TypeVar

from .aircraft_info import AircraftInfo
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
from .sample_series import SampleSeries
from .sky_math import hermite, hermite180, hermite360, lerp
from .sky_search import (
    BINARY_INTERVAL_SEARCH_THRESHOLD,
    DEFAULT_INTERPOLATION_WINDOW,
    INFINITE_INTERPOLATION_WINDOW,
    get_cubic_support,
    get_linear_support,
    normalise_timestamp,
)

S = TypeVar("S", bound=Sample)

_CUBIC_FUNCTIONS = {
    Interpolation.CUBIC: hermite,
    Interpolation.CUBIC_180: hermite180,
    Interpolation.CUBIC_360: hermite360,
}


class Channel(Generic[S]):
    """Interpolating facade over the sample series of one channel.

    Attributes:
        name: Channel name (for logging)
        sample_type: Sample class of this channel
        aircraft_info: Metadata of the owning aircraft (time offset)
        linear_window: Interpolation window for LINEAR access [ms]
        export_window: Interpolation window for EXPORT access [ms]
        tension: Hermite spline tension for attitude fields (0 is Catmull-Rom);
            the flight path (latitude, longitude, altitude) always uses 0
        threshold: Forward jump [ms] beyond which the cursor uses binary search
    """

    def __init__(
        self,
        sample_type: Type[S],
        aircraft_info: Optional[AircraftInfo] = None,
        name: Optional[str] = None,
        export_window: int = DEFAULT_INTERPOLATION_WINDOW,
        linear_window: int = DEFAULT_INTERPOLATION_WINDOW,
        tension: float = 0.0,
        threshold: int = BINARY_INTERVAL_SEARCH_THRESHOLD,
        log_callback: Optional[Callable[[str, str], None]] = None,
        on_data_changed: Optional[Callable[[], None]] = None,
    ):
        """Initialize an empty channel.

        Args:
            sample_type: Sample class stored in this channel
            aircraft_info: Aircraft metadata (a default one is created if None)
            name: Channel name (default: sample type name)
            export_window: Interpolation window for EXPORT access [ms]; use
                INFINITE_INTERPOLATION_WINDOW for potentially sparse data
            linear_window: Interpolation window for LINEAR access [ms]
            tension: Hermite spline tension
            threshold: Binary search threshold [ms]
            log_callback: Optional callback function(message: str, level: str) for logging
            on_data_changed: Optional callback invoked after samples were added or removed
        """
        self.sample_type = sample_type
        self.aircraft_info = aircraft_info if aircraft_info is not None else AircraftInfo()
        self.name = name or sample_type.__name__
        self.export_window = export_window
        self.linear_window = linear_window
        self.tension = tension
        self.threshold = threshold
        self._log_callback = log_callback
        self._on_data_changed = on_data_changed
        self._series: SampleSeries[S] = SampleSeries(sample_type, log_callback)
        self._current_value: S = sample_type.null()

        # Field plan, computed once per channel
        self._fields: List[Tuple[str, Interpolation]] = sample_type.interpolated_fields()
        self._cubic = sample_type.is_cubic()
        self._tensioned = sample_type.tensioned_fields()

    def _log(self, message: str, level: str = "INFO") -> None:
        if self._log_callback:
            try:
                self._log_callback(message, level)
            except Exception:
                pass  # Don't fail if logging callback has issues

    @property
    def series(self) -> SampleSeries[S]:
        return self._series

    @property
    def current_value(self) -> S:
        """The result of the last interpolate() call."""
        return self._current_value

    @property
    def is_cubic(self) -> bool:
        """True if this channel interpolates with four support samples."""
        return self._cubic

    def _data_changed(self) -> None:
        if self._on_data_changed:
            self._on_data_changed()

    def upsert_last(self, sample: S) -> None:
        self._series.upsert_last(sample)
        self._data_changed()

    def upsert(self, sample: S) -> None:
        self._series.upsert(sample)
        self._data_changed()

    def get_first(self) -> S:
        return self._series.get_first()

    def get_last(self) -> S:
        return self._series.get_last()

    def count(self) -> int:
        return self._series.count()

    def clear(self) -> None:
        """Remove all samples, reset the cursor and drop the cached value."""
        if self._series.count() > 0:
            self._log(f"{self.name}: clearing {self._series.count()} samples", "INFO")
        self._series.clear()
        self._current_value = self.sample_type.null()
        self._data_changed()

    def configure(
        self,
        linear_window: Optional[int] = None,
        export_window: Optional[int] = None,
        tension: Optional[float] = None,
        threshold: Optional[int] = None,
    ) -> None:
        """Update interpolation settings; None keeps the current value.

        The cached value is invalidated.
        """
        if linear_window is not None:
            self.linear_window = linear_window
        if export_window is not None:
            self.export_window = export_window
        if tension is not None:
            self.tension = tension
        if threshold is not None:
            self.threshold = threshold
        self._series.current_timestamp = INVALID_TIME

    def adjusted_timestamp(self, timestamp: int, access: AccessMode) -> int:
        """Apply the aircraft time offset (except for EXPORT), floored at 0."""
        time_offset = self.aircraft_info.time_offset if access != AccessMode.EXPORT else 0
        return max(timestamp + time_offset, 0)

    def window(self, access: AccessMode) -> int:
        """Get the interpolation window [ms] applicable to access."""
        if access == AccessMode.SEEK:
            return INFINITE_INTERPOLATION_WINDOW
        elif access == AccessMode.EXPORT:
            return self.export_window
        return self.linear_window

    def interpolate(self, timestamp: int, access: AccessMode = AccessMode.LINEAR) -> S:
        """Get the interpolated sample at timestamp.

        Args:
            timestamp: Query timestamp [ms]
            access: Access mode

        Returns:
            Interpolated sample with the adjusted timestamp, or the null
            sample if there is no data within the interpolation window
            (callers must check is_null())
        """
        series = self._series
        adjusted = self.adjusted_timestamp(timestamp, access)
        if series.current_timestamp == adjusted and series.current_access == access:
            return self._current_value

        window = self.window(access)
        if self._cubic:
            p0, p1, p2, p3, index = get_cubic_support(
                series.data, adjusted, window, series.current_index, self.threshold
            )
        else:
            p1, p2, index = get_linear_support(
                series.data, adjusted, window, series.current_index, self.threshold
            )
            p0, p3 = p1, p2

        if p1 is not None:
            mu = normalise_timestamp(p1, p2, adjusted)
            self._current_value = self._interpolate_fields(p0, p1, p2, p3, mu, adjusted)
        else:
            # No data, or the timestamp lies outside the interpolation window
            self._current_value = self.sample_type.null()

        series.current_index = index
        series.current_timestamp = adjusted
        series.current_access = access
        return self._current_value

    def _interpolate_fields(self, p0: S, p1: S, p2: S, p3: S, mu: float, timestamp: int) -> S:
        values: Dict[str, Any] = {}
        for name, kind in self._fields:
            v1 = getattr(p1, name)
            if kind is Interpolation.STEP:
                values[name] = v1
            elif kind is Interpolation.LINEAR:
                values[name] = lerp(v1, getattr(p2, name), mu)
            else:
                values[name] = _CUBIC_FUNCTIONS[kind](
                    getattr(p0, name), v1, getattr(p2, name), getattr(p3, name), mu,
                    self.tension if name in self._tensioned else 0.0,
                )
        return self.sample_type(timestamp=timestamp, **values)


def position_channel(aircraft_info: AircraftInfo, **kwargs: Any) -> Channel[PositionData]:
    return Channel(PositionData, aircraft_info, name="position", **kwargs)


def attitude_channel(aircraft_info: AircraftInfo, **kwargs: Any) -> Channel[AttitudeData]:
    """Attitude may be derived from sparse imported flight plans, so the
    export window is infinite."""
    kwargs.setdefault("export_window", INFINITE_INTERPOLATION_WINDOW)
    return Channel(AttitudeData, aircraft_info, name="attitude", **kwargs)


def engine_channel(aircraft_info: AircraftInfo, **kwargs: Any) -> Channel[EngineData]:
    return Channel(EngineData, aircraft_info, name="engine", **kwargs)


def primary_flight_control_channel(aircraft_info: AircraftInfo, **kwargs: Any) -> Channel[PrimaryFlightControlData]:
    return Channel(PrimaryFlightControlData, aircraft_info, name="primary_flight_control", **kwargs)


def secondary_flight_control_channel(aircraft_info: AircraftInfo, **kwargs: Any) -> Channel[SecondaryFlightControlData]:
    return Channel(SecondaryFlightControlData, aircraft_info, name="secondary_flight_control", **kwargs)


def aircraft_handle_channel(aircraft_info: AircraftInfo, **kwargs: Any) -> Channel[AircraftHandleData]:
    return Channel(AircraftHandleData, aircraft_info, name="aircraft_handle", **kwargs)


def light_channel(aircraft_info: AircraftInfo, **kwargs: Any) -> Channel[LightData]:
    return Channel(LightData, aircraft_info, name="light", **kwargs)
