"""Sample types for recorded flight channels.

Every recorded channel (position, attitude, engine, flight controls, handles,
lights) is a chronologically ordered sequence of samples. A sample carries a
timestamp in milliseconds since the start of recording, plus the channel
specific values.

Each value field declares how it is interpolated through its dataclass field
metadata, so that a single generic algorithm can interpolate any channel:

    heading: float = angular_360()   # [0, 360), discontinuity at 0/360
    gear_handle_down: bool = step()  # taken from the previous sample

Samples are immutable. A sample whose timestamp equals INVALID_TIME is the
"null" sample of its type.
"""

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Tuple, Type, TypeVar

# Reserved timestamp of null samples (minimum signed 64 bit value)
INVALID_TIME: int = -(2 ** 63)

INTERPOLATION_KEY = "interpolation"
TENSION_KEY = "tension"

S = TypeVar("S", bound="Sample")


class AccessMode(Enum):
    """How sampled data is accessed."""
    LINEAR = "linear"  # Replay: aircraft time offset applied, finite window
    SEEK = "seek"      # Random access/scrubbing: time offset applied, infinite window
    EXPORT = "export"  # Resampling for export: no time offset, window per channel


class Interpolation(Enum):
    """How a single sample field is interpolated."""
    CUBIC = "cubic"          # Hermite spline, open range
    CUBIC_180 = "cubic_180"  # Hermite spline, circular domain [-180, 180)
    CUBIC_360 = "cubic_360"  # Hermite spline, circular domain [0, 360)
    LINEAR = "linear"        # Linear blend (integers are rounded)
    STEP = "step"            # No interpolation, value of the previous sample

    @property
    def is_cubic(self) -> bool:
        return self in (Interpolation.CUBIC, Interpolation.CUBIC_180, Interpolation.CUBIC_360)


def _value_field(kind: Interpolation, default: Any, tensioned: bool = False) -> Any:
    metadata = {INTERPOLATION_KEY: kind}
    if tensioned:
        metadata[TENSION_KEY] = True
    return field(default=default, metadata=metadata)


def cubic(default: float = 0.0, tensioned: bool = False) -> Any:
    return _value_field(Interpolation.CUBIC, default, tensioned)


def angular_180(default: float = 0.0, tensioned: bool = False) -> Any:
    return _value_field(Interpolation.CUBIC_180, default, tensioned)


def angular_360(default: float = 0.0, tensioned: bool = False) -> Any:
    return _value_field(Interpolation.CUBIC_360, default, tensioned)


def linear(default: Any = 0.0) -> Any:
    return _value_field(Interpolation.LINEAR, default)


def step(default: Any = False) -> Any:
    return _value_field(Interpolation.STEP, default)


@dataclass(frozen=True, slots=True)
class Sample:
    """Base class of all time variable data.

    Attributes:
        timestamp: Milliseconds since the start of recording
    """
    timestamp: int = INVALID_TIME

    @classmethod
    def null(cls: Type[S]) -> S:
        """Return the null sample of this type."""
        return cls()

    def is_null(self) -> bool:
        """Check whether this is a null (invalid) sample.

        Returns:
            True if the timestamp is the reserved INVALID_TIME
        """
        return self.timestamp == INVALID_TIME

    @classmethod
    def interpolated_fields(cls) -> List[Tuple[str, Interpolation]]:
        """Get the value fields of this type with their interpolation kind.

        Fields without interpolation metadata are not interpolated and keep
        their default value in interpolated samples.

        Returns:
            List of (field name, interpolation kind) in declaration order
        """
        return [
            (f.name, f.metadata[INTERPOLATION_KEY])
            for f in dataclasses.fields(cls)
            if INTERPOLATION_KEY in f.metadata
        ]

    @classmethod
    def tensioned_fields(cls) -> FrozenSet[str]:
        """Get the names of the cubic fields shaped by the spline tension.

        All other cubic fields (e.g. latitude, longitude and altitude, the
        flight path itself) are always interpolated with tension 0.
        """
        return frozenset(f.name for f in dataclasses.fields(cls) if f.metadata.get(TENSION_KEY))

    @classmethod
    def is_cubic(cls) -> bool:
        """Check whether any field requires four-point (cubic) support."""
        return any(kind.is_cubic for _, kind in cls.interpolated_fields())

    def to_dict(self) -> Dict[str, Any]:
        """Convert this sample to a plain dictionary."""
        return dataclasses.asdict(self)


@dataclass(frozen=True, slots=True)
class PositionData(Sample):
    """Aircraft position and attitude.

    Latitude and pitch are in [-90, 90] and have no discontinuity. Longitude
    and bank wrap at +/-180, heading wraps at 0/360.
    """
    latitude: float = cubic()
    longitude: float = angular_180()
    altitude: float = cubic()
    # Only used for display and analysis, not for replay
    indicated_altitude: float = linear()
    pitch: float = cubic(tensioned=True)
    bank: float = angular_180(tensioned=True)
    heading: float = angular_360(tensioned=True)
    velocity_body_x: float = linear()
    velocity_body_y: float = linear()
    velocity_body_z: float = linear()
    rotation_velocity_body_x: float = linear()
    rotation_velocity_body_y: float = linear()
    rotation_velocity_body_z: float = linear()


@dataclass(frozen=True, slots=True)
class AttitudeData(Sample):
    """Aircraft attitude and body velocity."""
    pitch: float = cubic(tensioned=True)
    bank: float = angular_180(tensioned=True)
    true_heading: float = angular_360(tensioned=True)
    velocity_body_x: float = linear()
    velocity_body_y: float = linear()
    velocity_body_z: float = linear()
    on_ground: bool = step()


@dataclass(frozen=True, slots=True)
class EngineData(Sample):
    """Engine levers and switches for up to four engines.

    Lever positions are discrete positions in [-32767, 32767].
    """
    throttle_lever_position1: int = linear(0)
    throttle_lever_position2: int = linear(0)
    throttle_lever_position3: int = linear(0)
    throttle_lever_position4: int = linear(0)
    propeller_lever_position1: int = linear(0)
    propeller_lever_position2: int = linear(0)
    propeller_lever_position3: int = linear(0)
    propeller_lever_position4: int = linear(0)
    mixture_lever_position1: int = linear(0)
    mixture_lever_position2: int = linear(0)
    mixture_lever_position3: int = linear(0)
    mixture_lever_position4: int = linear(0)
    cowl_flap_position1: int = linear(0)
    cowl_flap_position2: int = linear(0)
    cowl_flap_position3: int = linear(0)
    cowl_flap_position4: int = linear(0)
    electrical_master_battery1: bool = step()
    electrical_master_battery2: bool = step()
    electrical_master_battery3: bool = step()
    electrical_master_battery4: bool = step()
    general_engine_starter1: bool = step()
    general_engine_starter2: bool = step()
    general_engine_starter3: bool = step()
    general_engine_starter4: bool = step()
    general_engine_combustion1: bool = step()
    general_engine_combustion2: bool = step()
    general_engine_combustion3: bool = step()
    general_engine_combustion4: bool = step()


@dataclass(frozen=True, slots=True)
class PrimaryFlightControlData(Sample):
    """Rudder, elevator and aileron positions in [-32767, 32767]."""
    rudder_position: int = linear(0)
    elevator_position: int = linear(0)
    aileron_position: int = linear(0)


@dataclass(frozen=True, slots=True)
class SecondaryFlightControlData(Sample):
    """Flaps and spoilers."""
    left_leading_edge_flaps_position: int = linear(0)
    right_leading_edge_flaps_position: int = linear(0)
    left_trailing_edge_flaps_position: int = linear(0)
    right_trailing_edge_flaps_position: int = linear(0)
    left_spoilers_position: int = linear(0)
    right_spoilers_position: int = linear(0)
    spoilers_handle_percent: int = linear(0)
    flaps_handle_index: int = step(0)
    spoilers_armed: bool = step()


@dataclass(frozen=True, slots=True)
class AircraftHandleData(Sample):
    """Brakes, gear, tailhook, canopy, wing folding and smoke."""
    brake_left_position: int = linear(0)
    brake_right_position: int = linear(0)
    gear_steer_position: int = linear(0)
    water_rudder_handle_position: int = linear(0)
    tailhook_position: int = linear(0)
    canopy_open: int = linear(0)
    left_wing_folding: int = linear(0)
    right_wing_folding: int = linear(0)
    gear_handle_position: bool = step()
    tailhook_handle_position: bool = step()
    folding_wing_handle_position: bool = step()
    smoke_enabled: bool = step()


@dataclass(frozen=True, slots=True)
class LightData(Sample):
    """Light states as bit mask (navigation, beacon, landing, ...)."""
    light_states: int = step(0)
