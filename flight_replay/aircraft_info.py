"""Aircraft metadata shared by all channels of one aircraft."""

from dataclasses import dataclass


@dataclass
class AircraftInfo:
    """Metadata of a recorded aircraft.

    Attributes:
        tail_number: Aircraft registration
        time_offset: Milliseconds the aircraft is "ahead" of its recorded
            samples; applied to LINEAR and SEEK queries only
    """
    tail_number: str = ""
    time_offset: int = 0

    def clear(self) -> None:
        self.tail_number = ""
        self.time_offset = 0
