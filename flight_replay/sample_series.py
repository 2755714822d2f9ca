"""Sample series: the ordered samples of a single recorded channel.

The series keeps its samples sorted by timestamp, with at most one sample per
timestamp, and owns the cursor state (last resolved index, last query
timestamp and access mode) used to accelerate consecutive queries.
"""

from typing import Any, Callable, Dict, Generic, Iterable, Iterator, List, Optional, Type, TypeVar

from .sample import INVALID_TIME, AccessMode, Sample
from .sky_search import INVALID_INDEX

S = TypeVar("S", bound=Sample)


class SampleSeries(Generic[S]):
    """Chronologically ordered samples of one channel.

    Recording inserts samples in order with upsert_last (O(1)); flight
    augmentation and imports merge samples with upsert (O(n)).

    Not thread-safe: the cursor is updated in place on every query.

    Attributes:
        sample_type: Type of the stored samples (provides the null sample)
        current_index: Last resolved sample index, or INVALID_INDEX
        current_timestamp: Last query timestamp [ms], or INVALID_TIME
        current_access: Access mode of the last query
    """

    def __init__(
        self,
        sample_type: Type[S],
        log_callback: Optional[Callable[[str, str], None]] = None,
    ):
        """Initialize an empty series.

        Args:
            sample_type: Sample class stored in this series
            log_callback: Optional callback function(message: str, level: str) for logging
        """
        self.sample_type = sample_type
        self._data: List[S] = []
        self._log_callback = log_callback
        self.current_index: int = INVALID_INDEX
        self.current_timestamp: int = INVALID_TIME
        self.current_access: AccessMode = AccessMode.LINEAR

    def _log(self, message: str, level: str = "WARNING") -> None:
        if self._log_callback:
            try:
                self._log_callback(message, level)
            except Exception:
                pass  # Don't fail if logging callback has issues

    @property
    def data(self) -> List[S]:
        """The stored samples (read only by convention)."""
        return self._data

    def upsert_last(self, sample: S) -> None:
        """Append sample, or replace the last sample if timestamps are equal.

        Recorded samples arrive chronologically, but several may share the
        same timestamp: the last recorded sample "wins". A sample older than
        the last one is merged with upsert instead.

        Args:
            sample: Sample to be upserted
        """
        self.current_timestamp = INVALID_TIME
        if self._data:
            last = self._data[-1]
            if last.timestamp == sample.timestamp:
                self._data[-1] = sample
                return
            if sample.timestamp < last.timestamp:
                self._log(
                    f"{self.sample_type.__name__}: sample at {sample.timestamp} ms is older than "
                    f"last sample at {last.timestamp} ms, merging out of order",
                    "WARNING",
                )
                self.upsert(sample)
                return
        self._data.append(sample)

    def upsert(self, sample: S) -> None:
        """Insert sample in chronological order, or replace the sample with the same timestamp.

        The entire series is scanned. Use upsert_last when samples are
        inserted in order.

        Args:
            sample: Sample to be upserted
        """
        self.current_timestamp = INVALID_TIME
        timestamp = sample.timestamp
        for index, existing in enumerate(self._data):
            if existing.timestamp == timestamp:
                self._data[index] = sample
                return
            if existing.timestamp > timestamp:
                self._data.insert(index, sample)
                return
        self._data.append(sample)

    def set_data(self, samples: Iterable[S]) -> None:
        """Replace all samples.

        The samples are sorted by timestamp; of samples sharing a timestamp
        the last one wins. The cursor is reset.

        Args:
            samples: New samples, in any order
        """
        by_timestamp: Dict[int, S] = {}
        for sample in samples:
            by_timestamp[sample.timestamp] = sample
        self._data = [by_timestamp[t] for t in sorted(by_timestamp)]
        self.reset_cursor()

    def get_first(self) -> S:
        """Get the first sample, or the null sample if the series is empty."""
        return self._data[0] if self._data else self.sample_type.null()

    def get_last(self) -> S:
        """Get the last sample, or the null sample if the series is empty."""
        return self._data[-1] if self._data else self.sample_type.null()

    def count(self) -> int:
        return len(self._data)

    def clear(self) -> None:
        """Remove all samples and reset the cursor."""
        self._data.clear()
        self.reset_cursor()

    def reset_cursor(self) -> None:
        self.current_index = INVALID_INDEX
        self.current_timestamp = INVALID_TIME
        self.current_access = AccessMode.LINEAR

    def timestamps(self) -> List[int]:
        return [sample.timestamp for sample in self._data]

    def get_statistics(self) -> Dict[str, Any]:
        """Get statistics for this series.

        Returns:
            Dictionary with count, first and last timestamp [ms],
            time span [ms] and average sample rate [Hz]
        """
        if not self._data:
            return {
                'sample_type': self.sample_type.__name__,
                'count': 0,
                'first_timestamp': None,
                'last_timestamp': None,
                'time_span': 0,
                'rate': 0.0,
            }

        first_timestamp = self._data[0].timestamp
        last_timestamp = self._data[-1].timestamp
        time_span = last_timestamp - first_timestamp
        rate = len(self._data) * 1000.0 / time_span if time_span > 0 else 0.0

        return {
            'sample_type': self.sample_type.__name__,
            'count': len(self._data),
            'first_timestamp': first_timestamp,
            'last_timestamp': last_timestamp,
            'time_span': time_span,
            'rate': rate,
        }

    def __len__(self) -> int:
        return len(self._data)

    def __getitem__(self, index: int) -> S:
        return self._data[index]

    def __iter__(self) -> Iterator[S]:
        return iter(self._data)
