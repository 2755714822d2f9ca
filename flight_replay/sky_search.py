"""Interval search and interpolation support for sampled data.

All functions operate on a sequence of samples with strictly ascending
timestamps and return INVALID_INDEX (or None support) instead of raising.

The search strategy adapts to the access pattern: replay advances in small
steps, so a linear scan from the last resolved index is amortised O(1). Only
a rewind or a jump of more than BINARY_INTERVAL_SEARCH_THRESHOLD into the
future pays for a binary search.
"""

from typing import Optional, Sequence, Tuple

from .sample import Sample

INVALID_INDEX: int = -1

# Jumping more than this into the future [ms] triggers a binary search
BINARY_INTERVAL_SEARCH_THRESHOLD: int = 3000

# Only samples within [-window, window] around the query timestamp [ms]
# are considered for interpolation; everything outside is "inactive".
DEFAULT_INTERPOLATION_WINDOW: int = 2000

# Considers all samples, regardless of their distance (sparse or imported data)
INFINITE_INTERPOLATION_WINDOW: int = 2 ** 63 - 1

CubicSupport = Tuple[Optional[Sample], Optional[Sample], Optional[Sample], Optional[Sample], int]
LinearSupport = Tuple[Optional[Sample], Optional[Sample], int]


def binary_interval_search(data: Sequence[Sample], timestamp: int, low: int, high: int) -> int:
    """Find the lower index i of the interval [i, i + 1] containing timestamp.

    The returned index satisfies data[i].timestamp <= timestamp and either
    i == high or timestamp < data[i + 1].timestamp. Unlike a classic binary
    search the bounds move to the midpoint itself (not midpoint -/+ 1), as
    the midpoint may still be the lower end of the bracketing interval.

    Args:
        data: Samples with ascending timestamps
        timestamp: Timestamp to search [ms]
        low: Lower index, 0 <= low <= high
        high: Upper index, low <= high <= last index

    Returns:
        Index of the interval start, or INVALID_INDEX if timestamp lies
        outside [data[low].timestamp, data[high].timestamp]
    """
    if not data or data[low].timestamp > timestamp or data[high].timestamp < timestamp:
        return INVALID_INDEX
    if data[high].timestamp == timestamp:
        return high

    # Invariant: data[low].timestamp <= timestamp < data[high].timestamp
    while low <= high:
        mid = (low + high) // 2
        if data[mid].timestamp <= timestamp and (mid == high or timestamp < data[mid + 1].timestamp):
            return mid
        elif timestamp < data[mid].timestamp:
            high = mid
        else:
            low = mid
    return INVALID_INDEX


def linear_interval_search(data: Sequence[Sample], timestamp: int, start: int) -> int:
    """Find the interval containing timestamp by scanning forward from start.

    Args:
        data: Samples with ascending timestamps
        timestamp: Timestamp to search [ms]
        start: Index to start the scan from

    Returns:
        Index of the interval start, or INVALID_INDEX if timestamp lies
        before data[start] or after the last sample
    """
    if not data or data[start].timestamp > timestamp or data[-1].timestamp < timestamp:
        return INVALID_INDEX

    index = start
    last = len(data) - 1
    while index < last and data[index + 1].timestamp <= timestamp:
        index += 1
    return index


def update_start_index(
    data: Sequence[Sample],
    start_index: int,
    timestamp: int,
    threshold: int = BINARY_INTERVAL_SEARCH_THRESHOLD,
) -> int:
    """Update the cursor to the last index with a timestamp <= timestamp.

    Args:
        data: Samples with ascending timestamps
        start_index: Previously resolved index, or INVALID_INDEX
        timestamp: Query timestamp [ms]
        threshold: Forward jump [ms] beyond which binary search is used

    Returns:
        Updated index, or INVALID_INDEX if data is empty or timestamp lies
        before the first sample
    """
    if not data:
        return INVALID_INDEX

    last = len(data) - 1
    if timestamp >= data[last].timestamp:
        # Past the last sample: no search required
        return last

    if start_index == INVALID_INDEX or start_index > last:
        # Cursor not yet initialised (or stale): search the entire data
        return binary_interval_search(data, timestamp, 0, last)

    current = data[start_index].timestamp
    if timestamp < current:
        # Rewind: search "the past", up to and including the current index
        return binary_interval_search(data, timestamp, 0, start_index)
    elif timestamp - threshold > current:
        # Large jump into "the future"
        return binary_interval_search(data, timestamp, start_index, last)
    return linear_interval_search(data, timestamp, start_index)


def get_cubic_support(
    data: Sequence[Sample],
    timestamp: int,
    window: int,
    start_index: int,
    threshold: int = BINARY_INTERVAL_SEARCH_THRESHOLD,
) -> CubicSupport:
    """Locate the four support samples p0, p1, p2, p3 around timestamp.

    p1 is the sample at the bracketing index, p0 its predecessor and p2, p3
    its successors. Missing neighbours at either end of the data are
    duplicated from p1 (for p0) and p2 (for p3).

    Args:
        data: Samples with ascending timestamps
        timestamp: Query timestamp [ms]
        window: Interpolation window [ms]
        start_index: Cursor from the previous query
        threshold: Forward jump [ms] beyond which binary search is used

    Returns:
        Tuple (p0, p1, p2, p3, index) with the updated cursor index; the
        samples are all None if interpolation is declined
    """
    index = update_start_index(data, start_index, timestamp, threshold)
    if index != INVALID_INDEX:
        p1 = data[index]
        if timestamp - p1.timestamp > window:
            return None, None, None, None, index

        p0 = data[index - 1] if index > 0 else p1
        last = len(data) - 1
        if index < last:
            p2 = data[index + 1]
            p3 = data[index + 2] if index < last - 1 else p2
        else:
            p2 = p3 = p1

        if p2.timestamp - timestamp > window:
            p2 = p3 = p1
        return p0, p1, p2, p3, index

    # No data at all, or before the first sample (which need not be at
    # timestamp 0): timestamps after the last sample resolve to the last index
    if data:
        first = data[0]
        return first, first, first, first, index
    return None, None, None, None, index


def get_linear_support(
    data: Sequence[Sample],
    timestamp: int,
    window: int,
    start_index: int,
    threshold: int = BINARY_INTERVAL_SEARCH_THRESHOLD,
) -> LinearSupport:
    """Locate the two support samples p1, p2 around timestamp.

    Same window and clamping rules as get_cubic_support.

    Returns:
        Tuple (p1, p2, index) with the updated cursor index; the samples
        are None if interpolation is declined
    """
    index = update_start_index(data, start_index, timestamp, threshold)
    if index != INVALID_INDEX:
        p1 = data[index]
        if timestamp - p1.timestamp > window:
            return None, None, index

        p2 = data[index + 1] if index < len(data) - 1 else p1
        if p2.timestamp - timestamp > window:
            p2 = p1
        return p1, p2, index

    if data:
        return data[0], data[0], index
    return None, None, index


def normalise_timestamp(p1: Sample, p2: Sample, timestamp: int) -> float:
    """Map timestamp onto [0.0, 1.0] relative to the interval [p1, p2].

    Returns:
        Normalised timestamp, or 0.0 if p1 and p2 share the same timestamp
    """
    t1 = p1.timestamp
    t2 = p2.timestamp
    if t1 == t2:
        return 0.0
    return (timestamp - t1) / (t2 - t1)
