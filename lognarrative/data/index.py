"""
In-memory lookup tables over an event sequence.

The index is built once from a materialized sequence and is read-only
afterwards. Lookups never raise: unknown keys yield empty results.
"""

import logging
from bisect import bisect_left, bisect_right
from collections import defaultdict
from datetime import datetime
from typing import Dict, List, Optional, Sequence, Tuple

from lognarrative.data.aggregation import bucket_key
from lognarrative.data.schema import Event, Severity

logger = logging.getLogger(__name__)

CORRELATION_KEYS = ("request_id", "trace_id", "uuid")


class EventIndex:
    """
    Index for event queries by severity, correlation id and time bucket.

    Notes:
        - Correlation keys (request_id, trace_id, uuid) are indexed independently;
          an event carrying several keys is listed under each
        - Events without a valid timestamp are left out of the time index only
    """

    def __init__(self, bucket_size_seconds: int = 60):
        """
        Initialize an empty index.

        Args:
            bucket_size_seconds: Width of the time buckets
        """
        self.bucket_size_seconds = bucket_size_seconds
        self._events: Tuple[Event, ...] = ()
        self._by_id: Dict[int, Event] = {}
        self._severity_index: Dict[Severity, List[int]] = {}
        self._correlation_index: Dict[str, List[int]] = {}
        self._time_index: Dict[int, List[int]] = {}
        self._time_keys: List[int] = []

    def build(self, events: Sequence[Event]) -> "EventIndex":
        """
        Replace all index state with tables built from events.

        Returns:
            self, so `EventIndex().build(events)` reads naturally
        """
        severity_index: Dict[Severity, List[int]] = defaultdict(list)
        correlation_index: Dict[str, List[int]] = defaultdict(list)
        time_index: Dict[int, List[int]] = defaultdict(list)

        for event in events:
            severity_index[event.severity].append(event.id)

            for corr_id in event.correlation_ids(CORRELATION_KEYS):
                correlation_index[corr_id].append(event.id)

            if event.has_valid_timestamp:
                time_index[bucket_key(event.time, self.bucket_size_seconds)].append(event.id)

        self._events = tuple(events)
        self._by_id = {event.id: event for event in self._events}
        self._severity_index = dict(severity_index)
        self._correlation_index = dict(correlation_index)
        self._time_index = dict(time_index)
        self._time_keys = sorted(self._time_index)

        logger.debug(
            "Indexed %d events (%d correlation ids, %d time buckets)",
            len(self._events),
            len(self._correlation_index),
            len(self._time_keys),
        )
        return self

    def get_all_events(self) -> Tuple[Event, ...]:
        return self._events

    def get(self, event_id: int) -> Optional[Event]:
        return self._by_id.get(event_id)

    def get_by_severity(self, severity: Severity) -> List[int]:
        return list(self._severity_index.get(severity, ()))

    def count_by_severity(self, severity: Severity) -> int:
        return len(self._severity_index.get(severity, ()))

    def get_by_correlation_id(self, correlation_id: str) -> List[int]:
        return list(self._correlation_index.get(correlation_id, ()))

    def get_by_time_range(self, start: datetime, end: datetime) -> List[int]:
        """
        Ids of events whose bucket lies in [bucket(start), bucket(end)].

        Both bounds are inclusive at bucket granularity, so an event later in
        the end bucket than `end` itself is still returned.
        """
        first = bucket_key(start, self.bucket_size_seconds)
        last = bucket_key(end, self.bucket_size_seconds)
        if first > last:
            return []

        lo = bisect_left(self._time_keys, first)
        hi = bisect_right(self._time_keys, last)

        result: List[int] = []
        for key in self._time_keys[lo:hi]:
            result.extend(self._time_index[key])
        return result

    def __len__(self) -> int:
        return len(self._events)
