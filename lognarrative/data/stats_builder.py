"""
Statistics aggregation over an event sequence.

Converts a materialized list of Events into a Stats object in a single
forward pass, then derives frequent message patterns.

Design:
- Severity and source counts include every event
- Time series and the overall time range use valid timestamps only
- Patterns replace volatile tokens (UUIDs, hex, numbers, quoted strings)
  with placeholders so that repeated message shapes group together
- Pattern ranking is count descending, then pattern text ascending
"""

import logging
import re
from collections import Counter
from typing import Dict, List, Optional, Sequence

from lognarrative.core.config import StatsConfig
from lognarrative.data.schema import Event, Severity
from lognarrative.data.stats import FrequentPattern, Stats, TimeSeries

logger = logging.getLogger(__name__)

_UUID_RE = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)
_HEX_RE = re.compile(r"0x[0-9a-fA-F]+")
_NUM_RE = re.compile(r"-?\d+\.?\d*")
_QUOTED_RE = re.compile(r'"[^"]+"')

# Order matters: UUIDs and hex literals contain digits that the number
# pattern would otherwise split.
_PLACEHOLDERS = (
    (_UUID_RE, "<UUID>"),
    (_HEX_RE, "<HEX>"),
    (_NUM_RE, "<NUM>"),
    (_QUOTED_RE, "<STR>"),
)


def normalize_message(message: str) -> str:
    """
    Reduce a message to its shape.

    Example:
        'user 42 failed "login" id=0x1f' -> 'user <NUM> failed <STR> id=<HEX>'
    """
    pattern = message
    for regex, placeholder in _PLACEHOLDERS:
        pattern = regex.sub(placeholder, pattern)
    return pattern


class StatsBuilder:
    """
    Builds Stats from events.

    The builder holds configuration only; every build() call returns a
    freshly created Stats object.
    """

    def __init__(self, config: Optional[StatsConfig] = None) -> None:
        self.config = config or StatsConfig()

    def build(self, events: Sequence[Event]) -> Stats:
        """
        Aggregate statistics from events.

        Args:
            events: Events in original order

        Returns:
            Stats; all-zero for empty input
        """
        if not events:
            return Stats()

        severity_counts: Counter = Counter()
        source_counts: Counter = Counter()
        series: Dict[Severity, TimeSeries] = {}
        start_time = None
        end_time = None

        for event in events:
            severity_counts[event.severity] += 1

            if event.source.path:
                source_counts[event.source.path] += 1

            ts = event.time
            if ts is None:
                continue

            if start_time is None or ts < start_time:
                start_time = ts
            if end_time is None or ts > end_time:
                end_time = ts

            if event.severity not in series:
                series[event.severity] = TimeSeries(
                    bucket_size_seconds=self.config.bucket_size_seconds
                )
            series[event.severity].add_event(ts)

        patterns = self._frequent_patterns(events)

        logger.debug(
            "Built stats for %d events: %d severities, %d sources, %d patterns",
            len(events),
            len(severity_counts),
            len(source_counts),
            len(patterns),
        )

        return Stats(
            severity_counts=dict(severity_counts),
            severity_time_series=series,
            source_counts=dict(source_counts),
            frequent_patterns=patterns,
            total_events=len(events),
            start_time=start_time,
            end_time=end_time,
        )

    def _frequent_patterns(self, events: Sequence[Event]) -> List[FrequentPattern]:
        counts: Counter = Counter()
        max_severity: Dict[str, Severity] = {}

        for event in events:
            if len(event.message) < self.config.min_pattern_length:
                continue
            pattern = normalize_message(event.message)
            if not pattern:
                continue
            counts[pattern] += 1
            if event.severity > max_severity.get(pattern, Severity.UNKNOWN):
                max_severity[pattern] = event.severity

        ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
        return [
            FrequentPattern(
                pattern=pattern,
                count=count,
                max_severity=max_severity.get(pattern, Severity.UNKNOWN),
            )
            for pattern, count in ranked[: self.config.top_n_patterns]
        ]
