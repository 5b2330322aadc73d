"""
Statistics schema: severity counts, time series and frequent patterns.

Produced once by StatsBuilder. Stats and FrequentPattern are frozen; each
TimeSeries is filled by the builder before it is wrapped in Stats.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from lognarrative.data.aggregation import align_to_bucket
from lognarrative.data.schema import Severity


class TimeSeriesPoint(BaseModel):
    """Event count for one bucket, keyed by the bucket start."""

    timestamp: datetime
    count: int = Field(0, ge=0)


class TimeSeries(BaseModel):
    """
    Event counts at a fixed bucket width.

    Points are kept in order of first appearance. Only populated buckets
    have a point; empty buckets are implicit zeros.
    """

    bucket_size_seconds: int = Field(60, gt=0)
    points: List[TimeSeriesPoint] = Field(default_factory=list)

    _positions: Dict[datetime, int] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context: Any) -> None:
        self._positions = {p.timestamp: i for i, p in enumerate(self.points)}

    def add_event(self, ts: datetime) -> None:
        """Round ts down to its bucket and count it."""
        start = align_to_bucket(ts, self.bucket_size_seconds)
        position = self._positions.get(start)
        if position is None:
            self._positions[start] = len(self.points)
            self.points.append(TimeSeriesPoint(timestamp=start, count=1))
        else:
            self.points[position].count += 1

    def total_count(self) -> int:
        return sum(p.count for p in self.points)

    def max_point(self) -> Optional[TimeSeriesPoint]:
        """First point with the highest count, or None when empty."""
        if not self.points:
            return None
        return max(self.points, key=lambda p: p.count)


class FrequentPattern(BaseModel):
    """
    A normalized message shape and how often it occurred.

    Fields:
    - pattern: message with ids/numbers/strings replaced by placeholders
    - count: number of events sharing the pattern
    - max_severity: highest severity seen for the pattern
    """

    model_config = ConfigDict(frozen=True)

    pattern: str
    count: int = Field(ge=1)
    max_severity: Severity = Severity.UNKNOWN


class Stats(BaseModel):
    """
    Aggregate statistics over an event sequence.

    Attributes:
        severity_counts: Severity -> number of events
        severity_time_series: Severity -> bucketed counts (timed events only)
        source_counts: Source path -> number of events
        frequent_patterns: Top-N message patterns, most frequent first
        total_events: Number of events processed
        start_time / end_time: Earliest / latest valid timestamp
    """

    model_config = ConfigDict(frozen=True)

    severity_counts: Dict[Severity, int] = Field(default_factory=dict)
    severity_time_series: Dict[Severity, TimeSeries] = Field(default_factory=dict)
    source_counts: Dict[str, int] = Field(default_factory=dict)
    frequent_patterns: List[FrequentPattern] = Field(default_factory=list)
    total_events: int = Field(0, ge=0)
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    def count(self, severity: Severity) -> int:
        return self.severity_counts.get(severity, 0)

    def error_count(self) -> int:
        return self.count(Severity.ERROR)

    def warn_count(self) -> int:
        return self.count(Severity.WARN)

    def error_rate(self) -> float:
        """ERROR events per total events (0.0 for empty input)."""
        if self.total_events == 0:
            return 0.0
        return self.error_count() / self.total_events

    def time_series(self, severity: Severity) -> Optional[TimeSeries]:
        return self.severity_time_series.get(severity)
