"""
Data module: event schema, time bucketing, indexing and statistics.

Events arrive already parsed from upstream collaborators. Pipeline:

    Events (lognarrative/data/schema.py)
        ↓
    Indexing (lognarrative/data/index.py) → EventIndex
        ↓
    Aggregation (lognarrative/data/stats_builder.py) → Stats
        ↓
    Ready for episode building and anomaly detection
"""

from lognarrative.data.aggregation import align_to_bucket, bucket_key, bucket_start
from lognarrative.data.index import CORRELATION_KEYS, EventIndex
from lognarrative.data.schema import (
    Event,
    Severity,
    SourceRef,
    Timestamp,
    severity_from_string,
    severity_to_string,
)
from lognarrative.data.stats import FrequentPattern, Stats, TimeSeries, TimeSeriesPoint
from lognarrative.data.stats_builder import StatsBuilder, normalize_message

__all__ = [
    # Schema
    "Event",
    "Severity",
    "SourceRef",
    "Timestamp",
    "severity_from_string",
    "severity_to_string",

    # Bucketing
    "align_to_bucket",
    "bucket_key",
    "bucket_start",

    # Index
    "CORRELATION_KEYS",
    "EventIndex",

    # Statistics
    "FrequentPattern",
    "Stats",
    "StatsBuilder",
    "TimeSeries",
    "TimeSeriesPoint",
    "normalize_message",
]
