"""
Unit tests for statistics aggregation.

Tests severity counts, time series, source counts and frequent patterns.
"""

import pytest
from datetime import timedelta

from pydantic import ValidationError

from lognarrative.core.config import StatsConfig
from lognarrative.data.schema import Severity
from lognarrative.data.stats import TimeSeries
from lognarrative.data.stats_builder import StatsBuilder, normalize_message


class TestNormalizeMessage:
    """Test message shape normalization."""

    def test_uuid(self):
        message = "session 123e4567-e89b-12d3-a456-426614174000 expired"
        assert normalize_message(message) == "session <UUID> expired"

    def test_hex(self):
        assert normalize_message("segfault at 0x7ffde4a0") == "segfault at <HEX>"

    def test_numbers(self):
        assert normalize_message("took 12.5 ms, delta -3") == "took <NUM> ms, delta <NUM>"

    def test_quoted_strings(self):
        assert normalize_message('unknown user "alice" rejected') == "unknown user <STR> rejected"

    def test_combined(self):
        assert normalize_message('user 42 failed "login" id=0x1f') == "user <NUM> failed <STR> id=<HEX>"


class TestTimeSeries:
    """Test bucketed counting."""

    def test_add_event_groups_by_bucket(self, t0):
        series = TimeSeries(bucket_size_seconds=60)
        series.add_event(t0 + timedelta(seconds=5))
        series.add_event(t0 + timedelta(seconds=50))
        series.add_event(t0 + timedelta(seconds=65))

        assert [(p.timestamp, p.count) for p in series.points] == [
            (t0, 2),
            (t0 + timedelta(minutes=1), 1),
        ]
        assert series.total_count() == 3
        assert series.max_point().timestamp == t0

    def test_empty_series(self):
        series = TimeSeries()
        assert series.total_count() == 0
        assert series.max_point() is None

    def test_prebuilt_points_are_reused(self, t0):
        series = TimeSeries(bucket_size_seconds=60, points=[{"timestamp": t0, "count": 4}])
        series.add_event(t0 + timedelta(seconds=30))

        assert len(series.points) == 1
        assert series.points[0].count == 5


class TestStatsBuilder:
    """Test StatsBuilder.build."""

    def test_empty_input(self):
        stats = StatsBuilder().build([])

        assert stats.total_events == 0
        assert stats.severity_counts == {}
        assert stats.severity_time_series == {}
        assert stats.source_counts == {}
        assert stats.frequent_patterns == []
        assert stats.start_time is None
        assert stats.end_time is None
        assert stats.error_rate() == 0.0

    def test_counts_and_time_range(self, event_factory, t0):
        events = [
            event_factory(1, 30, Severity.INFO, path="a.log"),
            event_factory(2, 0, Severity.ERROR, path="a.log"),
            event_factory(3, 200, Severity.ERROR, path="b.log"),
            event_factory(4, None, Severity.WARN, path=""),
        ]
        stats = StatsBuilder().build(events)

        assert stats.total_events == 4
        assert stats.severity_counts == {
            Severity.INFO: 1,
            Severity.ERROR: 2,
            Severity.WARN: 1,
        }
        assert stats.source_counts == {"a.log": 2, "b.log": 1}
        assert stats.start_time == t0
        assert stats.end_time == t0 + timedelta(seconds=200)
        assert stats.error_count() == 2
        assert stats.warn_count() == 1
        assert stats.error_rate() == pytest.approx(0.5)

    def test_time_series_only_for_timed_events(self, event_factory):
        events = [
            event_factory(1, 0, Severity.ERROR),
            event_factory(2, 10, Severity.ERROR),
            event_factory(3, 70, Severity.ERROR),
            event_factory(4, None, Severity.WARN),
            event_factory(5, 20, Severity.WARN, confidence=0),
        ]
        stats = StatsBuilder().build(events)

        errors = stats.time_series(Severity.ERROR)
        assert [p.count for p in errors.points] == [2, 1]
        assert stats.time_series(Severity.WARN) is None
        assert stats.count(Severity.WARN) == 2

    def test_bucket_size_from_config(self, event_factory):
        events = [event_factory(i, i * 60, Severity.ERROR) for i in range(1, 6)]
        stats = StatsBuilder(StatsConfig(bucket_size_seconds=300)).build(events)

        series = stats.time_series(Severity.ERROR)
        assert series.bucket_size_seconds == 300
        assert [p.count for p in series.points] == [4, 1]

    def test_frequent_patterns_ranked(self, event_factory):
        events = [
            event_factory(1, 0, Severity.INFO, "request 1 served in 10 ms"),
            event_factory(2, 1, Severity.ERROR, "request 2 served in 900 ms"),
            event_factory(3, 2, Severity.INFO, "request 3 served in 12 ms"),
            event_factory(4, 3, Severity.WARN, "cache refresh for shard 7"),
            event_factory(5, 4, Severity.INFO, "cache refresh for shard 8"),
            event_factory(6, 5, Severity.INFO, "short"),
        ]
        stats = StatsBuilder().build(events)

        patterns = stats.frequent_patterns
        assert [(p.pattern, p.count) for p in patterns] == [
            ("request <NUM> served in <NUM> ms", 3),
            ("cache refresh for shard <NUM>", 2),
        ]
        assert patterns[0].max_severity == Severity.ERROR
        assert patterns[1].max_severity == Severity.WARN

    def test_pattern_ties_broken_by_text(self, event_factory):
        events = [
            event_factory(1, 0, Severity.INFO, "zeta service ready"),
            event_factory(2, 1, Severity.INFO, "alpha service ready"),
            event_factory(3, 2, Severity.INFO, "mid service ready!"),
        ]
        stats = StatsBuilder(StatsConfig(top_n_patterns=2)).build(events)

        assert [p.pattern for p in stats.frequent_patterns] == [
            "alpha service ready",
            "mid service ready!",
        ]

    def test_min_pattern_length(self, event_factory):
        events = [event_factory(1, 0, Severity.INFO, "tiny"), event_factory(2, 1, Severity.INFO, "tiny")]
        stats = StatsBuilder(StatsConfig(min_pattern_length=4)).build(events)
        assert [(p.pattern, p.count) for p in stats.frequent_patterns] == [("tiny", 2)]

        stats = StatsBuilder(StatsConfig(min_pattern_length=5)).build(events)
        assert stats.frequent_patterns == []

    def test_stats_are_immutable(self, event_factory):
        stats = StatsBuilder().build(
            [event_factory(1, 0, Severity.ERROR, "disk quota exceeded on /var")] * 2
        )

        with pytest.raises(ValidationError):
            stats.total_events = 1
        with pytest.raises(ValidationError):
            stats.frequent_patterns[0].count = 50
        assert stats.total_events == 2
