"""
Unit tests for baseline estimation and confidence scoring.
"""

from datetime import timedelta
from math import isclose

from lognarrative.anomaly.baselines import baseline_rate
from lognarrative.anomaly.scoring import burst_confidence, restart_loop_confidence
from lognarrative.data.stats import TimeSeries


def test_baseline_rate_of_missing_series():
    assert baseline_rate(None) == 0.0
    assert baseline_rate(TimeSeries()) == 0.0


def test_baseline_rate_ignores_empty_buckets(t0):
    series = TimeSeries(bucket_size_seconds=60)
    for offset in (0, 10, 20, 3600):
        series.add_event(t0 + timedelta(seconds=offset))

    # two populated buckets, an hour apart
    assert isclose(baseline_rate(series), 2.0)


def test_burst_confidence_scale():
    assert isclose(burst_confidence(10, 10.0), 0.5)
    assert isclose(burst_confidence(15, 10.0), 0.75)
    assert burst_confidence(20, 10.0) == 1.0
    assert burst_confidence(500, 10.0) == 1.0


def test_burst_confidence_without_threshold():
    assert burst_confidence(3, 0.0) == 1.0


def test_burst_confidence_is_monotonic():
    scores = [burst_confidence(count, 6.0) for count in range(6, 20)]
    assert scores == sorted(scores)


def test_restart_loop_confidence():
    assert isclose(restart_loop_confidence(3, 3), 0.5)
    assert isclose(restart_loop_confidence(4, 3), 4 / 6)
    assert restart_loop_confidence(9, 3) == 1.0
    assert restart_loop_confidence(1, 0) == 1.0
