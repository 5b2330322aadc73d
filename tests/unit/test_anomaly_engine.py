"""
Unit tests for anomaly detection engine.
"""

from lognarrative.anomaly.engine import AnomalyEngine
from lognarrative.anomaly.schema import AnomalyType
from lognarrative.core.config import AnalysisConfig, ErrorBurstConfig
from lognarrative.data.schema import Severity
from lognarrative.data.stats_builder import StatsBuilder


def test_engine_orders_bursts_before_loops(event_factory):
    events = [
        event_factory(1, 0, Severity.WARN, "worker restarting"),
        event_factory(2, 30, Severity.WARN, "worker restarting"),
        event_factory(3, 60, Severity.WARN, "worker restarting"),
    ]
    events += [event_factory(4 + n, 120 + n * 60, Severity.ERROR, "write failed") for n in range(10)]
    events += [event_factory(14 + n, 900 + n, Severity.ERROR, "write failed") for n in range(12)]

    config = AnalysisConfig(error_burst=ErrorBurstConfig(min_errors_for_burst=10))
    stats = StatsBuilder(config.stats).build(events)
    anomalies = AnomalyEngine(config).detect(events, stats)

    assert [a.type for a in anomalies] == [AnomalyType.ERROR_BURST, AnomalyType.RESTART_LOOP]


def test_engine_quiet_logs(event_factory):
    events = [event_factory(i, i * 10, Severity.INFO, "heartbeat ok") for i in range(1, 20)]
    stats = StatsBuilder().build(events)

    assert AnomalyEngine().detect(events, stats) == []


def test_engine_is_repeatable(event_factory):
    events = [event_factory(i, i, Severity.ERROR, "write failed") for i in range(1, 15)]
    engine = AnomalyEngine()
    stats = StatsBuilder().build(events)

    assert engine.detect(events, stats) == engine.detect(events, stats)
