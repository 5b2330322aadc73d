"""
Detectors for abnormal log patterns.

Implements explainable methods:
- Error bursts: buckets whose ERROR count clears both an absolute floor and
  a multiple of the baseline rate
- Restart loops: clusters of restart-like messages inside a time window
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Dict, List, Sequence

from lognarrative.core.config import ErrorBurstConfig, RestartLoopConfig
from lognarrative.data.aggregation import bucket_key
from lognarrative.data.schema import Event, Severity
from lognarrative.data.stats import Stats, TimeSeries

from .baselines import baseline_rate
from .schema import Anomaly, AnomalyType
from .scoring import burst_confidence, restart_loop_confidence

logger = logging.getLogger(__name__)


@dataclass
class ErrorBurstDetector:
    """
    Error burst detector.

    Reads the ERROR time series from Stats. The raw events are only used to
    attach the ids of the errors inside each burst as evidence.
    """

    config: ErrorBurstConfig = field(default_factory=ErrorBurstConfig)

    def detect(self, events: Sequence[Event], stats: Stats) -> List[Anomaly]:
        series = stats.time_series(Severity.ERROR)
        if series is None or not series.points:
            return []

        baseline = baseline_rate(series)
        threshold = baseline * self.config.threshold_multiplier
        evidence = self._errors_by_bucket(events, series)

        bursts: List[Anomaly] = []
        for point in series.points:
            if point.count < self.config.min_errors_for_burst or point.count < threshold:
                continue

            width = timedelta(seconds=series.bucket_size_seconds)
            key = bucket_key(point.timestamp, series.bucket_size_seconds)
            bursts.append(
                Anomaly(
                    type=AnomalyType.ERROR_BURST,
                    description=(
                        f"Error burst detected: {point.count} errors in "
                        f"{series.bucket_size_seconds} seconds "
                        f"(baseline {baseline:.2f} per bucket)"
                    ),
                    evidence_ids=evidence.get(key, []),
                    confidence=burst_confidence(point.count, threshold),
                    start_time=point.timestamp,
                    end_time=point.timestamp + width,
                )
            )

        logger.debug(
            "Error burst scan: baseline=%.2f threshold=%.2f bursts=%d",
            baseline,
            threshold,
            len(bursts),
        )
        return bursts

    @staticmethod
    def _errors_by_bucket(events: Sequence[Event], series: TimeSeries) -> Dict[int, List[int]]:
        by_bucket: Dict[int, List[int]] = defaultdict(list)
        for event in events:
            if event.severity == Severity.ERROR and event.time is not None:
                by_bucket[bucket_key(event.time, series.bucket_size_seconds)].append(event.id)
        return by_bucket


@dataclass
class RestartLoopDetector:
    """
    Restart loop detector.

    Only restarts with a valid timestamp take part in a loop, either as the
    anchor of a window or as a follower inside it.
    """

    config: RestartLoopConfig = field(default_factory=RestartLoopConfig)

    def is_restart_event(self, event: Event) -> bool:
        message = event.message.lower()
        return any(keyword.lower() in message for keyword in self.config.restart_keywords)

    def detect(self, events: Sequence[Event]) -> List[Anomaly]:
        restarts = [event for event in events if self.is_restart_event(event)]
        if len(restarts) < self.config.min_restart_count:
            return []

        window = timedelta(seconds=self.config.time_window_seconds)
        loops: List[Anomaly] = []

        i = 0
        while i < len(restarts):
            anchor = restarts[i]
            if anchor.time is None:
                i += 1
                continue

            window_end = anchor.time + window
            cluster = [anchor]
            last = i
            for j in range(i + 1, len(restarts)):
                follower = restarts[j]
                if follower.time is None:
                    continue
                if follower.time > window_end:
                    break
                cluster.append(follower)
                last = j

            if len(cluster) < self.config.min_restart_count:
                i += 1
                continue

            times = [event.time for event in cluster]
            loops.append(
                Anomaly(
                    type=AnomalyType.RESTART_LOOP,
                    description=(
                        f"Restart loop detected: {len(cluster)} restarts within "
                        f"{self.config.time_window_seconds} seconds"
                    ),
                    evidence_ids=[event.id for event in cluster],
                    confidence=restart_loop_confidence(
                        len(cluster), self.config.min_restart_count
                    ),
                    start_time=min(times),
                    end_time=max(times),
                )
            )
            # skip the consumed cluster so loops never overlap
            i = last + 1

        logger.debug("Restart scan: %d restart events, %d loops", len(restarts), len(loops))
        return loops
