"""
Anomaly detection engine.

Runs every detector over the same events and Stats and concatenates their
output: error bursts first, then restart loops.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Sequence

from lognarrative.core.config import AnalysisConfig
from lognarrative.data.schema import Event
from lognarrative.data.stats import Stats

from .detectors import ErrorBurstDetector, RestartLoopDetector
from .schema import Anomaly

logger = logging.getLogger(__name__)


@dataclass
class AnomalyEngine:
    """
    Deterministic anomaly detection engine.

    Stateless between calls: detect() may be called repeatedly with
    different inputs.
    """

    config: AnalysisConfig = field(default_factory=AnalysisConfig)

    def __post_init__(self) -> None:
        self._burst_detector = ErrorBurstDetector(self.config.error_burst)
        self._restart_detector = RestartLoopDetector(self.config.restart_loop)

    def detect(self, events: Sequence[Event], stats: Stats) -> List[Anomaly]:
        anomalies: List[Anomaly] = []
        anomalies.extend(self._burst_detector.detect(events, stats))
        anomalies.extend(self._restart_detector.detect(events))

        logger.info("Detected %d anomalies", len(anomalies))
        return anomalies
