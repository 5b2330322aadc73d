"""
Anomaly module: error burst and restart loop detection.

Implements deterministic baselines, detectors, scoring, and anomaly records.
"""

from .baselines import baseline_rate
from .detectors import ErrorBurstDetector, RestartLoopDetector
from .engine import AnomalyEngine
from .schema import Anomaly, AnomalyType
from .scoring import burst_confidence, restart_loop_confidence

__all__ = [
	"AnomalyEngine",
	"Anomaly",
	"AnomalyType",
	"ErrorBurstDetector",
	"RestartLoopDetector",
	"baseline_rate",
	"burst_confidence",
	"restart_loop_confidence",
]
