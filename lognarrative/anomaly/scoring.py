"""
Confidence scoring for anomalies.

Maps how far an observation exceeds its threshold to a confidence in [0, 1].
"""

from __future__ import annotations


def burst_confidence(count: int, threshold: float) -> float:
    """
    Confidence for an error burst.

    A bucket at exactly the threshold scores 0.5; twice the threshold or more
    scores 1.0.
    """
    if threshold <= 0:
        return 1.0
    return min(1.0, (count / threshold) / 2.0)


def restart_loop_confidence(restarts: int, min_restart_count: int) -> float:
    """
    Confidence for a restart loop.

    The minimum number of restarts scores 0.5; twice the minimum scores 1.0.
    """
    if min_restart_count <= 0:
        return 1.0
    return min(1.0, restarts / (min_restart_count * 2.0))
