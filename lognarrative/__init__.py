"""
lognarrative: derive a causal narrative from a sequence of log events.

Statistics, episodes, anomalies and rule findings are computed by pure,
batch-oriented stages over an already-parsed event sequence.
"""

from lognarrative.engine import AnalysisEngine, AnalysisResult, analyze

__version__ = "0.1.0"

__all__ = [
    "AnalysisEngine",
    "AnalysisResult",
    "analyze",
]
