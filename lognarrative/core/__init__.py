"""
Core module: Configuration, logging, and exception handling.
"""

from .config import (
    AnalysisConfig,
    Config,
    EpisodeConfig,
    ErrorBurstConfig,
    IndexConfig,
    RestartLoopConfig,
    StatsConfig,
    config,
)
from .logging_config import setup_logging
from .exceptions import (
    ConfigurationError,
    LogNarrativeError,
    RuleRegistrationError,
)

__all__ = [
    "AnalysisConfig",
    "Config",
    "EpisodeConfig",
    "ErrorBurstConfig",
    "IndexConfig",
    "RestartLoopConfig",
    "StatsConfig",
    "config",
    "ConfigurationError",
    "LogNarrativeError",
    "RuleRegistrationError",
    "setup_logging",
]
