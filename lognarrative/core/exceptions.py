"""
Custom exceptions for the log narrative analyzer.

The analysis stages never raise for missing data; absent input produces an
emptier result. These exceptions signal programming or configuration mistakes.
"""


class LogNarrativeError(Exception):
    """Base exception for analyzer failures."""
    pass


class ConfigurationError(LogNarrativeError):
    """Raised when configuration is invalid or missing."""
    pass


class RuleRegistrationError(LogNarrativeError):
    """Raised when a rule cannot be added to a registry."""
    pass
