"""
Built-in rules and the default registry.
"""

from typing import Optional

from lognarrative.rules.config import RuleConfig
from lognarrative.rules.registry import RuleRegistry

from .crash_loop import CrashLoopRule
from .error_burst_after_change import ErrorBurstAfterChangeRule
from .retry_to_timeout import RetryToTimeoutRule


def default_registry(config: Optional[RuleConfig] = None) -> RuleRegistry:
    """Registry holding every built-in rule."""
    config = config or RuleConfig()
    registry = RuleRegistry()
    registry.register(CrashLoopRule())
    registry.register(ErrorBurstAfterChangeRule(config))
    registry.register(RetryToTimeoutRule(config))
    return registry


__all__ = [
    "CrashLoopRule",
    "ErrorBurstAfterChangeRule",
    "RetryToTimeoutRule",
    "default_registry",
]
