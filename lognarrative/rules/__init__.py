"""
Rule engine exports.
"""

from .base import Rule
from .config import RuleConfig
from .registry import RuleRegistry
from .schema import (
    Evidence,
    Finding,
    FindingSeverity,
    RuleContext,
    finding_severity_rank,
    sort_findings_by_severity,
)

__all__ = [
    "Evidence",
    "Finding",
    "FindingSeverity",
    "Rule",
    "RuleConfig",
    "RuleContext",
    "RuleRegistry",
    "finding_severity_rank",
    "sort_findings_by_severity",
]
