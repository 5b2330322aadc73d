"""
Configuration for the built-in rules.

Keyword lists are matched case-insensitively as substrings of event messages.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class RuleConfig(BaseModel):
    """
    Built-in rule configuration.

    Notes:
    - change_lookback_seconds: how far before a burst a change event may be.
    - max_burst_evidence: cap on error events attached to a burst finding.
    """

    retry_keywords: List[str] = Field(default_factory=lambda: ["retry", "retrying", "attempt"])
    timeout_keywords: List[str] = Field(default_factory=lambda: ["timeout", "timed out"])
    change_keywords: List[str] = Field(
        default_factory=lambda: [
            "deploy",
            "config",
            "release",
            "rollout",
            "upgrade",
            "migration",
        ]
    )
    change_lookback_seconds: int = Field(1800, gt=0)
    max_burst_evidence: int = Field(5, ge=0)


def matches_any(message: str, keywords: List[str]) -> bool:
    """Case-insensitive substring match against any keyword."""
    lowered = message.lower()
    return any(keyword.lower() in lowered for keyword in keywords)
