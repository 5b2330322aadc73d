"""
Retry-to-timeout rule.

Looks for a contiguous run of retry messages immediately followed by a
timeout message: the classic "retries exhausted" shape.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from lognarrative.data.schema import Event
from lognarrative.rules.base import Rule
from lognarrative.rules.config import RuleConfig, matches_any
from lognarrative.rules.schema import Finding, FindingSeverity, RuleContext

FINDING_ID_PREFIX = "retry-timeout"


class RetryToTimeoutRule(Rule):
    """
    Flags retries that end in a timeout.

    Confidence starts at 0.6 for a single retry and grows by 0.1 per
    additional retry, capped at 1.0. Findings are numbered retry-timeout-N,
    which differs from the rule id.
    """

    def __init__(self, config: Optional[RuleConfig] = None) -> None:
        self.config = config or RuleConfig()

    def id(self) -> str:
        return "retry-to-timeout"

    def name(self) -> str:
        return "Retry Leading to Timeout"

    def priority(self) -> int:
        return 70

    def is_retry_event(self, event: Event) -> bool:
        return matches_any(event.message, self.config.retry_keywords)

    def is_timeout_event(self, event: Event) -> bool:
        return matches_any(event.message, self.config.timeout_keywords)

    def evaluate(self, context: RuleContext) -> List[Finding]:
        if not context.events:
            return []

        events = context.events
        findings: List[Finding] = []

        i = 0
        while i < len(events):
            if not self.is_retry_event(events[i]):
                i += 1
                continue

            # a retry run ends at the first non-retry event
            j = i
            while j < len(events) and self.is_retry_event(events[j]):
                j += 1
            retries = events[i:j]

            if j < len(events) and self.is_timeout_event(events[j]):
                findings.append(self._finding(len(findings) + 1, retries, events[j]))
                i = j + 1
            else:
                i = j

        return findings

    def _finding(self, number: int, retries: Sequence[Event], timeout: Event) -> Finding:
        finding = Finding(
            id=f"{FINDING_ID_PREFIX}-{number}",
            title="Retries Leading to Timeout",
            summary=f"Detected {len(retries)} retry attempts followed by a timeout",
            severity=FindingSeverity.HIGH,
            confidence=min(1.0, 0.5 + 0.1 * len(retries)),
            start_time=retries[0].time,
            end_time=timeout.time,
        )
        for retry in retries:
            finding.add_evidence(retry.id, "Retry attempt")
        finding.add_evidence(timeout.id, "Final timeout")
        return finding
