"""
Error-burst-after-change rule.

Pairs each error burst with the nearest change event (deploy, config,
release, rollout, upgrade, migration) that precedes it within a lookback
window. A short gap between change and burst is strong circumstantial
evidence that the change caused the errors.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import List, Optional, Sequence, Tuple

from lognarrative.anomaly.schema import Anomaly, AnomalyType
from lognarrative.data.schema import Event, Severity
from lognarrative.rules.base import Rule
from lognarrative.rules.config import RuleConfig, matches_any
from lognarrative.rules.schema import Finding, FindingSeverity, RuleContext


class ErrorBurstAfterChangeRule(Rule):
    """
    Links error bursts to preceding change events.

    Confidence decays linearly from 1.0 (change right before the burst) to a
    floor of 0.5 at the edge of the lookback window.
    """

    def __init__(self, config: Optional[RuleConfig] = None) -> None:
        self.config = config or RuleConfig()

    def id(self) -> str:
        return "error-burst-after-change"

    def name(self) -> str:
        return "Error Burst After Deployment/Config Change"

    def priority(self) -> int:
        return 85

    def is_change_event(self, event: Event) -> bool:
        return matches_any(event.message, self.config.change_keywords)

    def evaluate(self, context: RuleContext) -> List[Finding]:
        if context.events is None or context.anomalies is None:
            return []

        changes = [e for e in context.events if e.time is not None and self.is_change_event(e)]
        if not changes:
            return []

        findings: List[Finding] = []
        for anomaly in context.anomalies:
            if anomaly.type != AnomalyType.ERROR_BURST or anomaly.start_time is None:
                continue

            match = self._nearest_change(changes, anomaly.start_time)
            if match is None:
                continue

            change, gap = match
            findings.append(
                self._finding(len(findings) + 1, anomaly, change, gap, context.events)
            )

        return findings

    def _nearest_change(
        self, changes: List[Event], burst_start: datetime
    ) -> Optional[Tuple[Event, timedelta]]:
        lookback = timedelta(seconds=self.config.change_lookback_seconds)
        best: Optional[Tuple[Event, timedelta]] = None

        for change in changes:
            if change.time >= burst_start:
                continue
            gap = burst_start - change.time
            if gap <= lookback and (best is None or gap < best[1]):
                best = (change, gap)

        return best

    def _finding(
        self,
        number: int,
        burst: Anomaly,
        change: Event,
        gap: timedelta,
        events: Sequence[Event],
    ) -> Finding:
        gap_seconds = int(gap.total_seconds())
        decay = gap.total_seconds() / self.config.change_lookback_seconds

        finding = Finding(
            id=f"{self.id()}-{number}",
            title="Error Burst Following Deployment/Config Change",
            summary=(
                f"Error spike detected {gap_seconds} seconds after a deployment "
                f"or configuration change"
            ),
            severity=FindingSeverity.HIGH,
            confidence=max(0.5, 1.0 - decay),
            start_time=change.time,
            end_time=burst.end_time,
        )
        finding.add_evidence(change.id, "Deployment or config change")

        attached = 0
        for event in events:
            if attached >= self.config.max_burst_evidence:
                break
            if event.severity != Severity.ERROR or event.time is None:
                continue
            if event.time < burst.start_time:
                continue
            if burst.end_time is not None and event.time >= burst.end_time:
                continue
            finding.add_evidence(event.id, "Error during burst")
            attached += 1

        return finding
