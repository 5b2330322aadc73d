"""
Crash loop rule: republishes restart loop anomalies as critical findings.
"""

from __future__ import annotations

from typing import List

from lognarrative.anomaly.schema import AnomalyType
from lognarrative.rules.base import Rule
from lognarrative.rules.schema import Finding, FindingSeverity, RuleContext


class CrashLoopRule(Rule):
    """Turns every RESTART_LOOP anomaly into a CRITICAL finding."""

    def id(self) -> str:
        return "crash-loop"

    def name(self) -> str:
        return "Crash Loop Detection"

    def priority(self) -> int:
        return 90

    def evaluate(self, context: RuleContext) -> List[Finding]:
        if context.anomalies is None:
            return []

        findings: List[Finding] = []
        for anomaly in context.anomalies:
            if anomaly.type != AnomalyType.RESTART_LOOP:
                continue

            finding = Finding(
                id=f"{self.id()}-{len(findings) + 1}",
                title="Crash Loop Detected",
                summary=anomaly.description,
                severity=FindingSeverity.CRITICAL,
                confidence=anomaly.confidence,
                start_time=anomaly.start_time,
                end_time=anomaly.end_time,
            )
            for event_id in anomaly.evidence_ids:
                finding.add_evidence(event_id, "Restart event")
            findings.append(finding)

        return findings
