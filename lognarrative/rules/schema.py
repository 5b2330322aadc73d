"""
Schema for rule evaluation: findings, evidence and the rule context.

Findings contain only conclusions that can be traced back to events through
their evidence list.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import List, Optional, Sequence

from pydantic import BaseModel, Field

from lognarrative.anomaly.schema import Anomaly
from lognarrative.data.schema import Event
from lognarrative.data.stats import Stats
from lognarrative.episodes.schema import Episode


class FindingSeverity(str, Enum):
    """Severity levels for findings."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


_SEVERITY_ORDER = [
    FindingSeverity.LOW,
    FindingSeverity.MEDIUM,
    FindingSeverity.HIGH,
    FindingSeverity.CRITICAL,
]


def finding_severity_rank(severity: FindingSeverity) -> int:
    """Position of a severity in LOW < MEDIUM < HIGH < CRITICAL."""
    return _SEVERITY_ORDER.index(severity)


class Evidence(BaseModel):
    """
    Reference to a supporting event.

    Fields:
    - event_id: id of the event
    - reason: why the event is relevant
    """

    event_id: int = Field(ge=0)
    reason: str = ""


class Finding(BaseModel):
    """
    A rule's conclusion about the event stream.

    Fields:
    - id: identifier, unique within one rule's output (e.g. "crash-loop-1")
    - title: short title
    - summary: human-readable summary
    - severity: categorical severity
    - confidence: in [0.0, 1.0]
    - evidence: supporting events, most relevant first
    - start_time/end_time: span of the finding, if known
    """

    id: str
    title: str
    summary: str = ""
    severity: FindingSeverity = FindingSeverity.MEDIUM
    confidence: float = Field(0.0, ge=0.0, le=1.0)
    evidence: List[Evidence] = Field(default_factory=list)
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    def add_evidence(self, event_id: int, reason: str) -> None:
        self.evidence.append(Evidence(event_id=event_id, reason=reason))


def sort_findings_by_severity(findings: Sequence[Finding]) -> List[Finding]:
    """
    Severity-descending view of findings.

    The sort is stable, so findings of equal severity keep rule priority order.
    """
    return sorted(findings, key=lambda f: finding_severity_rank(f.severity), reverse=True)


@dataclass(frozen=True)
class RuleContext:
    """
    Inputs available to rules.

    Every field is optional; a rule that needs an absent input returns no
    findings. The context holds references and never copies the inputs.
    """

    events: Optional[Sequence[Event]] = None
    stats: Optional[Stats] = None
    episodes: Optional[Sequence[Episode]] = None
    anomalies: Optional[Sequence[Anomaly]] = None
