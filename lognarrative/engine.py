"""
Analysis engine.

Runs the analysis stages over a materialized event sequence in dependency
order and bundles their outputs for the report layer:

    Events
        ↓
    Stats (StatsBuilder)          Episodes (EpisodeBuilder)
        ↓
    Anomalies (AnomalyEngine, needs Stats)
        ↓
    Findings (RuleRegistry, needs events + stats + episodes + anomalies)
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from pydantic import BaseModel, Field

from lognarrative.anomaly.engine import AnomalyEngine
from lognarrative.anomaly.schema import Anomaly
from lognarrative.core.config import Config, config
from lognarrative.data.index import EventIndex
from lognarrative.data.schema import Event
from lognarrative.data.stats import Stats
from lognarrative.data.stats_builder import StatsBuilder
from lognarrative.episodes.builder import EpisodeBuilder
from lognarrative.episodes.schema import Episode
from lognarrative.rules.builtin import default_registry
from lognarrative.rules.config import RuleConfig
from lognarrative.rules.registry import RuleRegistry
from lognarrative.rules.schema import Finding, RuleContext, sort_findings_by_severity

logger = logging.getLogger(__name__)


class AnalysisResult(BaseModel):
    """
    Outputs of one analysis run.

    Findings are in rule priority order; use findings_by_severity() for a
    severity-ranked view.
    """

    stats: Stats = Field(default_factory=Stats)
    episodes: List[Episode] = Field(default_factory=list)
    anomalies: List[Anomaly] = Field(default_factory=list)
    findings: List[Finding] = Field(default_factory=list)

    def findings_by_severity(self) -> List[Finding]:
        return sort_findings_by_severity(self.findings)


class AnalysisEngine:
    """
    Deterministic analysis pipeline.

    Every run() builds fresh outputs; the engine keeps configuration and the
    rule registry only.
    """

    def __init__(
        self,
        settings: Optional[Config] = None,
        registry: Optional[RuleRegistry] = None,
        rule_config: Optional[RuleConfig] = None,
    ) -> None:
        self.settings = settings or config
        analysis = self.settings.analysis
        self.stats_builder = StatsBuilder(analysis.stats)
        self.episode_builder = EpisodeBuilder(analysis.episodes)
        self.anomaly_engine = AnomalyEngine(analysis)
        self.registry = registry if registry is not None else default_registry(rule_config)

    def build_index(self, events: Sequence[Event]) -> EventIndex:
        """Event index for drill-down queries, bucketed per the index config."""
        return EventIndex(self.settings.analysis.index.bucket_size_seconds).build(events)

    def run(self, events: Sequence[Event]) -> AnalysisResult:
        stats = self.stats_builder.build(events)
        episodes = self.episode_builder.build(events)
        anomalies = self.anomaly_engine.detect(events, stats)

        context = RuleContext(
            events=events,
            stats=stats,
            episodes=episodes,
            anomalies=anomalies,
        )
        findings = self.registry.evaluate_all(context)

        logger.info(
            "Analyzed %d events: %d episodes, %d anomalies, %d findings",
            len(events),
            len(episodes),
            len(anomalies),
            len(findings),
        )

        return AnalysisResult(
            stats=stats,
            episodes=episodes,
            anomalies=anomalies,
            findings=findings,
        )


def analyze(events: Sequence[Event], settings: Optional[Config] = None) -> AnalysisResult:
    """Run the full pipeline with the built-in rules."""
    return AnalysisEngine(settings).run(events)
