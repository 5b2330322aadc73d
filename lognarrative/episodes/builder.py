"""
Episode builder.

Segments events into deterministic episodes and optionally merges adjacent
episodes that share correlation ids.

Grouping rules:
- Walk events in input order.
- Start a new episode when two consecutive events both carry valid
  timestamps and are further apart than time_gap_seconds.
- A missing timestamp on either side never splits an episode.
- If merge_by_correlation is True, fold adjacent episodes together when
  their correlation id sets intersect (adjacent only, not transitive).
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from itertools import count
from typing import Callable, Iterable, List, Optional, Sequence

from lognarrative.core.config import EpisodeConfig
from lognarrative.data.schema import Event, Severity

from .schema import Episode

logger = logging.getLogger(__name__)

EPISODE_CORRELATION_KEYS = ("request_id", "trace_id")


def _bound(
    values: Iterable[Optional[datetime]], pick: Callable[..., datetime]
) -> Optional[datetime]:
    present = [v for v in values if v is not None]
    return pick(present) if present else None


class EpisodeBuilder:
    """
    Deterministic episode builder.

    Episode ids come from a counter seeded at 1 for each build() call. An id
    absorbed by a merge is not handed out again, so ids may have gaps.
    """

    def __init__(self, config: Optional[EpisodeConfig] = None) -> None:
        self.config = config or EpisodeConfig()

    def build(self, events: Sequence[Event]) -> List[Episode]:
        """
        Build episodes from events.

        Args:
            events: Events in original order

        Returns:
            Episodes in input order; [] for empty input
        """
        if not events:
            return []

        ids = count(1)
        episodes: List[Episode] = []
        current_group: List[Event] = []

        def flush_group() -> None:
            if not current_group:
                return
            episodes.append(self._finalize(next(ids), current_group))
            current_group.clear()

        for event in events:
            if current_group and self._has_time_gap(current_group[-1], event):
                flush_group()
            current_group.append(event)

        flush_group()

        logger.debug("Segmented %d events into %d episodes", len(events), len(episodes))

        if self.config.merge_by_correlation and len(episodes) > 1:
            merged = self._merge_adjacent(episodes)
            logger.debug("Correlation merge reduced %d episodes to %d", len(episodes), len(merged))
            return merged

        return episodes

    def _has_time_gap(self, prev: Event, event: Event) -> bool:
        if prev.time is None or event.time is None:
            return False
        gap = event.time - prev.time
        return gap > timedelta(seconds=self.config.time_gap_seconds)

    def _finalize(self, episode_id: int, members: List[Event]) -> Episode:
        times = [e.time for e in members]
        correlation_ids = set()
        for event in members:
            correlation_ids.update(event.correlation_ids(EPISODE_CORRELATION_KEYS))

        return Episode(
            id=episode_id,
            event_ids=[e.id for e in members],
            start_time=_bound(times, min),
            end_time=_bound(times, max),
            correlation_ids=sorted(correlation_ids),
            highlights=self._highlights(members),
            max_severity=max(e.severity for e in members),
        )

    def _highlights(self, members: List[Event]) -> List[int]:
        first_error: Optional[Event] = None
        top: Optional[Event] = None

        for event in members:
            if first_error is None and event.severity in (Severity.ERROR, Severity.FATAL):
                first_error = event
            if event.severity > (top.severity if top else Severity.UNKNOWN):
                top = event

        highlights: List[int] = []
        if first_error is not None:
            highlights.append(first_error.id)
        if top is not None and (first_error is None or top.id != first_error.id):
            highlights.append(top.id)
        return highlights

    def _merge_adjacent(self, episodes: List[Episode]) -> List[Episode]:
        merged: List[Episode] = [episodes[0]]
        for episode in episodes[1:]:
            if self._shares_correlation(merged[-1], episode):
                merged[-1] = self._merge(merged[-1], episode)
            else:
                merged.append(episode)
        return merged

    @staticmethod
    def _shares_correlation(first: Episode, second: Episode) -> bool:
        return not set(first.correlation_ids).isdisjoint(second.correlation_ids)

    @staticmethod
    def _merge(first: Episode, second: Episode) -> Episode:
        return Episode(
            id=first.id,
            event_ids=first.event_ids + second.event_ids,
            start_time=_bound((first.start_time, second.start_time), min),
            end_time=_bound((first.end_time, second.end_time), max),
            correlation_ids=sorted(set(first.correlation_ids) | set(second.correlation_ids)),
            highlights=first.highlights + second.highlights,
            max_severity=max(first.max_severity, second.max_severity),
        )
