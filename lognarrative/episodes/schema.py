"""
Schema for episodes.

An episode is a coherent run of related events: one "chapter" of the story
told by the logs. Episodes reference events by id only.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from lognarrative.data.schema import Severity


class Episode(BaseModel):
    """
    A temporally and/or correlation-coherent cluster of events.

    Fields:
    - id: episode identifier, unique within one build
    - event_ids: member events in input order
    - start_time/end_time: min/max over members with valid timestamps
    - correlation_ids: sorted, deduplicated request/trace ids of the members
    - highlights: key events (first error, max-severity event)
    - max_severity: highest member severity
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=1)
    event_ids: List[int] = Field(default_factory=list)
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    correlation_ids: List[str] = Field(default_factory=list)
    highlights: List[int] = Field(default_factory=list)
    max_severity: Severity = Severity.UNKNOWN

    @property
    def size(self) -> int:
        return len(self.event_ids)

    @property
    def is_empty(self) -> bool:
        return not self.event_ids
