"""
Canonical event schema consumed by the analysis pipeline.

Events arrive already framed and parsed by upstream collaborators (readers,
framers, field extractors). This module only defines their shape; the
analysis stages treat every Event as read-only.

Design rationale:
- Severity is ordered so that "max severity" is a plain comparison
- A timestamp carries a confidence; confidence 0 means "no usable timestamp"
- Naive timestamps are interpreted as UTC so all comparisons are well-defined
- Tags are an open string map (request_id, trace_id, uuid, key=value pairs)
"""

from datetime import datetime, timezone
from enum import IntEnum
from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Severity(IntEnum):
    """
    Log severity levels, ordered from least to most severe.

    UNKNOWN sorts below everything so it never wins a max-severity comparison.
    """
    UNKNOWN = 0
    TRACE = 1
    DEBUG = 2
    INFO = 3
    WARN = 4
    ERROR = 5
    FATAL = 6


_SEVERITY_ALIASES: Dict[str, Severity] = {
    "TRACE": Severity.TRACE,
    "VERBOSE": Severity.TRACE,
    "DEBUG": Severity.DEBUG,
    "DBG": Severity.DEBUG,
    "INFO": Severity.INFO,
    "INFORMATION": Severity.INFO,
    "WARN": Severity.WARN,
    "WARNING": Severity.WARN,
    "ERROR": Severity.ERROR,
    "ERR": Severity.ERROR,
    "FATAL": Severity.FATAL,
    "CRITICAL": Severity.FATAL,
    "SEVERE": Severity.FATAL,
}


def severity_to_string(severity: Severity) -> str:
    """Return the canonical upper-case name of a severity."""
    return Severity(severity).name


def severity_from_string(text: Optional[str]) -> Severity:
    """
    Map a severity label to the Severity enum.

    Handles common variants:
    - WARNING -> WARN
    - ERR -> ERROR
    - CRITICAL / SEVERE -> FATAL
    - Case-insensitive, surrounding whitespace ignored

    Unrecognized labels map to UNKNOWN rather than raising.
    """
    if not text:
        return Severity.UNKNOWN
    return _SEVERITY_ALIASES.get(str(text).strip().upper(), Severity.UNKNOWN)


class Timestamp(BaseModel):
    """
    Parsed timestamp with detection confidence.

    Attributes:
        value: Point in time (naive values are treated as UTC)
        confidence: 0-100, 0 means the timestamp is absent/unusable
        tz_known: True if the source text carried an explicit timezone
    """

    model_config = ConfigDict(frozen=True)

    value: datetime
    confidence: int = Field(100, ge=0, le=100)
    tz_known: bool = False

    @field_validator("value")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def is_valid(self) -> bool:
        return self.confidence > 0


class SourceRef(BaseModel):
    """Location of an event in its source (file path + line range)."""

    model_config = ConfigDict(frozen=True)

    path: str = ""
    start_line: int = Field(0, ge=0)
    end_line: int = Field(0, ge=0)

    def to_string(self) -> str:
        """Format as "path:start" or "path:start-end"."""
        if self.end_line != self.start_line:
            return f"{self.path}:{self.start_line}-{self.end_line}"
        return f"{self.path}:{self.start_line}"


class Event(BaseModel):
    """
    Canonical representation of a single log event.

    Attributes:
        id: Unique, monotonically assigned identifier
        timestamp: Parsed timestamp, if any
        severity: Detected severity level
        message: Extracted message text
        raw: Original raw text, preserved for evidence
        source: Where the event came from
        tags: Extracted metadata (request_id, trace_id, uuid, ...)

    Notes:
        - Events are immutable once created
        - Use `time` rather than `timestamp` when only valid timestamps matter
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., ge=0)
    timestamp: Optional[Timestamp] = None
    severity: Severity = Severity.UNKNOWN
    message: str = ""
    raw: str = ""
    source: SourceRef = Field(default_factory=SourceRef)
    tags: Dict[str, str] = Field(default_factory=dict)

    @property
    def has_valid_timestamp(self) -> bool:
        return self.timestamp is not None and self.timestamp.is_valid

    @property
    def time(self) -> Optional[datetime]:
        """The event time when the timestamp is valid, else None."""
        if self.has_valid_timestamp:
            return self.timestamp.value
        return None

    def correlation_ids(self, keys: Sequence[str]) -> List[str]:
        """Values of the given tag keys that are present and non-empty, in key order."""
        return [self.tags[key] for key in keys if self.tags.get(key)]
