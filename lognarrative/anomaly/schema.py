"""
Schema definitions for anomaly detection.

All anomaly outputs are deterministic and explainable. Each anomaly carries
the ids of the events that support it and a confidence in [0.0, 1.0].
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class AnomalyType(str, Enum):
    """Kinds of detected anomalies."""

    ERROR_BURST = "error_burst"
    RESTART_LOOP = "restart_loop"
    MISSING_HEARTBEAT = "missing_heartbeat"  # reserved, no detector yet


class Anomaly(BaseModel):
    """
    A detected abnormal pattern.

    Fields:
    - type: anomaly kind
    - description: human-readable explanation
    - evidence_ids: supporting event ids
    - confidence: in [0.0, 1.0]
    - start_time/end_time: span covered by the anomaly, if known
    """

    model_config = ConfigDict(frozen=True)

    type: AnomalyType
    description: str
    evidence_ids: List[int] = Field(default_factory=list)
    confidence: float = Field(ge=0.0, le=1.0)
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
