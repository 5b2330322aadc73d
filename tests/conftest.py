"""
Pytest configuration and shared fixtures.

Provides test configuration instances and an event factory for unit and
integration tests.
"""

from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional

import pytest

from lognarrative.core.config import Config
from lognarrative.data.schema import Event, Severity, SourceRef, Timestamp

T0 = datetime(2025, 2, 7, 10, 0, 0, tzinfo=timezone.utc)


def make_event(
    event_id: int,
    offset_seconds: Optional[float] = None,
    severity: Severity = Severity.INFO,
    message: str = "",
    tags: Optional[Dict[str, str]] = None,
    path: str = "app.log",
    confidence: int = 100,
) -> Event:
    """
    Build an Event at T0 + offset_seconds.

    offset_seconds=None produces an event without a timestamp.
    """
    timestamp = None
    if offset_seconds is not None:
        timestamp = Timestamp(
            value=T0 + timedelta(seconds=offset_seconds),
            confidence=confidence,
            tz_known=True,
        )
    return Event(
        id=event_id,
        timestamp=timestamp,
        severity=severity,
        message=message or f"event {event_id}",
        raw=message or f"event {event_id}",
        source=SourceRef(path=path, start_line=event_id, end_line=event_id),
        tags=tags or {},
    )


@pytest.fixture
def t0() -> datetime:
    """Fixed, minute-aligned reference time."""
    return T0


@pytest.fixture
def event_factory() -> Callable[..., Event]:
    """Fixture exposing make_event to tests."""
    return make_event


@pytest.fixture
def mock_config(tmp_path) -> Config:
    """
    Fixture providing test configuration with explicit values.

    Ensures tests run consistently regardless of .env settings.
    """
    return Config(
        log_level="WARNING",
        logs_dir=tmp_path / "logs",
        log_to_file=False,
    )


@pytest.fixture
def incident_events():
    """
    A small incident: a deploy, retries ending in a timeout, then an error
    burst and a restart loop.
    """
    events = [
        make_event(1, 0, Severity.INFO, "Deploy of version 2.4.1 rolled out by ci"),
    ]
    next_id = 2

    # steady background: one error per minute for ten minutes
    for minute in range(1, 11):
        events.append(
            make_event(next_id, minute * 60, Severity.ERROR, f"cache miss for key {minute}")
        )
        next_id += 1

    events.append(make_event(next_id, 11 * 60, Severity.WARN, "retrying upstream call", {"request_id": "req-1"}))
    next_id += 1
    events.append(make_event(next_id, 11 * 60 + 5, Severity.WARN, "retrying upstream call", {"request_id": "req-1"}))
    next_id += 1
    events.append(make_event(next_id, 11 * 60 + 10, Severity.ERROR, "upstream request timed out", {"request_id": "req-1"}))
    next_id += 1

    # burst: twelve errors inside minute 12
    for second in range(12):
        events.append(
            make_event(next_id, 12 * 60 + second, Severity.ERROR, "db connection refused")
        )
        next_id += 1

    # restart loop: four restarts two minutes apart
    for n in range(4):
        events.append(
            make_event(next_id, 14 * 60 + n * 120, Severity.WARN, "worker restarting after crash")
        )
        next_id += 1

    return events


def pytest_configure(config):
    """
    Pytest hook for custom configuration.

    Registers custom markers used throughout tests.
    """
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
