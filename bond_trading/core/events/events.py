"""
Egress event models.

These events are immutable facts emitted by the nodes for persistence,
reporting and display. Every event carries a ``kind`` used by the bus to
route it to the sinks registered for that kind.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


def format_timestamp(moment: datetime | None = None) -> str:
    """Render a wall-clock timestamp with millisecond precision."""
    moment = moment or datetime.now()
    return moment.strftime("%Y-%m-%d %H:%M:%S.") + f"{moment.microsecond // 1000:03d}"


@dataclass(slots=True)
class RecordEvent:
    """One persisted row: ``timestamp`` followed by ``fields``."""

    timestamp: str
    kind: str
    key: str
    fields: list[str]


@dataclass(slots=True)
class ReportEvent:
    """A human-readable multi-line report."""

    timestamp: str
    kind: str
    key: str
    text: str
