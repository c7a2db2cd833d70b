"""
Event sink interface.

Sinks consume the egress records emitted by the nodes: historical rows,
console reports and GUI rows.
"""
from __future__ import annotations

from typing import Any, Protocol


class EventSink(Protocol):
    def on_event(self, event: Any) -> None:
        """Consume an egress event."""
