"""
Bus used by nodes that are built without any egress sinks.

Reports, GUI rows and historical records emitted through it go nowhere,
which keeps a standalone service (in a test or a notebook) free of file
and console side effects.
"""
from __future__ import annotations

from typing import Any

from bond_trading.core.events.event_bus import EventBus


class _DiscardSink:
    def on_event(self, event: Any) -> None:
        return


class NullEventBus(EventBus):
    """EventBus whose only sink discards every record and report."""

    def __init__(self) -> None:
        super().__init__(sinks=[_DiscardSink()])
