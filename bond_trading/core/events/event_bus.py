"""
Synchronous event bus with per-kind routing.
"""
from __future__ import annotations

from typing import Any, Iterable

from bond_trading.core.events.event_sink import EventSink


class EventBus:
    """Dispatches events to registered sinks.

    A sink registered with ``kinds`` only receives events whose ``kind``
    attribute is one of them; a sink registered without ``kinds`` receives
    everything.
    """

    def __init__(self, sinks: Iterable[EventSink] | None = None) -> None:
        self._routes: list[tuple[EventSink, frozenset[str] | None]] = [
            (sink, None) for sink in (sinks or ())
        ]
        self._closed = False

    def register(self, sink: EventSink, kinds: Iterable[str] | None = None) -> None:
        """Register a new sink, optionally restricted to some event kinds."""
        self._routes.append((sink, frozenset(kinds) if kinds is not None else None))

    @property
    def sinks(self) -> list[EventSink]:
        return [sink for sink, _ in self._routes]

    def emit(self, event: Any) -> None:
        """Emit an event to every sink routed for its kind."""
        kind = getattr(event, "kind", None)
        for sink, kinds in self._routes:
            if kinds is None or kind in kinds:
                sink.on_event(event)

    def close(self) -> None:
        """
        Finalize all sinks that expose a close() method.
        """
        if self._closed:
            return

        for sink in self.sinks:
            close_fn = getattr(sink, "close", None)
            if callable(close_fn):
                close_fn()

        self._closed = True
