"""Historical persistence of system activity.

One HistoricalDataService per kind of data. Each value it receives is
stored under its key and written out as a ``timestamp, <fields>`` row
through the event bus.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable

from bond_trading.core.domain.types import ExecutionOrder, Inquiry, Position, PriceStream, PV01Risk
from bond_trading.core.events.event_bus import EventBus
from bond_trading.core.events.events import RecordEvent, format_timestamp
from bond_trading.core.events.node import DataflowNode
from bond_trading.core.events.sinks.null_event_bus import NullEventBus

# kind -> (key function, default entry factory)
HISTORICAL_KINDS: dict[str, tuple[Callable[[Any], str], Callable[[str], Any]]] = {
    "position": (lambda v: v.product_id, Position.empty),
    "risk": (lambda v: v.product_id, PV01Risk.empty),
    "execution": (lambda v: v.product_id, ExecutionOrder.empty),
    "streaming": (lambda v: v.product_id, PriceStream.empty),
    "inquiry": (lambda v: v.inquiry_id, Inquiry.empty),
}


class HistoricalDataService(DataflowNode[str, Any]):
    def __init__(
        self,
        kind: str,
        event_bus: EventBus | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        try:
            key_fn, default_factory = HISTORICAL_KINDS[kind]
        except KeyError:
            raise ValueError(f"Unknown historical data kind: {kind}") from None
        super().__init__(f"historical_{kind}", key_fn=key_fn, default_factory=default_factory)
        self.kind = kind
        self._event_bus = event_bus or NullEventBus()
        self._clock = clock
        self.listener = HistoricalDataListener(self)

    def persist_data(self, data: Any) -> None:
        key = self._key_fn(data)
        self.on_message(data)
        self._event_bus.emit(
            RecordEvent(
                timestamp=format_timestamp(self._clock()),
                kind=self.kind,
                key=key,
                fields=data.to_strings(),
            )
        )


class HistoricalDataListener:
    """Persists both added and updated values (risk publishes updates)."""

    def __init__(self, service: HistoricalDataService) -> None:
        self.downstream = service

    def process_add(self, data: Any) -> None:
        self.downstream.persist_data(data)

    def process_remove(self, data: Any) -> None:
        return

    def process_update(self, data: Any) -> None:
        self.downstream.persist_data(data)
