"""Throttled GUI price output."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable

from bond_trading.core.domain.types import PriceQuote
from bond_trading.core.events.event_bus import EventBus
from bond_trading.core.events.events import RecordEvent, format_timestamp
from bond_trading.core.events.node import DataflowNode
from bond_trading.core.events.sinks.null_event_bus import NullEventBus

GUI_KIND = "gui"
DEFAULT_THROTTLE_MS: int = 300


class GuiService(DataflowNode[str, PriceQuote]):
    """Stores every price; emits at most one GUI row per product per throttle window.

    The first price of a product is always emitted. A later price is emitted
    only once ``throttle_ms`` has elapsed since the last emitted row for that
    product; prices in between are stored but not displayed.
    """

    def __init__(
        self,
        event_bus: EventBus | None = None,
        throttle_ms: int = DEFAULT_THROTTLE_MS,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        if throttle_ms < 0:
            raise ValueError("throttle_ms must be >= 0")
        super().__init__(
            "gui",
            key_fn=lambda quote: quote.product_id,
            default_factory=PriceQuote.empty,
        )
        self._event_bus = event_bus or NullEventBus()
        self._throttle = timedelta(milliseconds=throttle_ms)
        self._clock = clock
        self._last_emitted: dict[str, datetime] = {}
        self.listener = GuiListenerFromPricing(self)

    def on_message(self, data: PriceQuote) -> None:
        super().on_message(data)
        self._publish_throttled(data)

    def _publish_throttled(self, quote: PriceQuote) -> bool:
        now = self._clock()
        last = self._last_emitted.get(quote.product_id)
        if last is not None and now - last < self._throttle:
            return False

        self._last_emitted[quote.product_id] = now
        self._event_bus.emit(
            RecordEvent(
                timestamp=format_timestamp(now),
                kind=GUI_KIND,
                key=quote.product_id,
                fields=quote.to_strings(),
            )
        )
        return True


class GuiListenerFromPricing:
    def __init__(self, service: GuiService) -> None:
        self.downstream = service

    def process_add(self, data: PriceQuote) -> None:
        self.downstream.on_message(data)

    def process_remove(self, data: PriceQuote) -> None:
        return

    def process_update(self, data: PriceQuote) -> None:
        return
