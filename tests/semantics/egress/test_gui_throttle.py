"""
Semantic test: GUI throttling.

Invariant:
Per product, at most one GUI row is emitted per throttle window; the first
price of a product is always emitted; every price is stored regardless.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from bond_trading.core.domain.reference_data import get_bond
from bond_trading.core.domain.types import PriceQuote
from bond_trading.core.events.event_bus import EventBus
from bond_trading.services.gui import GuiService


class _Clock:
    def __init__(self) -> None:
        self.now = datetime(2024, 1, 2, 9, 30, 0)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += timedelta(milliseconds=ms)


class _Capture:
    def __init__(self) -> None:
        self.events = []

    def on_event(self, event) -> None:
        self.events.append(event)


def _quote(product_id: str, mid: float) -> PriceQuote:
    return PriceQuote(product=get_bond(product_id), mid=mid, bid_offer_spread=1 / 128)


def test_rows_throttled_per_product() -> None:
    clock = _Clock()
    capture = _Capture()
    bus = EventBus()
    bus.register(capture, kinds=["gui"])
    gui = GuiService(bus, throttle_ms=300, clock=clock)

    gui.on_message(_quote("9128283H1", 99.5))
    clock.advance(100)
    gui.on_message(_quote("9128283H1", 99.75))
    gui.on_message(_quote("912810RZ3", 98.0))
    clock.advance(200)
    gui.on_message(_quote("9128283H1", 100.0))

    rows = [(e.key, e.fields[1]) for e in capture.events]
    assert rows == [
        ("9128283H1", "99-160"),
        ("912810RZ3", "98-000"),
        ("9128283H1", "100-000"),
    ]
    assert capture.events[0].timestamp == "2024-01-02 09:30:00.000"
    assert capture.events[0].fields == ["9128283H1", "99-160", "0-002"]

    # Suppressed prices are still stored.
    assert gui.peek("9128283H1").mid == 100.0


def test_zero_throttle_emits_everything() -> None:
    clock = _Clock()
    capture = _Capture()
    gui = GuiService(EventBus([capture]), throttle_ms=0, clock=clock)

    for _ in range(3):
        gui.listener.process_add(_quote("9128283H1", 99.5))

    assert len(capture.events) == 3
