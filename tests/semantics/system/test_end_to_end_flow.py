"""
Semantic test: full system flow.

Invariant:
A tight order book flows market data -> algo execution -> execution ->
booking -> position -> risk, with each stage persisted; a price flows to
streaming and the GUI; feeds run from a data directory with missing files
skipped.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from bond_trading.core.domain.reference_data import DEFAULT_PV01_TABLE
from bond_trading.core.events.event_bus import EventBus
from bond_trading.runtime.config import SystemConfig
from bond_trading.runtime.system import TradingSystem, build_event_bus


class _Capture:
    def __init__(self) -> None:
        self.events = []

    def on_event(self, event) -> None:
        self.events.append(event)

    def kinds(self) -> list[str]:
        return [e.kind for e in self.events]


def _clock() -> datetime:
    return datetime(2024, 1, 2, 9, 30, 0)


MARKET_DATA = [
    "9128283H1,99-160,1000000,BID",
    "9128283H1,99-156,2000000,BID",
    "9128283H1,99-162,3000000,OFFER",
    "9128283H1,99-166,4000000,OFFER",
]


def test_market_data_reaches_risk() -> None:
    capture = _Capture()
    system = TradingSystem(SystemConfig(book_depth=2), EventBus([capture]), clock=_clock)

    system.connectors["marketdata"].subscribe(MARKET_DATA)

    # Depth first: booking, position and risk run before the execution is persisted.
    assert capture.kinds() == ["execution_report", "risk", "position", "execution"]

    order = system.execution.peek("9128283H1")
    assert order.side == "BID"
    assert order.visible_quantity == 1_000_000

    trade = system.trade_booking.peek(order.order_id)
    assert trade.side == "SELL"
    assert trade.book == "TRSY2"

    position = system.position.peek("9128283H1")
    assert position.get_position("TRSY2") == -1_000_000

    risk = system.risk.peek("9128283H1")
    assert risk.quantity == -1_000_000
    assert risk.pv01 == DEFAULT_PV01_TABLE["9128283H1"]
    assert system.risk.get_bucketed_risk("FrontEnd").pv01 == pytest.approx(risk.exposure)


def test_price_reaches_streaming_and_gui() -> None:
    capture = _Capture()
    system = TradingSystem(event_bus=EventBus([capture]), clock=_clock)

    system.connectors["prices"].subscribe(["9128283H1,99-160,99-162"])

    assert capture.kinds() == ["streaming", "streaming_report", "gui"]
    stream = system.streaming.peek("9128283H1")
    assert stream.bid_order.price == 99.5
    assert stream.offer_order.price == 99.5 + 2 / 256
    assert stream.bid_order.visible_quantity == 10_000_000
    assert system.gui.peek("9128283H1").mid == 99.5 + 1 / 256


def test_run_feeds_from_directory(tmp_path: Path) -> None:
    data_dir = tmp_path / "data"
    out_dir = tmp_path / "out"
    data_dir.mkdir()
    (data_dir / "prices.txt").write_text("9128283H1,99-160,99-162\n", encoding="utf-8")
    (data_dir / "inquiries.txt").write_text("INQ1,9128283H1,BUY,1000000,99-160,RECEIVED\n", encoding="utf-8")
    (data_dir / "marketdata.txt").write_text("\n".join(MARKET_DATA) + "\n", encoding="utf-8")

    system = TradingSystem(
        SystemConfig(book_depth=2),
        build_event_bus(out_dir, console=False),
        clock=_clock,
    )
    published = system.run_feeds(data_dir)
    system.close()

    assert published == {"prices": 1, "marketdata": 1, "inquiries": 1}

    inquiry_rows = (out_dir / "inquiry.txt").read_text(encoding="utf-8").splitlines()
    assert [row.split(",")[-1] for row in inquiry_rows] == ["RECEIVED", "QUOTED", "DONE"]
    assert inquiry_rows[-1].split(",")[-2] == "100-000"

    assert (out_dir / "gui.txt").read_text(encoding="utf-8").startswith(
        "2024-01-02 09:30:00.000,9128283H1,99-161,0-002"
    )
    assert len((out_dir / "position.txt").read_text(encoding="utf-8").splitlines()) == 1
    assert len((out_dir / "risk.txt").read_text(encoding="utf-8").splitlines()) == 1
    assert len((out_dir / "execution.txt").read_text(encoding="utf-8").splitlines()) == 1
    assert len((out_dir / "streaming.txt").read_text(encoding="utf-8").splitlines()) == 1
