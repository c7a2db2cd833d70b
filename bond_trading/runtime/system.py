"""Construction and wiring of the full trading system."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable

from bond_trading.connectors.inquiries import InquiryConnector
from bond_trading.connectors.market_data import MarketDataConnector
from bond_trading.connectors.prices import PricingConnector
from bond_trading.connectors.trades import TradeBookingConnector
from bond_trading.core.events.event_bus import EventBus
from bond_trading.core.events.sinks.console import ConsoleReportSink
from bond_trading.core.events.sinks.file_recorder import FileRecorderSink
from bond_trading.core.events.sinks.null_event_bus import NullEventBus
from bond_trading.core.events.sinks.sink_logging import LoggingEventSink
from bond_trading.core.risk.risk_engine import RiskService
from bond_trading.runtime.config import SystemConfig
from bond_trading.services.execution import EXECUTION_REPORT_KIND, ExecutionService
from bond_trading.services.gui import GUI_KIND, GuiService
from bond_trading.services.historical import HISTORICAL_KINDS, HistoricalDataService
from bond_trading.services.inquiry import InquiryService
from bond_trading.services.market_data import MarketDataService
from bond_trading.services.position import PositionService
from bond_trading.services.pricing import PricingService
from bond_trading.services.streaming import STREAMING_REPORT_KIND, StreamingService
from bond_trading.services.trade_booking import TradeBookingService
from bond_trading.strategies.algo_execution import AlgoExecutionService
from bond_trading.strategies.algo_streaming import AlgoStreamingService

LOGGER = logging.getLogger(__name__)

# Feed file name per connector, in the order the feeds are run.
FEED_FILES: tuple[tuple[str, str], ...] = (
    ("prices", "prices.txt"),
    ("trades", "trades.txt"),
    ("marketdata", "marketdata.txt"),
    ("inquiries", "inquiries.txt"),
)


def build_event_bus(out_dir: str | Path, *, console: bool = True) -> EventBus:
    """One CSV file per historical kind plus ``gui.txt``; reports to stdout."""
    out = Path(out_dir)
    bus = EventBus()
    for kind in HISTORICAL_KINDS:
        bus.register(FileRecorderSink(out / f"{kind}.txt"), kinds=[kind])
    bus.register(FileRecorderSink(out / f"{GUI_KIND}.txt"), kinds=[GUI_KIND])
    if console:
        bus.register(ConsoleReportSink(), kinds=[EXECUTION_REPORT_KIND, STREAMING_REPORT_KIND])
    bus.register(LoggingEventSink(logging.getLogger("bus")))
    return bus


class TradingSystem:
    """All nodes of one run, wired together.

    Two chains hang off the feeds:
      pricing -> algo streaming -> streaming, and pricing -> gui;
      market data -> algo execution -> execution -> trade booking
      -> position -> risk.
    Trades from the trade feed enter the second chain at booking.
    Historical services persist streaming, execution, position, risk and
    inquiry activity.
    """

    def __init__(
        self,
        cfg: SystemConfig | None = None,
        event_bus: EventBus | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.cfg = cfg or SystemConfig()
        self.event_bus = event_bus or NullEventBus()

        self.pricing = PricingService()
        self.algo_streaming = AlgoStreamingService(self.cfg.algo_streaming)
        self.streaming = StreamingService(self.event_bus, clock=clock)
        self.gui = GuiService(self.event_bus, throttle_ms=self.cfg.gui_throttle_ms, clock=clock)

        self.market_data = MarketDataService(book_depth=self.cfg.book_depth)
        self.algo_execution = AlgoExecutionService(self.cfg.algo_execution)
        self.execution = ExecutionService(self.event_bus, clock=clock)
        self.trade_booking = TradeBookingService(books=self.cfg.books)
        self.position = PositionService()
        self.risk = RiskService(self.cfg.risk)

        self.inquiry = InquiryService(quote_price=self.cfg.inquiry_quote_price)

        self.historical = {
            kind: HistoricalDataService(kind, self.event_bus, clock=clock)
            for kind in HISTORICAL_KINDS
        }

        self._link()

        self.connectors = {
            "prices": PricingConnector(self.pricing),
            "trades": TradeBookingConnector(self.trade_booking),
            "marketdata": MarketDataConnector(self.market_data),
            "inquiries": InquiryConnector(self.inquiry),
        }

    def _link(self) -> None:
        hist = self.historical

        self.pricing.add_listener(self.algo_streaming.listener)
        self.pricing.add_listener(self.gui.listener)
        self.algo_streaming.add_listener(self.streaming.listener)
        self.streaming.add_listener(hist["streaming"].listener)

        self.market_data.add_listener(self.algo_execution.listener)
        self.algo_execution.add_listener(self.execution.listener)
        self.execution.add_listener(self.trade_booking.listener)
        self.execution.add_listener(hist["execution"].listener)
        self.trade_booking.add_listener(self.position.listener)
        self.position.add_listener(self.risk.listener)
        self.position.add_listener(hist["position"].listener)
        self.risk.add_listener(hist["risk"].listener)

        self.inquiry.add_listener(hist["inquiry"].listener)

        LOGGER.info("services linked")

    def run_feeds(self, data_dir: str | Path) -> dict[str, int]:
        """Run every feed found in ``data_dir``; return records published per feed.

        A missing feed file is skipped with a warning.
        """
        data = Path(data_dir)
        published: dict[str, int] = {}
        for feed, file_name in FEED_FILES:
            path = data / file_name
            if not path.exists():
                LOGGER.warning("feed file missing, skipped", extra={"feed": feed, "path": str(path)})
                continue
            LOGGER.info("feed started", extra={"feed": feed, "path": str(path)})
            published[feed] = self.connectors[feed].subscribe_file(path)
        return published

    def close(self) -> None:
        self.event_bus.close()
