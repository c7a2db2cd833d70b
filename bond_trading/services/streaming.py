"""Streaming service: publishes algo two-way prices and reports them."""

from __future__ import annotations

from datetime import datetime
from typing import Callable

from bond_trading.core.domain.price_codec import encode_price
from bond_trading.core.domain.types import AlgoStream, PriceStream
from bond_trading.core.events.event_bus import EventBus
from bond_trading.core.events.events import ReportEvent, format_timestamp
from bond_trading.core.events.node import DataflowNode
from bond_trading.core.events.sinks.null_event_bus import NullEventBus

STREAMING_REPORT_KIND = "streaming_report"


def format_stream_report(stream: PriceStream) -> str:
    bid = stream.bid_order
    offer = stream.offer_order
    return (
        f"Price Stream (Product {stream.product_id}):\n"
        f"\tBid\tPrice: {encode_price(bid.price)}\tVisibleQuantity: {bid.visible_quantity}"
        f"\tHiddenQuantity: {bid.hidden_quantity}\n"
        f"\tAsk\tPrice: {encode_price(offer.price)}\tVisibleQuantity: {offer.visible_quantity}"
        f"\tHiddenQuantity: {offer.hidden_quantity}\n"
    )


class StreamingService(DataflowNode[str, PriceStream]):
    def __init__(
        self,
        event_bus: EventBus | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        super().__init__(
            "streaming",
            key_fn=lambda stream: stream.product_id,
            default_factory=PriceStream.empty,
        )
        self._event_bus = event_bus or NullEventBus()
        self._clock = clock
        self.listener = StreamingListenerFromAlgo(self)

    def publish_price(self, stream: PriceStream) -> None:
        """Store and fan out the stream, then report it."""
        self.on_message(stream)
        self._event_bus.emit(
            ReportEvent(
                timestamp=format_timestamp(self._clock()),
                kind=STREAMING_REPORT_KIND,
                key=stream.product_id,
                text=format_stream_report(stream),
            )
        )


class StreamingListenerFromAlgo:
    def __init__(self, service: StreamingService) -> None:
        self.downstream = service

    def process_add(self, data: AlgoStream) -> None:
        self.downstream.publish_price(data.price_stream)

    def process_remove(self, data: AlgoStream) -> None:
        return

    def process_update(self, data: AlgoStream) -> None:
        return
