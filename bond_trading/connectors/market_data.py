"""Market data feed: ``product_id, price, quantity, side`` depth entries."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from bond_trading.connectors.records import (
    iter_fields,
    parse_pricing_side,
    parse_quantity,
    read_lines,
    skip_record,
)
from bond_trading.core.domain.price_codec import decode_price
from bond_trading.core.domain.reference_data import get_bond
from bond_trading.core.domain.types import Order, OrderBook
from bond_trading.services.market_data import MarketDataService

LOGGER = logging.getLogger(__name__)


class _BookBuffer:
    __slots__ = ("bids", "offers")

    def __init__(self) -> None:
        self.bids: list[Order] = []
        self.offers: list[Order] = []

    def __len__(self) -> int:
        return len(self.bids) + len(self.offers)


class MarketDataConnector:
    """Builds order books from raw depth entries.

    Entries are buffered per product. Once ``2 * book_depth`` entries have
    accumulated for a product, the buffer is published as one OrderBook and
    cleared.
    """

    feed = "marketdata"

    def __init__(self, service: MarketDataService) -> None:
        self._service = service
        self._buffers: dict[str, _BookBuffer] = {}

    @property
    def chunk_size(self) -> int:
        return 2 * self._service.book_depth

    def pending(self, product_id: str) -> int:
        """Number of buffered entries not yet published for a product."""
        buffer = self._buffers.get(product_id)
        return 0 if buffer is None else len(buffer)

    def subscribe(self, lines: Iterable[str]) -> int:
        published = 0
        for line_no, fields in iter_fields(lines, feed=self.feed, min_fields=4):
            product_id, price_text, quantity_text, side_text = fields[:4]
            product = get_bond(product_id)
            try:
                order = Order(
                    price=decode_price(price_text),
                    quantity=parse_quantity(quantity_text),
                    side=parse_pricing_side(side_text),
                )
            except ValueError as exc:
                skip_record(self.feed, line_no, exc)
                continue

            buffer = self._buffers.setdefault(product_id, _BookBuffer())
            (buffer.bids if order.side == "BID" else buffer.offers).append(order)
            if len(buffer) < self.chunk_size:
                continue

            book = OrderBook(
                product=product,
                bid_stack=tuple(buffer.bids),
                offer_stack=tuple(buffer.offers),
            )
            del self._buffers[product_id]
            self._service.on_message(book)
            published += 1

        incomplete = {pid: len(buf) for pid, buf in self._buffers.items() if len(buf)}
        if incomplete:
            LOGGER.warning(
                "incomplete books left unpublished",
                extra={"feed": self.feed, "pending": incomplete},
            )
        LOGGER.info("feed processed", extra={"feed": self.feed, "published": published})
        return published

    def subscribe_file(self, path: str | Path) -> int:
        return self.subscribe(read_lines(path))
