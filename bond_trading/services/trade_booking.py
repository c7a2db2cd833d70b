"""Trade booking: turns executions into trades and books them."""

from __future__ import annotations

import logging
from typing import Sequence

from bond_trading.core.domain.types import ExecutionOrder, Trade
from bond_trading.core.events.node import DataflowNode

LOGGER = logging.getLogger(__name__)

DEFAULT_BOOKS: tuple[str, ...] = ("TRSY1", "TRSY2", "TRSY3")


class TradeBookingService(DataflowNode[str, Trade]):
    """Keyed on trade id. A repeated trade id overwrites the earlier trade."""

    def __init__(self, books: Sequence[str] = DEFAULT_BOOKS) -> None:
        if not books:
            raise ValueError("at least one book is required")
        super().__init__(
            "trade_booking",
            key_fn=lambda trade: trade.trade_id,
            default_factory=Trade.empty,
        )
        self.books: tuple[str, ...] = tuple(books)
        self.listener = TradeBookingListenerFromExecution(self)

    def book_trade(self, trade: Trade) -> None:
        if self.has_data(trade.trade_id):
            LOGGER.warning(
                "trade id rebooked, overwriting",
                extra={"trade_id": trade.trade_id, "product_id": trade.product_id},
            )
        self.on_message(trade)


class TradeBookingListenerFromExecution:
    """Books every execution.

    Selling into a bid and buying from an offer: a BID execution books a
    SELL, an OFFER execution a BUY, for visible plus hidden quantity. Books
    are assigned round-robin; the counter is advanced before the book is
    picked, so the first trade lands in the second book.
    """

    def __init__(self, service: TradeBookingService) -> None:
        self.downstream = service
        self.count = 0

    def process_add(self, data: ExecutionOrder) -> None:
        self.count += 1
        books = self.downstream.books
        trade = Trade(
            product=data.product,
            trade_id=data.order_id,
            price=data.price,
            book=books[self.count % len(books)],
            quantity=data.visible_quantity + data.hidden_quantity,
            side="SELL" if data.side == "BID" else "BUY",
        )
        self.downstream.book_trade(trade)

    def process_remove(self, data: ExecutionOrder) -> None:
        return

    def process_update(self, data: ExecutionOrder) -> None:
        return
