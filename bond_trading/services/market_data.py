"""Order book store and depth aggregation."""

from __future__ import annotations

import logging

from bond_trading.core.domain.types import BidOffer, Order, OrderBook, PricingSide
from bond_trading.core.events.node import DataflowNode

LOGGER = logging.getLogger(__name__)

DEFAULT_BOOK_DEPTH: int = 5


def _aggregate_stack(stack: tuple[Order, ...], side: PricingSide) -> tuple[Order, ...]:
    # dict keeps first-seen price order.
    totals: dict[float, int] = {}
    for order in stack:
        totals[order.price] = totals.get(order.price, 0) + order.quantity
    return tuple(Order(price=price, quantity=qty, side=side) for price, qty in totals.items())


class MarketDataService(DataflowNode[str, OrderBook]):
    """Keyed on product id; holds the latest full-depth book per product."""

    def __init__(self, book_depth: int = DEFAULT_BOOK_DEPTH) -> None:
        if book_depth < 1:
            raise ValueError("book_depth must be >= 1")
        super().__init__(
            "market_data",
            key_fn=lambda book: book.product_id,
            default_factory=OrderBook.empty,
        )
        self._book_depth = book_depth

    @property
    def book_depth(self) -> int:
        return self._book_depth

    def get_best_bid_offer(self, product_id: str) -> BidOffer:
        """Top of book for a product.

        An unseen product gets an empty book, so both sides come back as
        zero-price orders.
        """
        return self.get_data(product_id).get_bid_offer()

    def aggregate_depth(self, product_id: str) -> OrderBook:
        """Collapse each side of the stored book to one order per price.

        Quantities at equal prices are summed. The aggregated book replaces
        the stored one; listeners are not notified.
        """
        book = self.get_data(product_id)
        aggregated = OrderBook(
            product=book.product,
            bid_stack=_aggregate_stack(book.bid_stack, "BID"),
            offer_stack=_aggregate_stack(book.offer_stack, "OFFER"),
        )
        self._store[product_id] = aggregated
        LOGGER.debug(
            "depth aggregated",
            extra={
                "product_id": product_id,
                "bid_levels": len(aggregated.bid_stack),
                "offer_levels": len(aggregated.offer_stack),
            },
        )
        return aggregated
