"""
Semantic test: depth aggregation.

Invariant:
aggregate_depth replaces the stored book with one order per distinct
price per side, quantities summed, in first-seen price order, without
notifying listeners.
"""

from __future__ import annotations

from typing import Any

from bond_trading.core.domain.reference_data import get_bond
from bond_trading.core.domain.types import Order, OrderBook
from bond_trading.services.market_data import MarketDataService


class _Counter:
    downstream = None

    def __init__(self) -> None:
        self.calls = 0

    def process_add(self, data: Any) -> None:
        self.calls += 1

    def process_remove(self, data: Any) -> None:
        return

    def process_update(self, data: Any) -> None:
        self.calls += 1


def test_aggregate_depth_groups_by_price() -> None:
    service = MarketDataService()
    counter = _Counter()
    service.add_listener(counter)

    service.on_message(
        OrderBook(
            product=get_bond("9128283F5"),
            bid_stack=(
                Order(price=99.5, quantity=10, side="BID"),
                Order(price=99.25, quantity=5, side="BID"),
                Order(price=99.5, quantity=7, side="BID"),
            ),
            offer_stack=(
                Order(price=100.0, quantity=3, side="OFFER"),
                Order(price=100.0, quantity=4, side="OFFER"),
            ),
        )
    )
    assert counter.calls == 1

    aggregated = service.aggregate_depth("9128283F5")

    assert aggregated.bid_stack == (
        Order(price=99.5, quantity=17, side="BID"),
        Order(price=99.25, quantity=5, side="BID"),
    )
    assert aggregated.offer_stack == (Order(price=100.0, quantity=7, side="OFFER"),)
    assert service.peek("9128283F5") == aggregated
    assert aggregated.product == get_bond("9128283F5")
    assert counter.calls == 1


def test_aggregation_keeps_top_of_book() -> None:
    service = MarketDataService()
    service.on_message(
        OrderBook(
            product=get_bond("9128283F5"),
            bid_stack=(
                Order(price=99.0, quantity=1, side="BID"),
                Order(price=99.5, quantity=2, side="BID"),
                Order(price=99.5, quantity=3, side="BID"),
            ),
            offer_stack=(Order(price=99.75, quantity=9, side="OFFER"),),
        )
    )

    before = service.get_best_bid_offer("9128283F5")
    service.aggregate_depth("9128283F5")
    after = service.get_best_bid_offer("9128283F5")

    assert after.bid_order.price == before.bid_order.price
    assert after.bid_order.quantity == 5
    assert after.offer_order == before.offer_order
