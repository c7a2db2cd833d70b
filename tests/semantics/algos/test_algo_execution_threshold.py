"""
Semantic test: execution algo acts only on a tight market.

Invariant:
An order is emitted when offer - bid <= spread threshold (1/128 by
default) and never otherwise; the decision counter only advances when an
order is emitted; an empty side of the book means no order.
"""

from __future__ import annotations

from bond_trading.core.domain.price_codec import decode_price
from bond_trading.core.domain.reference_data import get_bond
from bond_trading.core.domain.types import Order, OrderBook
from bond_trading.strategies.algo_execution import AlgoExecutionService
from bond_trading.strategies.strategy_config import AlgoExecutionConfig


def _book(bid: str, offer: str) -> OrderBook:
    return OrderBook(
        product=get_bond("9128283H1"),
        bid_stack=(Order(price=decode_price(bid), quantity=1_000_000, side="BID"),),
        offer_stack=(Order(price=decode_price(offer), quantity=2_000_000, side="OFFER"),),
    )


def test_spread_at_threshold_emits_order() -> None:
    algo = AlgoExecutionService()

    result = algo.algo_execute_order(_book("99-160", "99-162"))

    assert result is not None
    order = result.execution_order
    assert order.order_type == "MARKET"
    assert not order.is_child_order
    assert order.parent_order_id == ""
    assert algo.count == 1
    assert algo.peek("9128283H1") == result


def test_wide_spread_emits_nothing() -> None:
    algo = AlgoExecutionService()

    assert algo.algo_execute_order(_book("99-160", "99-163")) is None
    assert algo.count == 0
    assert algo.peek("9128283H1") is None


def test_threshold_is_configurable() -> None:
    algo = AlgoExecutionService(AlgoExecutionConfig(spread_threshold=1 / 32))

    assert algo.algo_execute_order(_book("99-160", "99-170")) is not None


def test_empty_side_emits_nothing() -> None:
    algo = AlgoExecutionService()
    book = OrderBook(
        product=get_bond("9128283H1"),
        bid_stack=(Order(price=99.5, quantity=1, side="BID"),),
    )

    assert algo.algo_execute_order(book) is None
    assert algo.count == 0
