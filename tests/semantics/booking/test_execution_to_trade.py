"""
Semantic test: executions become booked trades.

Invariant:
Each execution books one trade with trade id = order id, BID -> SELL and
OFFER -> BUY, quantity = visible + hidden, and books assigned round-robin
starting from the second book.
"""

from __future__ import annotations

from bond_trading.core.domain.reference_data import get_bond
from bond_trading.core.domain.types import ExecutionOrder
from bond_trading.services.trade_booking import TradeBookingService


def _execution(order_id: str, side: str) -> ExecutionOrder:
    return ExecutionOrder(
        product=get_bond("9128283J7"),
        side=side,
        order_id=order_id,
        order_type="MARKET",
        price=99.5,
        visible_quantity=1_000_000,
        hidden_quantity=500_000,
    )


def test_execution_books_trade() -> None:
    service = TradeBookingService()

    service.listener.process_add(_execution("ORD1", "BID"))
    service.listener.process_add(_execution("ORD2", "OFFER"))

    first = service.peek("ORD1")
    second = service.peek("ORD2")
    assert first is not None and second is not None

    assert first.side == "SELL"
    assert second.side == "BUY"
    assert first.quantity == 1_500_000
    assert first.price == 99.5
    assert first.product == get_bond("9128283J7")


def test_books_rotate_from_second_book() -> None:
    service = TradeBookingService()

    for i in range(4):
        service.listener.process_add(_execution(f"ORD{i}", "BID"))

    assert [service.peek(f"ORD{i}").book for i in range(4)] == ["TRSY2", "TRSY3", "TRSY1", "TRSY2"]


def test_repeated_trade_id_overwrites() -> None:
    service = TradeBookingService(books=("A",))

    service.listener.process_add(_execution("ORD1", "BID"))
    service.listener.process_add(_execution("ORD1", "OFFER"))

    assert len(service) == 1
    assert service.peek("ORD1").side == "BUY"
