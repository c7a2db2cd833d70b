"""Position keeping per product and book."""

from __future__ import annotations

from bond_trading.core.domain.types import Position, Trade
from bond_trading.core.events.node import DataflowNode


class PositionService(DataflowNode[str, Position]):
    """Keyed on product id."""

    def __init__(self) -> None:
        super().__init__(
            "position",
            key_fn=lambda position: position.product_id,
            default_factory=Position.empty,
        )
        self.listener = PositionListenerFromTradeBooking(self)

    def add_trade(self, trade: Trade) -> Position:
        """Apply a trade (BUY adds, SELL subtracts) and publish the new position."""
        current = self.peek(trade.product_id) or Position(product=trade.product)
        updated = current.with_trade(trade.book, trade.signed_quantity)
        self.on_message(updated)
        return updated


class PositionListenerFromTradeBooking:
    def __init__(self, service: PositionService) -> None:
        self.downstream = service

    def process_add(self, data: Trade) -> None:
        self.downstream.add_trade(data)

    def process_remove(self, data: Trade) -> None:
        return

    def process_update(self, data: Trade) -> None:
        return
