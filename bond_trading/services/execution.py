"""Execution service: sends algo orders to market and reports them."""

from __future__ import annotations

from datetime import datetime
from typing import Callable

from bond_trading.core.domain.price_codec import encode_price
from bond_trading.core.domain.types import AlgoExecution, ExecutionOrder
from bond_trading.core.events.event_bus import EventBus
from bond_trading.core.events.events import ReportEvent, format_timestamp
from bond_trading.core.events.node import DataflowNode
from bond_trading.core.events.sinks.null_event_bus import NullEventBus

EXECUTION_REPORT_KIND = "execution_report"


def format_execution_report(order: ExecutionOrder) -> str:
    side = "Bid" if order.side == "BID" else "Offer"
    child = "True" if order.is_child_order else "False"
    return (
        "ExecutionOrder:\n"
        f"\tProduct: {order.product_id}\tOrderId: {order.order_id}\n"
        f"\tPricingSide: {side}\tOrderType: {order.order_type}\t\tIsChildOrder: {child}\n"
        f"\tPrice: {encode_price(order.price)}\tVisibleQuantity: {order.visible_quantity}"
        f"\tHiddenQuantity: {order.hidden_quantity}\n"
    )


class ExecutionService(DataflowNode[str, ExecutionOrder]):
    """Keyed on product id; holds the last order executed per product."""

    def __init__(
        self,
        event_bus: EventBus | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        super().__init__(
            "execution",
            key_fn=lambda order: order.product_id,
            default_factory=ExecutionOrder.empty,
        )
        self._event_bus = event_bus or NullEventBus()
        self._clock = clock
        self.listener = ExecutionListenerFromAlgo(self)

    def execute_order(self, order: ExecutionOrder) -> None:
        """Report the order, then store and fan it out."""
        self._event_bus.emit(
            ReportEvent(
                timestamp=format_timestamp(self._clock()),
                kind=EXECUTION_REPORT_KIND,
                key=order.product_id,
                text=format_execution_report(order),
            )
        )
        self.on_message(order)


class ExecutionListenerFromAlgo:
    def __init__(self, service: ExecutionService) -> None:
        self.downstream = service

    def process_add(self, data: AlgoExecution) -> None:
        self.downstream.execute_order(data.execution_order)

    def process_remove(self, data: AlgoExecution) -> None:
        return

    def process_update(self, data: AlgoExecution) -> None:
        return
