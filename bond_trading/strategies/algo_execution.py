"""Liquidity-taking execution algo.

On every order book update the algo looks at the top of book. When the
market is tight (offer - bid within the configured threshold) it crosses the
spread with one top-level order, alternating between the bid and the offer
side on successive decisions so inventory does not build up on one side.
"""

from __future__ import annotations

import logging

from bond_trading.core.domain.ids import OrderSlot, stable_order_id
from bond_trading.core.domain.types import AlgoExecution, ExecutionOrder, OrderBook
from bond_trading.core.events.node import DataflowNode
from bond_trading.strategies.strategy_config import AlgoExecutionConfig

LOGGER = logging.getLogger(__name__)


class AlgoExecutionService(DataflowNode[str, AlgoExecution]):
    """Keyed on product id; holds the latest decision per product."""

    def __init__(self, cfg: AlgoExecutionConfig | None = None) -> None:
        super().__init__(
            "algo_execution",
            key_fn=lambda algo: algo.product_id,
            default_factory=AlgoExecution.empty,
        )
        self.cfg = cfg or AlgoExecutionConfig()
        # Number of decisions taken so far, across all products.
        self.count = 0
        self.listener = AlgoExecutionListenerFromMarketData(self)

    def algo_execute_order(self, order_book: OrderBook) -> AlgoExecution | None:
        """Decide on one book update; publish and return the decision, if any."""
        bid_offer = order_book.get_bid_offer()
        bid = bid_offer.bid_order
        offer = bid_offer.offer_order

        # A zero price is an empty side of the book.
        if bid.price == 0.0 or offer.price == 0.0:
            LOGGER.debug(
                "no liquidity, skipping",
                extra={"product_id": order_book.product_id},
            )
            return None

        if offer.price - bid.price > self.cfg.spread_threshold:
            return None

        top = bid if self.count % 2 == 0 else offer
        slot = OrderSlot(product_id=order_book.product_id, side=top.side, sequence=self.count)
        order = ExecutionOrder(
            product=order_book.product,
            side=top.side,
            order_id=stable_order_id(slot, self.cfg.id_namespace),
            order_type=self.cfg.order_type,
            price=top.price,
            visible_quantity=top.quantity,
            hidden_quantity=0,
        )
        self.count += 1

        algo = AlgoExecution(execution_order=order)
        LOGGER.info(
            "algo execution",
            extra={
                "product_id": order.product_id,
                "side": order.side,
                "order_id": order.order_id,
                "price": order.price,
            },
        )
        self.on_message(algo)
        return algo


class AlgoExecutionListenerFromMarketData:
    def __init__(self, service: AlgoExecutionService) -> None:
        self.downstream = service

    def process_add(self, data: OrderBook) -> None:
        self.downstream.algo_execute_order(data)

    def process_remove(self, data: OrderBook) -> None:
        return

    def process_update(self, data: OrderBook) -> None:
        return
