"""Two-way price streaming algo."""

from __future__ import annotations

from bond_trading.core.domain.types import AlgoStream, PriceQuote, PriceStream, PriceStreamOrder
from bond_trading.core.events.node import DataflowNode
from bond_trading.strategies.strategy_config import AlgoStreamingConfig


class AlgoStreamingService(DataflowNode[str, AlgoStream]):
    """Turns internal prices into quotable two-way streams.

    Bid and offer sit half a spread either side of the mid. Visible size
    alternates 1x, 2x, 1x, ... the base quantity on successive updates
    regardless of product or market conditions.
    """

    def __init__(self, cfg: AlgoStreamingConfig | None = None) -> None:
        super().__init__(
            "algo_streaming",
            key_fn=lambda algo: algo.product_id,
            default_factory=AlgoStream.empty,
        )
        self.cfg = cfg or AlgoStreamingConfig()
        self.count = 0
        self.listener = AlgoStreamingListenerFromPricing(self)

    def algo_publish_price(self, quote: PriceQuote) -> AlgoStream:
        half_spread = quote.bid_offer_spread / 2.0
        visible = (self.count % 2 + 1) * self.cfg.base_visible_quantity
        hidden = visible * self.cfg.hidden_ratio

        stream = PriceStream(
            product=quote.product,
            bid_order=PriceStreamOrder(
                price=quote.mid - half_spread,
                visible_quantity=visible,
                hidden_quantity=hidden,
                side="BID",
            ),
            offer_order=PriceStreamOrder(
                price=quote.mid + half_spread,
                visible_quantity=visible,
                hidden_quantity=hidden,
                side="OFFER",
            ),
        )
        algo = AlgoStream(price_stream=stream)
        self.count += 1
        self.on_message(algo)
        return algo


class AlgoStreamingListenerFromPricing:
    def __init__(self, service: AlgoStreamingService) -> None:
        self.downstream = service

    def process_add(self, data: PriceQuote) -> None:
        self.downstream.algo_publish_price(data)

    def process_remove(self, data: PriceQuote) -> None:
        return

    def process_update(self, data: PriceQuote) -> None:
        return
