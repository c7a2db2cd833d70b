"""Internal price store, keyed on product id."""

from __future__ import annotations

from bond_trading.core.domain.types import PriceQuote
from bond_trading.core.events.node import DataflowNode


class PricingService(DataflowNode[str, PriceQuote]):
    def __init__(self) -> None:
        super().__init__(
            "pricing",
            key_fn=lambda quote: quote.product_id,
            default_factory=PriceQuote.empty,
        )
