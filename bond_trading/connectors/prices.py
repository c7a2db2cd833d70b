"""Price feed: ``product_id, bid, offer`` in fractional notation."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from bond_trading.connectors.records import iter_fields, read_lines, skip_record
from bond_trading.core.domain.price_codec import decode_price
from bond_trading.core.domain.reference_data import get_bond
from bond_trading.core.domain.types import PriceQuote
from bond_trading.services.pricing import PricingService

LOGGER = logging.getLogger(__name__)


class PricingConnector:
    """Parses the price feed into PriceQuotes: mid between bid and offer,
    spread equal to offer minus bid."""

    feed = "prices"

    def __init__(self, service: PricingService) -> None:
        self._service = service

    def subscribe(self, lines: Iterable[str]) -> int:
        """Publish one quote per valid record; return how many were published."""
        published = 0
        for line_no, fields in iter_fields(lines, feed=self.feed, min_fields=3):
            product_id, bid_text, offer_text = fields[:3]
            product = get_bond(product_id)
            try:
                bid = decode_price(bid_text)
                offer = decode_price(offer_text)
                quote = PriceQuote(
                    product=product,
                    mid=(bid + offer) / 2.0,
                    bid_offer_spread=offer - bid,
                )
            except ValueError as exc:
                skip_record(self.feed, line_no, exc)
                continue
            self._service.on_message(quote)
            published += 1

        LOGGER.info("feed processed", extra={"feed": self.feed, "published": published})
        return published

    def subscribe_file(self, path: str | Path) -> int:
        return self.subscribe(read_lines(path))
