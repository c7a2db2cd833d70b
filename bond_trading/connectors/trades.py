"""Trade feed: ``product_id, trade_id, price, book, quantity, side``."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from bond_trading.connectors.records import (
    iter_fields,
    parse_quantity,
    parse_trade_side,
    read_lines,
    skip_record,
)
from bond_trading.core.domain.price_codec import decode_price
from bond_trading.core.domain.reference_data import get_bond
from bond_trading.core.domain.types import Trade
from bond_trading.services.trade_booking import TradeBookingService

LOGGER = logging.getLogger(__name__)


class TradeBookingConnector:
    feed = "trades"

    def __init__(self, service: TradeBookingService) -> None:
        self._service = service

    def subscribe(self, lines: Iterable[str]) -> int:
        published = 0
        for line_no, fields in iter_fields(lines, feed=self.feed, min_fields=6):
            product_id, trade_id, price_text, book, quantity_text, side_text = fields[:6]
            product = get_bond(product_id)
            try:
                trade = Trade(
                    product=product,
                    trade_id=trade_id,
                    price=decode_price(price_text),
                    book=book,
                    quantity=parse_quantity(quantity_text),
                    side=parse_trade_side(side_text),
                )
            except ValueError as exc:
                skip_record(self.feed, line_no, exc)
                continue
            self._service.book_trade(trade)
            published += 1

        LOGGER.info("feed processed", extra={"feed": self.feed, "published": published})
        return published

    def subscribe_file(self, path: str | Path) -> int:
        return self.subscribe(read_lines(path))
