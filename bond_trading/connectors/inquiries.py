"""Inquiry feed: ``inquiry_id, product_id, side, quantity, price[, state]``.

Every inquiry enters the system RECEIVED; a state column, if present, is
ignored.
"""

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
from bond_trading.core.domain.types import Inquiry
from bond_trading.services.inquiry import InquiryService

LOGGER = logging.getLogger(__name__)


class InquiryConnector:
    feed = "inquiries"

    def __init__(self, service: InquiryService) -> None:
        self._service = service

    def subscribe(self, lines: Iterable[str]) -> int:
        published = 0
        for line_no, fields in iter_fields(lines, feed=self.feed, min_fields=5):
            inquiry_id, product_id, side_text, quantity_text, price_text = fields[:5]
            product = get_bond(product_id)
            try:
                inquiry = Inquiry(
                    inquiry_id=inquiry_id,
                    product=product,
                    side=parse_trade_side(side_text),
                    quantity=parse_quantity(quantity_text),
                    price=decode_price(price_text),
                    state="RECEIVED",
                )
            except ValueError as exc:
                skip_record(self.feed, line_no, exc)
                continue
            self._service.on_message(inquiry)
            published += 1

        LOGGER.info("feed processed", extra={"feed": self.feed, "published": published})
        return published

    def subscribe_file(self, path: str | Path) -> int:
        return self.subscribe(read_lines(path))
