"""
Semantic test: malformed and unknown records.

Invariant:
Malformed records are skipped with a warning and processing continues;
an unknown product id aborts ingestion with UnknownInstrumentError.
"""

from __future__ import annotations

import logging

import pytest

from bond_trading.connectors.market_data import MarketDataConnector
from bond_trading.connectors.prices import PricingConnector
from bond_trading.connectors.trades import TradeBookingConnector
from bond_trading.core.domain.reference_data import UnknownInstrumentError
from bond_trading.services.market_data import MarketDataService
from bond_trading.services.pricing import PricingService
from bond_trading.services.trade_booking import TradeBookingService


def test_malformed_price_records_skipped(caplog: pytest.LogCaptureFixture) -> None:
    service = PricingService()

    with caplog.at_level(logging.WARNING):
        published = PricingConnector(service).subscribe(
            [
                "9128283H1,99-160",  # too few fields
                "9128283H1,99-1x0,99-162",  # bad price text
                "9128283H1,99-162,99-160",  # crossed: negative spread
                "9128283L2,99-160,99-162",
            ]
        )

    assert published == 1
    assert service.keys() == ["9128283L2"]
    assert sum("malformed record skipped" in r.getMessage() for r in caplog.records) == 3


def test_bad_quantity_skipped() -> None:
    booking = TradeBookingService()

    published = TradeBookingConnector(booking).subscribe(
        [
            "9128283H1,T1,99-160,TRSY1,lots,BUY",
            "9128283H1,T2,99-160,TRSY1,-5,BUY",
            "9128283H1,T3,99-160,TRSY1,5,BUY",
        ]
    )

    assert published == 1
    assert booking.keys() == ["T3"]


def test_unknown_cusip_raises() -> None:
    connector = MarketDataConnector(MarketDataService())

    with pytest.raises(UnknownInstrumentError):
        connector.subscribe(["XXXXXXXXX,99-160,1000000,BID"])


def test_unknown_pricing_side_is_offer() -> None:
    service = MarketDataService(book_depth=1)
    connector = MarketDataConnector(service)

    connector.subscribe(["9128283H1,99-160,1,BID", "9128283H1,99-162,1,ASK"])

    book = service.peek("9128283H1")
    assert len(book.offer_stack) == 1
    assert book.offer_stack[0].side == "OFFER"
