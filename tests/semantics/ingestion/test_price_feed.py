"""
Semantic test: price feed parsing.

Invariant:
A price record becomes a PriceQuote with mid = (bid + offer) / 2 and
spread = offer - bid; blank lines are ignored.
"""

from __future__ import annotations

from bond_trading.connectors.prices import PricingConnector
from bond_trading.services.pricing import PricingService


def test_price_record_to_quote() -> None:
    service = PricingService()
    connector = PricingConnector(service)

    published = connector.subscribe(["9128283H1,99-160,99-162\n", "\n", "912810RZ3,98-00+,98-01+"])

    assert published == 2
    quote = service.peek("9128283H1")
    assert quote.mid == 99.5 + 1 / 256
    assert quote.bid_offer_spread == 2 / 256
    assert service.peek("912810RZ3").bid_offer_spread == 1 / 32


def test_price_file(tmp_path) -> None:
    path = tmp_path / "prices.txt"
    path.write_text("9128283F5,100-000,100-002\n", encoding="utf-8")
    service = PricingService()

    assert PricingConnector(service).subscribe_file(path) == 1
    assert service.peek("9128283F5").mid == 100.0 + 1 / 256
