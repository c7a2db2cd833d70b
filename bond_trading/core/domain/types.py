"""Core shared data models.

This module defines the canonical Pydantic models that flow through the
dataflow nodes: reference instruments, order book depth, execution orders,
internal prices and price streams, trades, positions, PV01 risk and customer
inquiries. All models are frozen: a value stored in one node can never be
mutated through a reference held by another node. Updates produce new values.

Each model renders itself to a list of strings (``to_strings``) in the field
order used by historical sinks; prices are rendered in 32nds notation.
"""

# pylint: disable=missing-class-docstring,missing-function-docstring
from __future__ import annotations

from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from bond_trading.core.domain.price_codec import encode_price

PricingSide = Literal["BID", "OFFER"]
TradeSide = Literal["BUY", "SELL"]
OrderType = Literal["FOK", "IOC", "MARKET", "LIMIT", "STOP"]
InquiryState = Literal["RECEIVED", "QUOTED", "DONE", "REJECTED", "CUSTOMER_REJECTED"]


# ---------------------------------------------------------------------------
# Reference data
# ---------------------------------------------------------------------------


class Bond(BaseModel):
    """A tradeable bond identified by its CUSIP."""

    product_id: str = Field(..., min_length=1)
    id_type: Literal["CUSIP", "ISIN"] = "CUSIP"
    ticker: str = ""
    coupon: float = 0.0
    maturity: date | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)


class BucketedSector(BaseModel):
    """A named group of bonds whose risk is aggregated together."""

    name: str = Field(..., min_length=1)
    products: tuple[Bond, ...] = ()

    model_config = ConfigDict(extra="forbid", frozen=True)

    @property
    def product_id(self) -> str:
        return self.name


# ---------------------------------------------------------------------------
# Market data
# ---------------------------------------------------------------------------


class Order(BaseModel):
    """One resting quote in an order book."""

    price: float = Field(0.0, ge=0)
    quantity: int = Field(0, ge=0)
    side: PricingSide = "BID"

    model_config = ConfigDict(extra="forbid", frozen=True)


class BidOffer(BaseModel):
    """Top-of-book snapshot. Derived from an OrderBook, never stored."""

    bid_order: Order
    offer_order: Order

    model_config = ConfigDict(extra="forbid", frozen=True)


class OrderBook(BaseModel):
    product: Bond
    bid_stack: tuple[Order, ...] = ()
    offer_stack: tuple[Order, ...] = ()

    model_config = ConfigDict(extra="forbid", frozen=True)

    @classmethod
    def empty(cls, product_id: str) -> OrderBook:
        return cls(product=Bond(product_id=product_id))

    @property
    def product_id(self) -> str:
        return self.product.product_id

    def get_bid_offer(self) -> BidOffer:
        """Return the best bid and best offer.

        The best bid is the highest-priced bid and the best offer the
        lowest-priced offer; on equal prices the first one scanned wins.
        An empty side yields a zero-price, zero-quantity Order, which callers
        must read as "no liquidity".
        """
        best_bid = Order(side="BID")
        best_bid_price = float("-inf")
        for order in self.bid_stack:
            if order.price > best_bid_price:
                best_bid_price = order.price
                best_bid = order

        best_offer = Order(side="OFFER")
        best_offer_price = float("inf")
        for order in self.offer_stack:
            if order.price < best_offer_price:
                best_offer_price = order.price
                best_offer = order

        return BidOffer(bid_order=best_bid, offer_order=best_offer)


# ---------------------------------------------------------------------------
# Execution
# ---------------------------------------------------------------------------


class ExecutionOrder(BaseModel):
    """An order sent to a venue, possibly a child of a parent decision."""

    product: Bond
    side: PricingSide
    order_id: str
    order_type: OrderType
    price: float = Field(..., ge=0)
    visible_quantity: int = Field(..., ge=0)
    hidden_quantity: int = Field(..., ge=0)
    parent_order_id: str = ""
    is_child_order: bool = False

    model_config = ConfigDict(extra="forbid", frozen=True)

    @model_validator(mode="after")
    def validate_parent_link(self) -> ExecutionOrder:
        """Child orders reference a parent; top-level orders do not."""
        if self.is_child_order and not self.parent_order_id:
            raise ValueError("child orders require a parent_order_id")
        if not self.is_child_order and self.parent_order_id:
            raise ValueError("top-level orders must not carry a parent_order_id")
        return self

    @classmethod
    def empty(cls, product_id: str) -> ExecutionOrder:
        return cls(
            product=Bond(product_id=product_id),
            side="BID",
            order_id="",
            order_type="MARKET",
            price=0.0,
            visible_quantity=0,
            hidden_quantity=0,
        )

    @property
    def product_id(self) -> str:
        return self.product.product_id

    def to_strings(self) -> list[str]:
        return [
            self.product_id,
            self.side,
            self.order_id,
            self.order_type,
            encode_price(self.price),
            str(self.visible_quantity),
            str(self.hidden_quantity),
            self.parent_order_id,
            "YES" if self.is_child_order else "NO",
        ]


class AlgoExecution(BaseModel):
    """Algo decision wrapping the execution order it produced."""

    execution_order: ExecutionOrder

    model_config = ConfigDict(extra="forbid", frozen=True)

    @classmethod
    def empty(cls, product_id: str) -> AlgoExecution:
        return cls(execution_order=ExecutionOrder.empty(product_id))

    @property
    def product_id(self) -> str:
        return self.execution_order.product_id


# ---------------------------------------------------------------------------
# Pricing and streaming
# ---------------------------------------------------------------------------


class PriceQuote(BaseModel):
    """Internal valuation: mid price and bid/offer spread around it."""

    product: Bond
    mid: float = 0.0
    bid_offer_spread: float = Field(0.0, ge=0)

    model_config = ConfigDict(extra="forbid", frozen=True)

    @model_validator(mode="after")
    def validate_two_sided(self) -> PriceQuote:
        """The bid implied by mid - spread / 2 must not be negative."""
        if self.mid < self.bid_offer_spread / 2.0:
            raise ValueError("mid must be at least half the bid/offer spread")
        return self

    @classmethod
    def empty(cls, product_id: str) -> PriceQuote:
        return cls(product=Bond(product_id=product_id))

    @property
    def product_id(self) -> str:
        return self.product.product_id

    def to_strings(self) -> list[str]:
        return [
            self.product_id,
            encode_price(self.mid),
            encode_price(self.bid_offer_spread),
        ]


class PriceStreamOrder(BaseModel):
    """One side of a quotable two-way stream."""

    price: float = Field(..., ge=0)
    visible_quantity: int = Field(..., ge=0)
    hidden_quantity: int = Field(..., ge=0)
    side: PricingSide

    model_config = ConfigDict(extra="forbid", frozen=True)

    def to_strings(self) -> list[str]:
        return [
            encode_price(self.price),
            str(self.visible_quantity),
            str(self.hidden_quantity),
        ]


class PriceStream(BaseModel):
    product: Bond
    bid_order: PriceStreamOrder
    offer_order: PriceStreamOrder

    model_config = ConfigDict(extra="forbid", frozen=True)

    @classmethod
    def empty(cls, product_id: str) -> PriceStream:
        return cls(
            product=Bond(product_id=product_id),
            bid_order=PriceStreamOrder(price=0.0, visible_quantity=0, hidden_quantity=0, side="BID"),
            offer_order=PriceStreamOrder(price=0.0, visible_quantity=0, hidden_quantity=0, side="OFFER"),
        )

    @property
    def product_id(self) -> str:
        return self.product.product_id

    def to_strings(self) -> list[str]:
        return [self.product_id, *self.bid_order.to_strings(), *self.offer_order.to_strings()]


class AlgoStream(BaseModel):
    """Algo decision wrapping the price stream it produced."""

    price_stream: PriceStream

    model_config = ConfigDict(extra="forbid", frozen=True)

    @classmethod
    def empty(cls, product_id: str) -> AlgoStream:
        return cls(price_stream=PriceStream.empty(product_id))

    @property
    def product_id(self) -> str:
        return self.price_stream.product_id


# ---------------------------------------------------------------------------
# Trades, positions, risk
# ---------------------------------------------------------------------------


class Trade(BaseModel):
    product: Bond
    trade_id: str
    price: float = Field(..., ge=0)
    book: str
    quantity: int = Field(..., ge=0)
    side: TradeSide

    model_config = ConfigDict(extra="forbid", frozen=True)

    @classmethod
    def empty(cls, trade_id: str) -> Trade:
        # A trade key is the trade id, not a product id.
        return cls(
            product=Bond(product_id="UNKNOWN"),
            trade_id=trade_id,
            price=0.0,
            book="",
            quantity=0,
            side="BUY",
        )

    @property
    def product_id(self) -> str:
        return self.product.product_id

    @property
    def signed_quantity(self) -> int:
        return self.quantity if self.side == "BUY" else -self.quantity

    def to_strings(self) -> list[str]:
        return [
            self.product_id,
            self.trade_id,
            encode_price(self.price),
            self.book,
            str(self.quantity),
            self.side,
        ]


class Position(BaseModel):
    """Running inventory of one product across books."""

    product: Bond
    positions: dict[str, int] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid", frozen=True)

    @classmethod
    def empty(cls, product_id: str) -> Position:
        return cls(product=Bond(product_id=product_id))

    @property
    def product_id(self) -> str:
        return self.product.product_id

    def get_position(self, book: str) -> int:
        return self.positions.get(book, 0)

    def get_aggregate_position(self) -> int:
        return sum(self.positions.values())

    def with_trade(self, book: str, signed_quantity: int) -> Position:
        """Return a new Position with ``signed_quantity`` added to ``book``."""
        positions = dict(self.positions)
        positions[book] = positions.get(book, 0) + signed_quantity
        return self.model_copy(update={"positions": positions})

    def to_strings(self) -> list[str]:
        out = [self.product_id]
        for book in sorted(self.positions):
            out.extend([book, str(self.positions[book])])
        return out


class PV01Risk(BaseModel):
    """PV01 exposure of a bond or of a bucketed sector.

    For a bucket the aggregate is carried in ``pv01`` and ``quantity`` is 1.
    """

    product: Bond | BucketedSector
    pv01: float = 0.0
    quantity: int = 0

    model_config = ConfigDict(extra="forbid", frozen=True)

    @classmethod
    def empty(cls, product_id: str) -> PV01Risk:
        return cls(product=Bond(product_id=product_id))

    @property
    def product_id(self) -> str:
        return self.product.product_id

    @property
    def exposure(self) -> float:
        return self.pv01 * self.quantity

    def to_strings(self) -> list[str]:
        return [self.product_id, str(self.pv01), str(self.quantity)]


# ---------------------------------------------------------------------------
# Customer inquiries
# ---------------------------------------------------------------------------


class Inquiry(BaseModel):
    inquiry_id: str = Field(..., min_length=1)
    product: Bond
    side: TradeSide
    quantity: int = Field(..., ge=0)
    price: float = Field(..., ge=0)
    state: InquiryState = "RECEIVED"

    model_config = ConfigDict(extra="forbid", frozen=True)

    @classmethod
    def empty(cls, inquiry_id: str) -> Inquiry:
        return cls(
            inquiry_id=inquiry_id,
            product=Bond(product_id="UNKNOWN"),
            side="BUY",
            quantity=0,
            price=0.0,
        )

    @property
    def product_id(self) -> str:
        return self.product.product_id

    def to_strings(self) -> list[str]:
        return [
            self.inquiry_id,
            self.product_id,
            self.side,
            str(self.quantity),
            encode_price(self.price),
            self.state,
        ]
